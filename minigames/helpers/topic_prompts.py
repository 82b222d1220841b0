# Prompt templates for topic and word generation

from ..config import MAX_TOPIC_WORDS, MAX_WORD_LENGTH, MIN_WORD_LENGTH


class TopicPromptManager:

    def get_words_prompt(self, topic):
        return f"""Generate words for a word search puzzle about the topic: "{topic}".

Follow these rules EXACTLY:

GOAL:
Return UP TO {MAX_TOPIC_WORDS} single words that are clearly related to "{topic}". Generate as many relevant words as possible, but don't force it if the topic is too narrow.

FORMAT:
Return ONLY valid JSON (no markdown, no comments, no explanations).
Structure:
{{"words": ["WORD1","WORD2","WORD3",...]}}

HARD CONSTRAINTS:
- Words must be UPPERCASE A-Z, {MIN_WORD_LENGTH}-{MAX_WORD_LENGTH} letters each.
- No duplicates. No hyphens, spaces, numbers, or punctuation.
- All words must be directly related to the topic.

STRATEGY:
A) Normalize the topic: trim whitespace, translate to English internally, extract the core concept of multi-word topics.
B) Build a candidate pool: synonyms, key terms, tools, parts, actions, subtypes, and short famous terms linked to the topic.
C) If a great term is too long, choose a closely related shorter term.
D) Quality over quantity: 6 highly relevant words beat {MAX_TOPIC_WORDS} loosely related ones.
E) Final check for ALL words: related to topic, {MIN_WORD_LENGTH}-{MAX_WORD_LENGTH} letters, uppercase A-Z only, no duplicates.
"""

    def get_topic_prompt(self, recent_topics):
        exclusion_list = ", ".join(f'"{t}"' for t in recent_topics) if recent_topics else ""
        return f"""You are selecting a topic for a fast, family-friendly multiplayer word search puzzle.

Return EXACTLY ONE topic that follows ALL rules:

1. The topic must be:
   - 1 to 3 English words.
   - Concrete and easy to understand.
   - Suitable for a general audience (no NSFW, no politics, no religion, no brands, no celebrities).
   - Rich enough to generate at least 8 clearly related words ({MIN_WORD_LENGTH}-{MAX_WORD_LENGTH} letters, uppercase A-Z only).

2. Variety requirements:
   - The topic MUST NOT be any of the following recently used topics:
     [{exclusion_list}]
   - Prefer topics from areas like animals, nature, space, science, food, sports, music, geography, weather, ocean, history, art.

3. Output format:
   - Return ONLY valid JSON. No markdown, no comments, no explanations.
   - Structure: {{"topic": "YOUR_TOPIC"}}

Now respond with the JSON only.
"""


topic_prompt_manager = TopicPromptManager()
