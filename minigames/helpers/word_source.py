# Turns a topic into a packable word list and picks quick-match topics

import json
import logging
import random
import re
from typing import Iterable, List, Optional

from ..config import (
    DEFAULT_GRID_SIZE,
    FALLBACK_TOPICS,
    LAST_RESORT_TOPIC,
    MAX_PLACEMENT_ATTEMPTS,
    MAX_TOPIC_WORDS,
    MAX_WORD_LENGTH,
    MIN_TOPIC_LENGTH,
    MIN_WORD_LENGTH,
)
from ..game_logic.wordsearch import generate_word_search
from .llm_utils import LLMServiceError, invoke_llm
from .topic_prompts import topic_prompt_manager

logger = logging.getLogger(__name__)

JSON_OBJECT_PATTERN = re.compile(r'\{[\s\S]*\}')
VALID_WORD_PATTERN = re.compile(r'^[A-Z]+$')
LOOSE_WORD_PATTERN = re.compile(rf'\b[A-Z]{{{MIN_WORD_LENGTH},{MAX_WORD_LENGTH}}}\b')


class WordSourceError(Exception):
    pass


class InvalidTopic(WordSourceError):
    pass


def _extract_json_object(text: str) -> Optional[dict]:
    match = JSON_OBJECT_PATTERN.search(text or "")
    if not match:
        return None
    try:
        payload = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        logger.warning(f"Failed to parse JSON in LLM response: {e}")
        return None
    return payload if isinstance(payload, dict) else None


def clean_words(words: Iterable) -> List[str]:
    cleaned = []
    for word in words:
        word = str(word).upper().strip()
        if MIN_WORD_LENGTH <= len(word) <= MAX_WORD_LENGTH and VALID_WORD_PATTERN.match(word):
            cleaned.append(word)
    return cleaned[:MAX_TOPIC_WORDS]


def parse_words_response(text: str) -> List[str]:
    """
    Pull the word list out of an LLM reply.

    Reads ``{"words": [...]}`` when present, otherwise scrapes uppercase
    tokens of valid length from the raw text.

    Raises:
        WordSourceError: if no usable words remain
    """
    payload = _extract_json_object(text)
    words = payload.get("words") if payload else None
    if not isinstance(words, list):
        words = []

    if not words:
        words = LOOSE_WORD_PATTERN.findall(text or "")[:MAX_TOPIC_WORDS]
        if words:
            logger.info(f"Extracted words from text: {words}")

    if not words:
        raise WordSourceError("No words found in response")

    words = clean_words(words)
    if not words:
        raise WordSourceError("No valid words found after filtering")
    return words


def parse_topic_response(text: str, recent_topics: Iterable[str] = ()) -> str:
    payload = _extract_json_object(text)
    if payload is None:
        raise WordSourceError("No JSON detected in topic response")
    topic = str(payload.get("topic") or "").strip().upper()
    if not topic:
        raise WordSourceError("Topic missing in response")
    if len(topic) < MIN_TOPIC_LENGTH:
        raise WordSourceError(f"Returned topic {topic!r} is shorter than {MIN_TOPIC_LENGTH} characters")
    if topic in {t.upper() for t in recent_topics}:
        raise WordSourceError("Returned topic repeats recent topics")
    return topic


def validate_topic(topic) -> str:
    if not isinstance(topic, str) or len(topic.strip()) < MIN_TOPIC_LENGTH:
        raise InvalidTopic(f"Topic must be at least {MIN_TOPIC_LENGTH} characters")
    return topic.strip()


def generate_words_for_topic(topic, timeout=None) -> List[str]:
    topic = validate_topic(topic)
    text = invoke_llm(topic_prompt_manager.get_words_prompt(topic), timeout=timeout)
    logger.debug(f"LLM word search response: {text[:300]}")

    words = parse_words_response(text)
    logger.info(f"Generated {len(words)} words for topic: {topic}")
    return words


def select_topic(recent_topics: Iterable[str] = (), rng=None, timeout=None) -> str:
    """Ask the LLM for a fresh topic, falling back to a fixed list on failure."""
    exclusions = [t.upper() for t in recent_topics if isinstance(t, str) and t]

    try:
        text = invoke_llm(topic_prompt_manager.get_topic_prompt(exclusions), timeout=timeout)
        return parse_topic_response(text, exclusions)
    except (LLMServiceError, WordSourceError) as e:
        logger.warning(f"Quick match topic selection failed: {e}")

    available = [t for t in FALLBACK_TOPICS if t not in exclusions]
    if not available:
        return LAST_RESORT_TOPIC
    rng = rng if rng is not None else random.Random()
    topic = available[rng.randrange(len(available))]
    logger.info(f"Using fallback topic: {topic}")
    return topic


def build_puzzle(topic, grid_size=DEFAULT_GRID_SIZE, rng=None,
                 max_attempts=MAX_PLACEMENT_ATTEMPTS, timeout=None) -> dict:
    words = generate_words_for_topic(topic, timeout=timeout)
    result = generate_word_search(words, grid_size=grid_size, rng=rng, max_attempts=max_attempts)

    missing = result.missing_words(words)
    if missing:
        logger.info(f"{len(missing)} of {len(words)} words did not fit for topic {topic!r}: {missing}")

    puzzle = result.to_dict()
    puzzle["topic"] = topic.strip()
    return puzzle
