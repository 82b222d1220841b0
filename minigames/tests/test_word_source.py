import random
from unittest.mock import MagicMock, patch

from django.test import SimpleTestCase, override_settings
from openai import OpenAIError

from minigames.config import FALLBACK_TOPICS
from minigames.helpers import llm_utils
from minigames.helpers.llm_utils import LLMServiceError
from minigames.helpers.word_source import (
    InvalidTopic,
    WordSourceError,
    build_puzzle,
    generate_words_for_topic,
    parse_topic_response,
    parse_words_response,
    select_topic,
)
from minigames.tests.utils import ScriptedRandom

INVOKE_LLM = "minigames.helpers.word_source.invoke_llm"


class ParseWordsResponseTests(SimpleTestCase):

    def test_json_payload(self):
        text = 'Sure! {"words": ["whale", "Coral", "REEF"]} Enjoy.'
        self.assertEqual(parse_words_response(text), ["WHALE", "CORAL", "REEF"])

    def test_filters_invalid_words(self):
        text = '{"words": ["OK", "SEAHORSES", "SEA-LION", "TIDE", " kelp ", "ANEMONE1"]}'
        self.assertEqual(parse_words_response(text), ["TIDE", "KELP"])

    def test_caps_at_twelve_words(self):
        words = [f"W{chr(65 + i)}X" for i in range(20)]
        text = '{"words": %s}' % str(words).replace("'", '"')
        self.assertEqual(len(parse_words_response(text)), 12)

    def test_falls_back_to_uppercase_tokens(self):
        text = "Here you go: WHALE, SHARK and CORAL are great. not json"
        self.assertEqual(parse_words_response(text), ["WHALE", "SHARK", "CORAL"])

    def test_broken_json_falls_back_to_tokens(self):
        text = '{"words": ["WHALE", "SHARK",}'
        self.assertEqual(parse_words_response(text), ["WHALE", "SHARK"])

    def test_nothing_usable(self):
        with self.assertRaises(WordSourceError):
            parse_words_response("sorry, i cannot help with that")

    def test_nothing_left_after_filtering(self):
        with self.assertRaises(WordSourceError):
            parse_words_response('{"words": ["AB", "TOOLONGWORD"]}')


class ParseTopicResponseTests(SimpleTestCase):

    def test_reads_topic(self):
        self.assertEqual(parse_topic_response('{"topic": "rain forest"}'), "RAIN FOREST")

    def test_rejects_recent_topic(self):
        with self.assertRaises(WordSourceError):
            parse_topic_response('{"topic": "Ocean"}', ["OCEAN"])

    def test_rejects_missing_topic(self):
        with self.assertRaises(WordSourceError):
            parse_topic_response('{"subject": "ocean"}')
        with self.assertRaises(WordSourceError):
            parse_topic_response("ocean")

    def test_rejects_too_short_topic(self):
        with self.assertRaises(WordSourceError):
            parse_topic_response('{"topic": "AI"}')


class GenerateWordsForTopicTests(SimpleTestCase):

    def test_short_topic_rejected_without_llm_call(self):
        with patch(INVOKE_LLM) as invoke:
            for topic in (None, "", "  ab  "):
                with self.assertRaises(InvalidTopic):
                    generate_words_for_topic(topic)
            invoke.assert_not_called()

    @patch(INVOKE_LLM, return_value='{"words": ["PLANET", "COMET"]}')
    def test_prompt_mentions_topic(self, invoke):
        self.assertEqual(generate_words_for_topic("  space  "), ["PLANET", "COMET"])
        prompt = invoke.call_args[0][0]
        self.assertIn('"space"', prompt)


class SelectTopicTests(SimpleTestCase):

    @patch(INVOKE_LLM, return_value='{"topic": "Volcanoes"}')
    def test_llm_topic(self, invoke):
        self.assertEqual(select_topic(["ocean"]), "VOLCANOES")
        self.assertIn('"OCEAN"', invoke.call_args[0][0])

    @patch(INVOKE_LLM, side_effect=LLMServiceError("timed out"))
    def test_fallback_skips_recent_topics(self, invoke):
        topic = select_topic(["animals"], rng=ScriptedRandom([0]))
        self.assertEqual(topic, "OCEAN")

    @patch(INVOKE_LLM, return_value='{"topic": "ANIMALS"}')
    def test_repeated_topic_uses_fallback(self, invoke):
        topic = select_topic(["ANIMALS"], rng=random.Random(4))
        self.assertIn(topic, FALLBACK_TOPICS)
        self.assertNotEqual(topic, "ANIMALS")

    @patch(INVOKE_LLM, return_value='{"topic": "AI"}')
    def test_too_short_topic_uses_fallback(self, invoke):
        self.assertEqual(select_topic([], rng=ScriptedRandom([1])), "OCEAN")

    @patch(INVOKE_LLM, side_effect=LLMServiceError("down"))
    def test_last_resort_when_all_fallbacks_used(self, invoke):
        self.assertEqual(select_topic(FALLBACK_TOPICS), "ANIMALS")


class BuildPuzzleTests(SimpleTestCase):

    @patch(INVOKE_LLM, return_value='{"words": ["PLANET", "COMET", "ORBIT"]}')
    def test_bundle_shape(self, invoke):
        puzzle = build_puzzle(" Space ", grid_size=10, rng=random.Random(2))

        self.assertEqual(puzzle["topic"], "Space")
        self.assertEqual(len(puzzle["grid"]), 10)
        self.assertTrue(all(len(row) == 10 for row in puzzle["grid"]))
        self.assertEqual(set(puzzle["words"]), {"PLANET", "COMET", "ORBIT"})
        self.assertEqual([p["word"] for p in puzzle["placements"]], puzzle["words"])


class LLMClientTests(SimpleTestCase):

    def setUp(self):
        llm_utils._client = None
        llm_utils._client_config = None
        self.addCleanup(setattr, llm_utils, "_client", None)
        self.addCleanup(setattr, llm_utils, "_client_config", None)

    @override_settings(OPENROUTER_API_KEY=None)
    def test_missing_api_key(self):
        with self.assertRaises(LLMServiceError):
            llm_utils.invoke_llm("hello")

    @override_settings(OPENROUTER_API_KEY="test-key")
    def test_empty_reply_is_an_error(self):
        with patch.object(llm_utils, "send_llm_messages") as send:
            send.return_value.content = "   "
            with self.assertRaises(LLMServiceError):
                llm_utils.invoke_llm("hello")

    @override_settings(OPENROUTER_API_KEY="test-key")
    def test_sdk_error_becomes_service_error(self):
        client = MagicMock()
        client.chat.completions.create.side_effect = OpenAIError("boom")
        with patch.object(llm_utils, "get_client", return_value=client):
            with self.assertRaises(LLMServiceError):
                llm_utils.invoke_llm("hello")

    @override_settings(OPENROUTER_API_KEY="test-key")
    def test_reply_without_choices_is_an_error(self):
        client = MagicMock()
        client.chat.completions.create.return_value.choices = []
        with patch.object(llm_utils, "get_client", return_value=client):
            with self.assertRaises(LLMServiceError):
                llm_utils.invoke_llm("hello")

    def test_client_rebuilt_when_settings_change(self):
        with override_settings(OPENROUTER_API_KEY="first-key"):
            first = llm_utils.get_client()
            self.assertIs(llm_utils.get_client(), first)
        with override_settings(OPENROUTER_API_KEY="second-key"):
            second = llm_utils.get_client()

        self.assertIsNot(first, second)
        self.assertEqual(second.api_key, "second-key")
