# llm_utils.py

import logging

from django.conf import settings
from openai import OpenAI, OpenAIError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "amazon/nova-2-lite-v1"
DEFAULT_TIMEOUT_SECONDS = 30.0

# Optional attribution headers understood by OpenRouter
EXTRA_HEADERS = {
    "HTTP-Referer": "https://wordsearch.app",
    "X-Title": "Word Search Generator",
}


class LLMServiceError(Exception):
    pass


_client = None
_client_config = None


def get_client():
    # Built lazily so the app imports without an API key configured;
    # rebuilt whenever the key, base URL or timeout settings change
    global _client, _client_config
    api_key = getattr(settings, "OPENROUTER_API_KEY", None)
    if not api_key:
        raise LLMServiceError("OPENROUTER_API_KEY is not set. Please set it in your environment variables.")
    config = (
        api_key,
        getattr(settings, "OPENROUTER_BASE_URL", DEFAULT_BASE_URL),
        getattr(settings, "LLM_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
    )
    if _client is None or config != _client_config:
        _client = OpenAI(api_key=config[0], base_url=config[1], timeout=config[2])
        _client_config = config
    return _client


def send_llm_messages(messages, model=None, timeout=None, **kwargs):
    # Send chat messages to the configured model and return the first choice's message
    params = {
        "model": model or getattr(settings, "OPENROUTER_MODEL", DEFAULT_MODEL),
        "messages": messages,
        "extra_headers": EXTRA_HEADERS,
    }
    if timeout is not None:
        params["timeout"] = timeout
    params.update(kwargs)
    try:
        response = get_client().chat.completions.create(**params)
    except OpenAIError as e:
        logger.error(f"LLM call failed: {e}")
        raise LLMServiceError(f"Failed to call LLM API: {e}") from e
    if not response.choices:
        raise LLMServiceError("LLM API returned no choices")
    return response.choices[0].message


def invoke_llm(prompt, model=None, timeout=None, **kwargs):
    # One-shot user prompt, returns the reply text
    message = send_llm_messages([{"role": "user", "content": prompt}], model=model, timeout=timeout, **kwargs)
    content = (message.content or "").strip()
    if not content:
        raise LLMServiceError("LLM API returned empty response")
    return content
