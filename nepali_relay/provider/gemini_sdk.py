"""
Helpers for calling Google Gemini via the official google-genai SDK.

The SDK client is synchronous, so calls run in a worker thread to keep the
event loop free.
"""

from __future__ import annotations

from typing import Any, Optional

import anyio

from ..logging_config import get_logger
from ..settings import settings

logger = get_logger("provider.gemini")

MODEL_NOT_INITIALIZED = "AI Model not initialized (Check API Key)"

TRANSLITERATION_PROMPT = """
You are a Nepali transliteration engine. Convert Romanized Nepali
("Nepanglish") into formal Nepali written in Devanagari Unicode.

RULES:
1. Read the whole sentence and use its meaning to pick spellings.
2. Chat-style spellings are common: 'x', 'xa', 'xha' and 'cha' all mean 'छ'.
3. Reply with the Nepali text ONLY. No explanations, no quotes.

EXAMPLES:
- "timi k gardai xau" -> "तिमी के गर्दै छौ"
- "ma xa" -> "म छ"
- "ramro xa" -> "राम्रो छ"
- "malaai xha" -> "मलाई छ"
- "khana khayau?" -> "खाना खायौ?"
- "mero nam milan ho" -> "मेरो नाम मिलन हो"
- "tapai ko ghar kaha ho" -> "तपाईंको घर कहाँ हो"
- "cha" -> "छ"

INPUT TO CONVERT: "{text}"
"""


class GeminiError(Exception):
    """Raised when the google-genai SDK is unavailable or returns an error."""


class GeminiNotConfigured(GeminiError):
    """Raised when no Gemini API key is configured."""


def _create_client(api_key: str):
    try:
        from google import genai  # type: ignore
    except ImportError as exc:  # pragma: no cover - import guard
        raise GeminiError(
            "google-genai is not installed: pip install google-genai"
        ) from exc

    try:
        return genai.Client(api_key=api_key)
    except Exception as exc:  # pragma: no cover
        raise GeminiError(f"Failed to initialise google-genai: {exc}") from exc


def build_prompt(text: str) -> str:
    return TRANSLITERATION_PROMPT.format(text=text)


def _response_text(response: Any) -> str:
    text: Optional[str] = getattr(response, "text", None)
    if text is None:
        raise GeminiError("Gemini returned no text")
    return text


async def generate_nepali(text: str, *, model_id: Optional[str] = None) -> str:
    """
    Ask Gemini to convert Nepanglish to Nepali Unicode; returns stripped text.
    """
    if not settings.gemini_configured:
        raise GeminiNotConfigured(MODEL_NOT_INITIALIZED)

    client = _create_client(settings.gemini_api_key or "")
    model = model_id or settings.gemini_model
    prompt = build_prompt(text)

    def _call():
        return client.models.generate_content(model=model, contents=prompt)

    try:
        response = await anyio.to_thread.run_sync(_call)
    except Exception as exc:
        raise GeminiError(str(exc)) from exc

    result = _response_text(response).strip()
    logger.debug(
        "model=%s, %d chars out", model, len(result), extra={"upstream": "gemini"}
    )
    return result
