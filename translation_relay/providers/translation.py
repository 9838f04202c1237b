"""
Text translation providers.

The relay core never calls these; they serve the HTTP translation endpoint
and the audio pipeline, which submits the result as a translation event.
"""

from typing import Protocol

import httpx

from translation_relay.constants import (
    TRANSLATION_MAX_TOKENS,
    TRANSLATION_TEMPERATURE,
)
from translation_relay.exceptions import ProviderError
from translation_relay.logging import logger

LANGUAGE_NAMES = {
    "ar": "Arabic",
    "de": "German",
    "en": "English",
    "es": "Spanish",
    "fr": "French",
    "it": "Italian",
    "ja": "Japanese",
    "ru": "Russian",
    "tr": "Turkish",
    "zh": "Chinese",
}


class TranslationProvider(Protocol):
    async def translate(self, text: str, target_language: str) -> str:
        """Translate `text` into the language identified by `target_language`."""
        ...


def build_system_prompt(target_language: str) -> str:
    language = LANGUAGE_NAMES.get(target_language.lower(), target_language)
    return (
        "You are a professional translator. Translate the given text into "
        f"natural and fluent {language}. Only return the translation, "
        "no explanations."
    )


class OpenAITranslationProvider:
    """
    Translation through the OpenAI chat completions API.

    Args:
        client: HTTP client with the API base URL and credentials set.
        model: Chat model name.
    """

    def __init__(self, client: httpx.AsyncClient, model: str = "gpt-4"):
        self.client = client
        self.model = model

    async def translate(self, text: str, target_language: str) -> str:
        payload = {
            "model": self.model,
            "messages": [
                {
                    "role": "system",
                    "content": build_system_prompt(target_language),
                },
                {"role": "user", "content": text},
            ],
            "max_tokens": TRANSLATION_MAX_TOKENS,
            "temperature": TRANSLATION_TEMPERATURE,
        }

        try:
            response = await self.client.post(
                "/chat/completions", json=payload
            )
            response.raise_for_status()
            content = response.json()["choices"][0]["message"]["content"]
        except httpx.HTTPError as ex:
            logger.error(f"Translation request failed: {ex}")
            raise ProviderError(f"Translation error: {ex}") from ex
        except (KeyError, IndexError, TypeError, ValueError) as ex:
            logger.error(f"Unexpected translation response: {ex}")
            raise ProviderError(
                "Translation error: unexpected provider response"
            ) from ex

        return content.strip()


class MockTranslationProvider:
    """Tags the text with the target language. Used without an API key."""

    async def translate(self, text: str, target_language: str) -> str:
        return f"[{target_language}] {text}"
