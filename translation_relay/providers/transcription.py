"""
Speech-to-text providers.
"""

from typing import Protocol

import httpx

from translation_relay.constants import MOCK_TRANSCRIPT
from translation_relay.exceptions import ProviderError
from translation_relay.logging import logger


class TranscriptionProvider(Protocol):
    async def transcribe(
        self, audio: bytes, filename: str, content_type: str
    ) -> str:
        """Return the text recognized in `audio`."""
        ...


class OpenAITranscriptionProvider:
    """
    Transcription through the OpenAI audio transcriptions API (Whisper).

    Args:
        client: HTTP client with the API base URL and credentials set.
        model: Transcription model name.
    """

    def __init__(self, client: httpx.AsyncClient, model: str = "whisper-1"):
        self.client = client
        self.model = model

    async def transcribe(
        self, audio: bytes, filename: str, content_type: str
    ) -> str:
        try:
            response = await self.client.post(
                "/audio/transcriptions",
                data={"model": self.model},
                files={"file": (filename, audio, content_type)},
            )
            response.raise_for_status()
            text = response.json()["text"]
        except httpx.HTTPError as ex:
            logger.error(f"Transcription request failed: {ex}")
            raise ProviderError(f"Transcription error: {ex}") from ex
        except (KeyError, TypeError, ValueError) as ex:
            logger.error(f"Unexpected transcription response: {ex}")
            raise ProviderError(
                "Transcription error: unexpected provider response"
            ) from ex

        return text.strip()


class MockTranscriptionProvider:
    """Returns a fixed transcript. Used without an API key."""

    async def transcribe(
        self, audio: bytes, filename: str, content_type: str
    ) -> str:
        return MOCK_TRANSCRIPT
