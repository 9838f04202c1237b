from dataclasses import dataclass

import httpx

from translation_relay.logging import logger
from translation_relay.providers.transcription import (
    MockTranscriptionProvider,
    OpenAITranscriptionProvider,
    TranscriptionProvider,
)
from translation_relay.providers.translation import (
    MockTranslationProvider,
    OpenAITranslationProvider,
    TranslationProvider,
)
from translation_relay.settings import Settings, app_settings


@dataclass
class Providers:
    """Translation and transcription providers plus the HTTP client they share."""

    translator: TranslationProvider
    transcriber: TranscriptionProvider
    client: httpx.AsyncClient | None = None

    async def aclose(self) -> None:
        if self.client is not None:
            await self.client.aclose()


def create_providers(settings: Settings = app_settings) -> Providers:
    """
    Build the providers for the configured environment.

    Uses the OpenAI API when an `sk-` key is configured, the mock providers
    otherwise.
    """
    if not settings.openai_enabled:
        logger.warning(
            "OpenAI API key not found, using mock translation and "
            "transcription providers"
        )
        return Providers(
            translator=MockTranslationProvider(),
            transcriber=MockTranscriptionProvider(),
        )

    client = httpx.AsyncClient(
        base_url=settings.OPENAI_BASE_URL,
        headers={"Authorization": f"Bearer {settings.OPENAI_API_KEY}"},
        timeout=settings.PROVIDER_TIMEOUT_SECONDS,
    )
    logger.info("OpenAI translation and transcription providers configured")

    return Providers(
        translator=OpenAITranslationProvider(
            client, model=settings.TRANSLATION_MODEL
        ),
        transcriber=OpenAITranscriptionProvider(
            client, model=settings.TRANSCRIPTION_MODEL
        ),
        client=client,
    )
