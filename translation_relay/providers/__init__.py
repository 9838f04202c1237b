from translation_relay.providers.factory import Providers, create_providers
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

__all__ = [
    "Providers",
    "create_providers",
    "TranslationProvider",
    "OpenAITranslationProvider",
    "MockTranslationProvider",
    "TranscriptionProvider",
    "OpenAITranscriptionProvider",
    "MockTranscriptionProvider",
]
