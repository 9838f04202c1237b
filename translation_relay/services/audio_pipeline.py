import base64
import binascii

from translation_relay.constants import (
    AUDIO_CHUNK_CONTENT_TYPE,
    AUDIO_CHUNK_FILENAME,
    AUTO_DETECTED_LANGUAGE,
)
from translation_relay.exceptions import InvalidAudioError
from translation_relay.logging import logger
from translation_relay.providers.transcription import TranscriptionProvider
from translation_relay.providers.translation import TranslationProvider
from translation_relay.schemas.events import TranslationSubmission


class AudioTranslationPipeline:
    """
    Turns a recorded audio chunk into a translation submission.

    The chunk is transcribed, the transcript translated, and the pair
    returned for the caller to submit to its room. Provider calls happen
    here, outside of any room lock.
    """

    def __init__(
        self,
        transcriber: TranscriptionProvider,
        translator: TranslationProvider,
        default_target_language: str = "en",
    ) -> None:
        self.transcriber = transcriber
        self.translator = translator
        self.default_target_language = default_target_language

    async def process(
        self, audio_data: str, target_language: str | None = None
    ) -> TranslationSubmission | None:
        """
        Transcribe and translate a base64 encoded audio chunk.

        Args:
            audio_data: Base64 audio, optionally as a `data:` URL.
            target_language: Language to translate into, defaults to the
                pipeline default.

        Returns:
            The submission, or None when nothing was recognized.

        Raises:
            InvalidAudioError: The data is empty or not valid base64.
            ProviderError: Transcription or translation failed.
        """
        audio = decode_audio(audio_data)
        logger.debug(f"Audio chunk received, {len(audio)} bytes")

        transcript = await self.transcriber.transcribe(
            audio, AUDIO_CHUNK_FILENAME, AUDIO_CHUNK_CONTENT_TYPE
        )
        transcript = transcript.strip()
        if not transcript:
            logger.info("Empty transcript, nothing to translate")
            return None

        language = target_language or self.default_target_language
        translation = await self.translator.translate(transcript, language)

        return TranslationSubmission(
            source_text=transcript,
            translated_text=translation,
            language=AUTO_DETECTED_LANGUAGE,
        )


def decode_audio(audio_data: str) -> bytes:
    """Decode base64 audio, accepting a `data:<mime>;base64,` prefix."""
    if audio_data.startswith("data:"):
        _, _, audio_data = audio_data.partition(",")

    try:
        audio = base64.b64decode(audio_data, validate=True)
    except (binascii.Error, ValueError) as ex:
        raise InvalidAudioError("Audio data is not valid base64") from ex

    if not audio:
        raise InvalidAudioError("Audio data is empty")
    return audio
