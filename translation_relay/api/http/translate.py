"""
Translation endpoints backed by the configured providers.

These are collaborators of the relay: they return results to the caller
and never touch rooms.
"""

from fastapi import APIRouter, File, Form, UploadFile
from typing_extensions import Annotated

from translation_relay.constants import AUTO_DETECTED_LANGUAGE
from translation_relay.dependencies import ProvidersDep
from translation_relay.exceptions import (
    InvalidAudioError,
    InvalidMessageError,
    PayloadTooLargeError,
)
from translation_relay.logging import logger
from translation_relay.schemas.translation import (
    TranslateAudioResponse,
    TranslateTextRequest,
    TranslateTextResponse,
)
from translation_relay.settings import app_settings
from translation_relay.utils.error_handler import handle_http_errors

router = APIRouter(prefix="/api", tags=["translation"])


@router.post("/translate-text", response_model=TranslateTextResponse)
@handle_http_errors
async def translate_text(
    body: TranslateTextRequest, providers: ProvidersDep
) -> TranslateTextResponse:
    """
    Translate a text.

    Raises:
        HTTPException: 400 for empty text, 502 if the provider fails.
    """
    text = body.text.strip()
    if not text:
        raise InvalidMessageError("Text to translate is required")

    target_language = (
        body.target_language or app_settings.DEFAULT_TARGET_LANGUAGE
    )
    logger.info(f"Translating text into {target_language}")
    translation = await providers.translator.translate(text, target_language)

    return TranslateTextResponse(
        original_text=text,
        translation=translation,
        target_language=target_language,
    )


@router.post("/translate-audio", response_model=TranslateAudioResponse)
@handle_http_errors
async def translate_audio(
    providers: ProvidersDep,
    audio: Annotated[UploadFile | None, File()] = None,
    target_language: Annotated[
        str | None, Form(alias="targetLanguage")
    ] = None,
) -> TranslateAudioResponse:
    """
    Transcribe an uploaded audio file and translate the transcript.

    Raises:
        HTTPException: 400 for a missing or non-audio file, 413 if it is
            larger than MAX_AUDIO_UPLOAD_BYTES, 502 if a provider fails.
    """
    if audio is None:
        raise InvalidAudioError("Audio file is required")

    content_type = audio.content_type or ""
    if not content_type.startswith("audio/"):
        raise InvalidAudioError("Only audio files are accepted")

    content = await audio.read(app_settings.MAX_AUDIO_UPLOAD_BYTES + 1)
    if len(content) > app_settings.MAX_AUDIO_UPLOAD_BYTES:
        raise PayloadTooLargeError("Audio file is too large")

    target_language = target_language or app_settings.DEFAULT_TARGET_LANGUAGE
    logger.info(f"Audio file received: {audio.filename}")

    transcript = await providers.transcriber.transcribe(
        content, audio.filename or "audio", content_type
    )
    translation = ""
    if transcript.strip():
        translation = await providers.translator.translate(
            transcript, target_language
        )

    return TranslateAudioResponse(
        transcript=transcript,
        translation=translation,
        original_language=AUTO_DETECTED_LANGUAGE,
        target_language=target_language,
    )
