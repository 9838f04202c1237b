from enum import StrEnum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DuplicateParticipantPolicy(StrEnum):
    """
    What happens when a participant joins a room with an id that is
    already present in that room.

    Attributes:
        REPLACE: The new connection takes over the id. The previous
            connection is detached from the room without a `user_left`.
        REJECT: The join is refused with an `error` frame.
    """

    REPLACE = "replace"
    REJECT = "reject"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        case_sensitive=True, env_file=".env", extra="ignore"
    )

    ENVIRONMENT: str = "development"

    # Server settings
    HOST: str = "0.0.0.0"
    PORT: int = 3002
    CORS_ALLOW_ORIGINS: list[str] = ["*"]

    # Logging settings
    LOG_LEVEL: str = "INFO"
    LOG_FILE_PATH: str | None = None
    LOG_EXCLUDED_PATHS: list[str] = ["/metrics", "/health"]

    # Room settings
    HISTORY_LIMIT: int = Field(default=10, ge=0)
    DUPLICATE_PARTICIPANT_POLICY: DuplicateParticipantPolicy = (
        DuplicateParticipantPolicy.REPLACE
    )
    ECHO_TRANSLATIONS_TO_AUTHOR: bool = True
    DEFAULT_USER_NAME: str = "Anonymous"
    DEFAULT_TARGET_LANGUAGE: str = "en"

    # Provider settings
    OPENAI_API_KEY: str | None = None
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"
    TRANSLATION_MODEL: str = "gpt-4"
    TRANSCRIPTION_MODEL: str = "whisper-1"
    PROVIDER_TIMEOUT_SECONDS: float = 30.0
    MAX_AUDIO_UPLOAD_BYTES: int = 25 * 1024 * 1024

    @property
    def openai_enabled(self) -> bool:
        """Whether a usable OpenAI API key is configured."""
        return bool(self.OPENAI_API_KEY) and self.OPENAI_API_KEY.startswith(
            "sk-"
        )


app_settings = Settings()
