from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from typing_extensions import Annotated

from translation_relay.constants import AUTO_DETECTED_LANGUAGE


class ParticipantModel(BaseModel):
    """
    Public view of a participant.

    Attributes:
        id: Participant id, unique within its room.
        name: Display name.
    """

    id: str
    name: str


class TranslationEvent(BaseModel):
    """
    One unit of source text and its translation, relayed to a room.

    Immutable once created. Serialized with the wire names the browser
    client reads (`userId`, `userName`, `originalText`, ...).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    author_id: str = Field(alias="userId")
    author_name: str = Field(alias="userName")
    source_text: str = Field(alias="originalText")
    translated_text: str = Field(alias="translatedText")
    language: str = AUTO_DETECTED_LANGUAGE
    timestamp: str


class TranslationSubmission(BaseModel):
    """
    Translation payload submitted by a client or produced by the audio
    pipeline. The author is always taken from the submitting participant.

    Attributes:
        source_text: Recognized text (`originalText` or `sourceText`).
        translated_text: Translation of `source_text`.
        language: Language tag of the translation, if known.
        id: Client chosen event id; generated when absent.
        timestamp: Client timestamp; generated when absent.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    source_text: Annotated[
        str,
        Field(
            min_length=1,
            validation_alias=AliasChoices(
                "originalText", "sourceText", "source_text"
            ),
        ),
    ]
    translated_text: Annotated[
        str,
        Field(
            validation_alias=AliasChoices("translatedText", "translated_text")
        ),
    ]
    language: str | None = None
    id: str | None = None
    timestamp: str | None = None
