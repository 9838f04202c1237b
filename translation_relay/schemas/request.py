from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel
from typing_extensions import Annotated

from translation_relay.constants import (
    MAX_ROOM_ID_LENGTH,
    MAX_USER_FIELD_LENGTH,
)
from translation_relay.schemas.events import TranslationSubmission

RoomId = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True, min_length=1, max_length=MAX_ROOM_ID_LENGTH
    ),
]
UserField = Annotated[
    str,
    StringConstraints(strip_whitespace=True, max_length=MAX_USER_FIELD_LENGTH),
]


class ClientMessageModel(BaseModel):
    """Base model for frames sent by clients over the WebSocket."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class JoinRoomRequest(ClientMessageModel):
    """
    Request to join a room.

    Attributes:
        room_id: Room to join, created if it does not exist.
        user_id: Optional participant id, generated when missing or blank.
        user_name: Optional display name, defaulted when missing or blank.
    """

    type: Literal["join_room"]
    room_id: RoomId
    user_id: UserField | None = None
    user_name: UserField | None = None


class NewTranslationRequest(ClientMessageModel):
    """Submission of an already translated text segment."""

    type: Literal["new_translation"]
    translation: TranslationSubmission


class StartSpeakingRequest(ClientMessageModel):
    type: Literal["start_speaking"]


class StopSpeakingRequest(ClientMessageModel):
    type: Literal["stop_speaking"]


class AudioChunkRequest(ClientMessageModel):
    """
    Base64 encoded recorded audio to be transcribed and translated before
    it is relayed to the room.
    """

    type: Literal["audio_chunk"]
    audio_data: Annotated[str, Field(min_length=1)]
    target_language: str | None = None


ClientMessage = Annotated[
    JoinRoomRequest
    | NewTranslationRequest
    | StartSpeakingRequest
    | StopSpeakingRequest
    | AudioChunkRequest,
    Field(discriminator="type"),
]
