from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from translation_relay.schemas.events import ParticipantModel, TranslationEvent


class ServerMessageModel(BaseModel):
    """
    Base model for frames sent by the server over the WebSocket.

    Field names are serialized in camelCase.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_text(self) -> str:
        """Serialize the frame to its JSON wire form."""
        return self.model_dump_json(by_alias=True)


class RoomJoinedMessage(ServerMessageModel):
    type: Literal["room_joined"] = "room_joined"
    room_id: str
    users: list[ParticipantModel]
    recent_translations: list[TranslationEvent]


class UserJoinedMessage(ServerMessageModel):
    type: Literal["user_joined"] = "user_joined"
    user: ParticipantModel
    timestamp: str


class UserLeftMessage(ServerMessageModel):
    type: Literal["user_left"] = "user_left"
    user_id: str
    user_name: str
    timestamp: str


class NewTranslationMessage(ServerMessageModel):
    type: Literal["new_translation"] = "new_translation"
    translation: TranslationEvent


class UserSpeakingMessage(ServerMessageModel):
    type: Literal["user_speaking"] = "user_speaking"
    user_id: str
    user_name: str
    timestamp: str


class UserStoppedSpeakingMessage(ServerMessageModel):
    type: Literal["user_stopped_speaking"] = "user_stopped_speaking"
    user_id: str
    user_name: str
    timestamp: str


class ErrorMessage(ServerMessageModel):
    type: Literal["error"] = "error"
    message: str
