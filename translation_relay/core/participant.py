from dataclasses import dataclass

from translation_relay.schemas.events import ParticipantModel
from translation_relay.utils.identifiers import generate_user_id


@dataclass(frozen=True)
class Participant:
    """
    Ephemeral identity of one connected client within one room.

    Attributes:
        id: Participant id, unique within the room.
        display_name: Name shown to the other participants.
        session_id: Id of the room the participant joined.
    """

    id: str
    display_name: str
    session_id: str

    @classmethod
    def create(
        cls,
        session_id: str,
        user_id: str | None = None,
        display_name: str | None = None,
        default_name: str = "Anonymous",
    ) -> "Participant":
        """
        Build a participant from client supplied identity, generating the id
        and defaulting the name when they are missing or blank.
        """
        return cls(
            id=user_id or generate_user_id(),
            display_name=display_name or default_name,
            session_id=session_id,
        )

    def to_model(self) -> ParticipantModel:
        """Public view of the participant, as sent to clients."""
        return ParticipantModel(id=self.id, name=self.display_name)
