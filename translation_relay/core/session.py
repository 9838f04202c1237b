"""
Room state: joined participants and a bounded translation history.
"""

import asyncio
import weakref
from collections import deque
from dataclasses import dataclass
from enum import StrEnum

from translation_relay.core.connection import Connection
from translation_relay.core.participant import Participant
from translation_relay.schemas.events import ParticipantModel, TranslationEvent


class SessionState(StrEnum):
    EMPTY = "empty"
    ACTIVE = "active"


@dataclass(frozen=True)
class SessionSnapshot:
    """Room state shown to a joining participant."""

    participants: list[ParticipantModel]
    recent_translations: list[TranslationEvent]


class Session:
    """
    A named room of participants sharing one translation stream.

    The participant map holds weak references to connections, so a room
    never keeps a transport alive. The history keeps only the most recent
    `history_limit` events; trimming it never affects live fan-out.

    Mutations and the fan-out that follows them are serialized by the
    caller through `lock`.
    """

    def __init__(self, session_id: str, history_limit: int = 10):
        self.id = session_id
        self.history_limit = history_limit
        self.lock = asyncio.Lock()
        self._participants: dict[
            str, tuple[Participant, weakref.ReferenceType[Connection]]
        ] = {}
        self._history: deque[TranslationEvent] = deque(maxlen=history_limit)

    def __repr__(self) -> str:
        return f"Session(id={self.id!r}, participants={len(self)})"

    def __len__(self) -> int:
        return len(self._participants)

    def __contains__(self, participant_id: object) -> bool:
        return participant_id in self._participants

    @property
    def state(self) -> SessionState:
        if self._participants:
            return SessionState.ACTIVE
        return SessionState.EMPTY

    @property
    def is_empty(self) -> bool:
        return self.state is SessionState.EMPTY

    def get(self, participant_id: str) -> Participant | None:
        entry = self._participants.get(participant_id)
        return entry[0] if entry else None

    def connection_for(self, participant_id: str) -> Connection | None:
        entry = self._participants.get(participant_id)
        return entry[1]() if entry else None

    def admit(
        self, participant: Participant, connection: Connection
    ) -> Connection | None:
        """
        Add a participant, overwriting any entry with the same id.

        Args:
            participant: The joining participant.
            connection: Connection the participant is reachable on.

        Returns:
            The connection previously bound to the same participant id, if
            it was a different, still referenced connection.
        """
        previous = None
        if existing := self._participants.get(participant.id):
            bound = existing[1]()
            if bound is not None and bound is not connection:
                previous = bound

        self._participants[participant.id] = (
            participant,
            weakref.ref(connection),
        )
        return previous

    def dismiss(
        self, participant_id: str, connection: Connection | None = None
    ) -> Participant | None:
        """
        Remove a participant.

        Args:
            participant_id: Id of the participant to remove.
            connection: When given, the participant is removed only if it is
                still bound to this connection.

        Returns:
            The removed participant, or None if nothing was removed.
        """
        entry = self._participants.get(participant_id)
        if entry is None:
            return None

        bound = entry[1]()
        if connection is not None and bound is not None and bound is not connection:
            return None

        del self._participants[participant_id]
        return entry[0]

    def append_event(self, event: TranslationEvent) -> None:
        """Append to history, evicting the oldest events beyond the limit."""
        self._history.append(event)

    def recipients(
        self, exclude_participant_id: str | None = None
    ) -> list[tuple[Participant, Connection]]:
        """
        Participants with a live connection reference, except the excluded one.
        """
        recipients = []
        for participant_id, (participant, ref) in self._participants.items():
            if participant_id == exclude_participant_id:
                continue
            connection = ref()
            if connection is not None:
                recipients.append((participant, connection))
        return recipients

    def connections(self) -> list[Connection]:
        return [connection for _, connection in self.recipients()]

    def snapshot(self) -> SessionSnapshot:
        """
        Participants (id and name only) and the retained history, oldest
        first.
        """
        return SessionSnapshot(
            participants=[
                participant.to_model()
                for participant, _ in self._participants.values()
            ],
            recent_translations=list(self._history),
        )
