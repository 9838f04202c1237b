"""
Room orchestration: joins, translation submissions, speaking indicators and
connection teardown on top of the session registry and the dispatcher.
"""

from typing import Any, Awaitable, Callable

from translation_relay.constants import AUTO_DETECTED_LANGUAGE, WS_GOING_AWAY_CODE
from translation_relay.core.connection import Connection
from translation_relay.core.dispatcher import BroadcastDispatcher
from translation_relay.core.participant import Participant
from translation_relay.core.registry import SessionRegistry
from translation_relay.core.session import Session
from translation_relay.exceptions import (
    DuplicateParticipantError,
    InvalidMessageError,
    NotJoinedError,
)
from translation_relay.logging import logger, set_log_context
from translation_relay.schemas.events import (
    TranslationEvent,
    TranslationSubmission,
)
from translation_relay.schemas.request import (
    JoinRoomRequest,
    NewTranslationRequest,
    StartSpeakingRequest,
    StopSpeakingRequest,
)
from translation_relay.schemas.response import (
    NewTranslationMessage,
    RoomJoinedMessage,
    UserJoinedMessage,
    UserLeftMessage,
    UserSpeakingMessage,
    UserStoppedSpeakingMessage,
)
from translation_relay.settings import DuplicateParticipantPolicy
from translation_relay.utils.identifiers import (
    generate_translation_id,
    utc_timestamp,
)
from translation_relay.utils.metrics import relay_translations_total

HandlerType = Callable[[Connection, Any], Awaitable[Any]]


class RoomManager:
    """
    Manager for WebSocket clients and the rooms they join.

    Tracks every accepted connection, binds connections to participants of
    rooms in the registry, and announces arrivals, departures, translations
    and speaking state through the dispatcher.

    Every change to a room together with the fan-out that follows it runs
    under the room's lock, so all recipients see events of a room in the
    order they were appended.
    """

    def __init__(
        self,
        registry: SessionRegistry,
        dispatcher: BroadcastDispatcher | None = None,
        *,
        duplicate_policy: DuplicateParticipantPolicy = DuplicateParticipantPolicy.REPLACE,
        echo_translations_to_author: bool = True,
        default_user_name: str = "Anonymous",
    ) -> None:
        """
        Args:
            registry: Registry owning the rooms.
            dispatcher: Fan-out dispatcher, created over `registry` if omitted.
            duplicate_policy: What to do when a participant id is already
                present in the room being joined.
            echo_translations_to_author: Whether `new_translation` is also
                delivered back to the participant who submitted it.
            default_user_name: Display name for participants without one.
        """
        self.registry = registry
        self.dispatcher = dispatcher or BroadcastDispatcher(registry)
        self.duplicate_policy = duplicate_policy
        self.echo_translations_to_author = echo_translations_to_author
        self.default_user_name = default_user_name
        self.connections: dict[str, Connection] = {}
        self.handlers_registry: dict[type, HandlerType] = {
            JoinRoomRequest: self.join,
            NewTranslationRequest: self._on_new_translation,
            StartSpeakingRequest: self._on_start_speaking,
            StopSpeakingRequest: self._on_stop_speaking,
        }

    def connect(self, connection: Connection) -> None:
        """Track an accepted connection. It stays inert until it joins a room."""
        self.connections[connection.id] = connection
        logger.debug(f"Connection {connection.id} added to active connections")

    async def disconnect(self, connection: Connection) -> bool:
        """
        Tear down a closed connection.

        Dismisses its participant, reclaims the room if it became empty and
        announces the departure. Runs at most once per connection no matter
        how often or from where the close is reported.

        Returns:
            True if this call performed the teardown.
        """
        if not connection.begin_teardown():
            return False

        connection.mark_closed()
        self.connections.pop(connection.id, None)
        await self._leave(connection)
        logger.debug(f"Connection {connection.id} removed from active connections")
        return True

    async def handle(self, connection: Connection, message: Any) -> Any:
        """
        Route a decoded client frame to its handler.

        Raises:
            InvalidMessageError: No handler is registered for the frame type.
        """
        handler = self.handlers_registry.get(type(message))
        if handler is None:
            raise InvalidMessageError(
                f"Unsupported message type: {getattr(message, 'type', None)}"
            )
        return await handler(connection, message)

    async def join(
        self, connection: Connection, request: JoinRoomRequest
    ) -> Participant:
        """
        Admit the connection to a room.

        A connection in another room leaves it first. Joining the room the
        connection is already in re-admits it in place, keeping the room and
        its history. The joiner receives `room_joined` with the room
        snapshot, the others `user_joined`.

        Raises:
            DuplicateParticipantError: The id is taken and the policy is
                `reject`. The connection keeps its current room.
        """
        participant = Participant.create(
            request.room_id,
            user_id=request.user_id,
            display_name=request.user_name,
            default_name=self.default_user_name,
        )

        current = connection.participant
        if current is not None and current.session_id != participant.session_id:
            self._check_duplicate(
                self.registry.find(participant.session_id),
                participant,
                connection,
            )
            await self._leave(connection)

        while True:
            session = self.registry.get_or_create(participant.session_id)
            async with session.lock:
                # The room may have been reclaimed while waiting for the lock
                if self.registry.find(session.id) is not session:
                    continue

                self._check_duplicate(session, participant, connection)

                current = connection.participant
                if current is not None and current.id != participant.id:
                    # Same room under a new identity
                    if session.dismiss(current.id, connection) is not None:
                        await self.dispatcher.broadcast(
                            session.id,
                            UserLeftMessage(
                                user_id=current.id,
                                user_name=current.display_name,
                                timestamp=utc_timestamp(),
                            ),
                        )

                previous = session.admit(participant, connection)
                connection.participant = participant
                if previous is not None:
                    previous.participant = None
                    logger.info(
                        f"User {participant.id} rejoined room {session.id}, "
                        f"detached connection {previous.id}"
                    )

                set_log_context(room_id=session.id, user_id=participant.id)
                logger.info(
                    f"User {participant.id} ({participant.display_name}) "
                    f"joined room {session.id}"
                )

                snapshot = session.snapshot()
                await self.dispatcher.send(
                    connection,
                    RoomJoinedMessage(
                        room_id=session.id,
                        users=snapshot.participants,
                        recent_translations=snapshot.recent_translations,
                    ),
                )
                await self.dispatcher.broadcast(
                    session.id,
                    UserJoinedMessage(
                        user=participant.to_model(), timestamp=utc_timestamp()
                    ),
                    exclude_participant_id=participant.id,
                )
                return participant

    async def submit_translation(
        self, connection: Connection, submission: TranslationSubmission
    ) -> TranslationEvent:
        """
        Record a translation in the room history and relay it.

        The author is the participant bound to `connection`. The event goes
        to every participant, or to everyone but the author when echoing is
        disabled.

        Raises:
            NotJoinedError: The connection is not in a room.
        """
        participant = self._require_participant(connection)
        session = self.registry.find(participant.session_id)
        if session is None:
            raise NotJoinedError("Room no longer exists")

        event = TranslationEvent(
            id=submission.id or generate_translation_id(),
            author_id=participant.id,
            author_name=participant.display_name,
            source_text=submission.source_text,
            translated_text=submission.translated_text,
            language=submission.language or AUTO_DETECTED_LANGUAGE,
            timestamp=submission.timestamp or utc_timestamp(),
        )

        async with session.lock:
            if connection.participant is not participant:
                raise NotJoinedError("Join a room before sending translations")

            session.append_event(event)
            relay_translations_total.inc()

            exclude = (
                None if self.echo_translations_to_author else participant.id
            )
            delivered = await self.dispatcher.broadcast(
                session.id,
                NewTranslationMessage(translation=event),
                exclude_participant_id=exclude,
            )

        logger.debug(
            f"Translation {event.id} from {participant.id} delivered to "
            f"{delivered} participants of room {session.id}"
        )
        return event

    async def set_speaking(self, connection: Connection, speaking: bool) -> int:
        """
        Announce that the participant started or stopped speaking to the
        other participants of its room.

        Raises:
            NotJoinedError: The connection is not in a room.
        """
        participant = self._require_participant(connection)
        session = self.registry.find(participant.session_id)
        if session is None:
            raise NotJoinedError("Room no longer exists")

        message_class = (
            UserSpeakingMessage if speaking else UserStoppedSpeakingMessage
        )
        async with session.lock:
            return await self.dispatcher.broadcast(
                session.id,
                message_class(
                    user_id=participant.id,
                    user_name=participant.display_name,
                    timestamp=utc_timestamp(),
                ),
                exclude_participant_id=participant.id,
            )

    async def shutdown(self) -> None:
        """Close every tracked connection and tear it down."""
        connections = list(self.connections.values())
        if connections:
            logger.info(f"Closing {len(connections)} WebSocket connections")

        for connection in connections:
            await connection.close(
                code=WS_GOING_AWAY_CODE, reason="Server shutting down"
            )
        for connection in connections:
            await self.disconnect(connection)

        self.registry.clear()

    def stats(self) -> dict[str, int]:
        return {
            "sessions": len(self.registry),
            "participants": self.registry.participant_count(),
            "connections": len(self.connections),
        }

    async def _on_new_translation(
        self, connection: Connection, request: NewTranslationRequest
    ) -> TranslationEvent:
        return await self.submit_translation(connection, request.translation)

    async def _on_start_speaking(
        self, connection: Connection, request: StartSpeakingRequest
    ) -> int:
        return await self.set_speaking(connection, True)

    async def _on_stop_speaking(
        self, connection: Connection, request: StopSpeakingRequest
    ) -> int:
        return await self.set_speaking(connection, False)

    def _check_duplicate(
        self,
        session: Session | None,
        participant: Participant,
        connection: Connection,
    ) -> None:
        if session is None or self.duplicate_policy is not (
            DuplicateParticipantPolicy.REJECT
        ):
            return

        bound = session.connection_for(participant.id)
        if bound is not None and bound is not connection:
            raise DuplicateParticipantError(
                f"User id {participant.id} is already in room {session.id}"
            )

    def _require_participant(self, connection: Connection) -> Participant:
        if connection.participant is None:
            raise NotJoinedError("Join a room first")
        return connection.participant

    async def _leave(self, connection: Connection) -> Participant | None:
        """
        Remove the connection's participant from its room, reclaim the room
        if it became empty and announce the departure.
        """
        participant = connection.participant
        if participant is None:
            return None
        connection.participant = None

        session = self.registry.find(participant.session_id)
        if session is None:
            return None

        async with session.lock:
            if session.dismiss(participant.id, connection) is None:
                # Another connection took over this participant id
                return None

            logger.info(
                f"User {participant.id} left room {participant.session_id}"
            )
            if session.is_empty:
                self.registry.remove(session.id)
                return participant

            await self.dispatcher.broadcast(
                session.id,
                UserLeftMessage(
                    user_id=participant.id,
                    user_name=participant.display_name,
                    timestamp=utc_timestamp(),
                ),
            )
        return participant
