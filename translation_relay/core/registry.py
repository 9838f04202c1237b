"""
Registry of live rooms.

All operations are synchronous. On the single event loop they run without
interleaving, so concurrent joins can never create two Session objects for
the same id.
"""

from translation_relay.core.session import Session
from translation_relay.logging import logger
from translation_relay.utils.metrics import relay_sessions_active


class SessionRegistry:
    """
    Maps room ids to Session state, creating rooms lazily and dropping them
    once empty.
    """

    def __init__(self, history_limit: int = 10) -> None:
        self.history_limit = history_limit
        self._sessions: dict[str, Session] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def session_ids(self) -> list[str]:
        return list(self._sessions)

    def participant_count(self) -> int:
        return sum(len(session) for session in self._sessions.values())

    def get_or_create(self, session_id: str) -> Session:
        """
        Return the room for `session_id`, creating it if unknown.

        Args:
            session_id: Room identifier.

        Returns:
            The existing or newly created Session.
        """
        session = self._sessions.get(session_id)
        if session is None:
            session = Session(session_id, history_limit=self.history_limit)
            self._sessions[session_id] = session
            relay_sessions_active.set(len(self._sessions))
            logger.info(f"Created room {session_id}")
        return session

    def find(self, session_id: str) -> Session | None:
        return self._sessions.get(session_id)

    def remove(self, session_id: str) -> bool:
        """
        Drop an empty room.

        Args:
            session_id: Room identifier.

        Returns:
            True if the room was removed. False if it is unknown or still
            has participants.
        """
        session = self._sessions.get(session_id)
        if session is None:
            return False

        if not session.is_empty:
            logger.warning(
                f"Refusing to remove room {session_id} with "
                f"{len(session)} participants"
            )
            return False

        del self._sessions[session_id]
        relay_sessions_active.set(len(self._sessions))
        logger.info(f"Removed empty room {session_id}")
        return True

    def clear(self) -> None:
        self._sessions.clear()
        relay_sessions_active.set(0)
