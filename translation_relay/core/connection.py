"""
Transport handle for one WebSocket client.

A Connection moves through `connecting -> open -> closed`. Rooms only keep
a weak reference to it and check `is_open` before every send.
"""

import uuid
from enum import StrEnum
from typing import TYPE_CHECKING

from starlette import status
from starlette.websockets import WebSocket, WebSocketState

from translation_relay.logging import logger

if TYPE_CHECKING:
    from translation_relay.core.participant import Participant


class ConnectionState(StrEnum):
    CONNECTING = "connecting"
    OPEN = "open"
    CLOSED = "closed"


class Connection:
    """
    Wraps a Starlette WebSocket and tracks its lifecycle and room binding.

    Attributes:
        id: Unique connection identifier (UUID4 string).
        websocket: The underlying WebSocket.
        state: Current lifecycle state.
        participant: Participant bound to this connection, `None` until the
            client joins a room and again after it leaves.
    """

    def __init__(self, websocket: WebSocket, connection_id: str | None = None):
        self.id = connection_id or str(uuid.uuid4())
        self.websocket = websocket
        self.state = ConnectionState.CONNECTING
        self.participant: "Participant | None" = None
        self._teardown_started = False

    def __repr__(self) -> str:
        return f"Connection(id={self.id!r}, state={self.state.value})"

    @property
    def is_open(self) -> bool:
        """Whether the connection is open and the transport can still send."""
        return (
            self.state is ConnectionState.OPEN
            and self.websocket.client_state == WebSocketState.CONNECTED
            and self.websocket.application_state == WebSocketState.CONNECTED
        )

    @property
    def session_id(self) -> str | None:
        """Id of the room this connection is bound to, if any."""
        if self.participant is None:
            return None
        return self.participant.session_id

    async def accept(self) -> None:
        """Accept the WebSocket handshake and move to `open`."""
        await self.websocket.accept()
        self.state = ConnectionState.OPEN
        logger.debug(f"Connection {self.id} open")

    async def send_text(self, text: str) -> None:
        await self.websocket.send_text(text)

    def mark_closed(self) -> None:
        """Move to the terminal `closed` state without touching the transport."""
        self.state = ConnectionState.CLOSED

    async def close(
        self,
        code: int = status.WS_1000_NORMAL_CLOSURE,
        reason: str | None = None,
    ) -> None:
        """
        Close the transport if it is still connected and mark the connection
        closed. Safe to call more than once.
        """
        self.state = ConnectionState.CLOSED

        if (
            self.websocket.client_state != WebSocketState.CONNECTED
            or self.websocket.application_state != WebSocketState.CONNECTED
        ):
            return

        try:
            await self.websocket.close(code=code, reason=reason)
        except (RuntimeError, ConnectionError) as e:
            # RuntimeError: close raced with a client disconnect
            logger.debug(f"Connection {self.id} already closed: {e}")

    def begin_teardown(self) -> bool:
        """
        Claim the teardown of this connection.

        Returns:
            True for the first caller only, False afterwards.
        """
        if self._teardown_started:
            return False

        self._teardown_started = True
        return True
