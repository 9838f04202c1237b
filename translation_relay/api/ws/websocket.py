from typing import Any

from starlette import status
from starlette.endpoints import WebSocketEndpoint
from starlette.websockets import WebSocket

from translation_relay.core.connection import Connection
from translation_relay.logging import clear_log_context, logger
from translation_relay.managers.room_manager import RoomManager
from translation_relay.middlewares.correlation_id import set_correlation_id
from translation_relay.schemas.response import ErrorMessage
from translation_relay.utils.metrics import (
    ws_connections_active,
    ws_connections_total,
)


class RoomWebSocketEndpoint(WebSocketEndpoint):  # type: ignore[misc]
    """
    WebSocket endpoint bound to the application's RoomManager.

    Accepts the connection, keeps it inert until the client joins a room and
    funnels every way the connection can end (close frame, receive error,
    server shutdown) into a single teardown in `on_disconnect`.
    """

    encoding = None  # Text frames, binary frames are decoded as UTF-8

    async def dispatch(self) -> None:
        """
        Manage the WebSocket connection lifecycle.

        1. Accept the connection in `on_connect`.
        2. Receive frames and hand each to `on_receive`, one at a time.
        3. On a disconnect message or an error, leave the loop.
        4. Always run `on_disconnect` with the resulting close code.
        """
        websocket = WebSocket(self.scope, receive=self.receive, send=self.send)
        await self.on_connect(websocket)

        close_code = status.WS_1000_NORMAL_CLOSURE

        try:
            while True:
                message = await websocket.receive()
                if message["type"] == "websocket.receive":
                    data = await self.decode(websocket, message)
                    await self.on_receive(websocket, data)
                elif message["type"] == "websocket.disconnect":
                    close_code = int(
                        message.get("code") or status.WS_1000_NORMAL_CLOSURE
                    )
                    break
        except Exception as exc:
            close_code = status.WS_1011_INTERNAL_ERROR
            raise exc
        finally:
            await self.on_disconnect(websocket, close_code)

    async def decode(self, websocket: WebSocket, message: dict[str, Any]) -> str:
        """
        Extract the frame payload as text.

        Args:
            websocket: WebSocket connection instance
            message: Raw ASGI message

        Returns:
            Frame text, binary frames decoded as UTF-8.
        """
        if message.get("text") is not None:
            return message["text"]
        if message.get("bytes") is not None:
            return message["bytes"].decode("utf-8", errors="replace")
        return ""

    async def on_connect(self, websocket: WebSocket) -> None:
        """
        Accept the connection and register it with the RoomManager.

        The connection id prefix becomes the correlation ID of every log
        record produced while serving this connection.
        """
        self.room_manager: RoomManager = websocket.app.state.room_manager
        self.connection = Connection(websocket)
        set_correlation_id(self.connection.id)

        await self.connection.accept()
        self.room_manager.connect(self.connection)

        ws_connections_total.labels(status="accepted").inc()
        ws_connections_active.inc()
        logger.debug(
            f"Client connected to websocket (connection_id: {self.connection.id})"
        )

    async def on_disconnect(self, websocket: WebSocket, close_code: int) -> None:
        """
        Tear down the connection: leave its room, announce the departure and
        reclaim the room if it is now empty.
        """
        await self.room_manager.disconnect(self.connection)

        # Runs once per accepted connection, also when shutdown tore it down
        ws_connections_total.labels(status="closed").inc()
        ws_connections_active.dec()

        logger.debug(
            f"Client {self.connection.id} disconnected with code {close_code}"
        )
        clear_log_context()

    async def send_error(self, message: str) -> None:
        """Send an `error` frame to this connection only."""
        await self.room_manager.dispatcher.send(
            self.connection, ErrorMessage(message=message)
        )
