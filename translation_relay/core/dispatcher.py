"""
Fan-out of server frames to the participants of a room.
"""

import asyncio

from starlette.websockets import WebSocketDisconnect

from translation_relay.core.connection import Connection
from translation_relay.core.registry import SessionRegistry
from translation_relay.logging import logger
from translation_relay.schemas.response import ServerMessageModel
from translation_relay.utils.metrics import (
    ws_delivery_failures_total,
    ws_messages_sent_total,
)


class BroadcastDispatcher:
    """
    Delivers frames to every participant of a room, optionally excluding
    one. Delivery is best-effort: an unreachable peer is logged and skipped
    and never aborts delivery to the others.
    """

    def __init__(self, registry: SessionRegistry) -> None:
        self.registry = registry

    async def broadcast(
        self,
        session_id: str,
        message: ServerMessageModel,
        exclude_participant_id: str | None = None,
    ) -> int:
        """
        Send `message` to all participants of a room.

        Args:
            session_id: Room identifier. An unknown room is a no-op.
            message: Frame to deliver.
            exclude_participant_id: Participant that should not receive it.

        Returns:
            Number of participants the frame was delivered to.
        """
        session = self.registry.find(session_id)
        if session is None:
            logger.debug(f"Room {session_id} not found, nothing to deliver")
            return 0

        recipients = session.recipients(exclude_participant_id)
        if not recipients:
            return 0

        text = message.to_text()
        results = await asyncio.gather(
            *[
                self._deliver(connection, text, participant.id)
                for participant, connection in recipients
            ],
            return_exceptions=True,
        )
        return sum(1 for result in results if result is True)

    async def send(
        self, connection: Connection, message: ServerMessageModel
    ) -> bool:
        """Send a frame to a single connection with the same isolation."""
        return await self._deliver(connection, message.to_text())

    async def _deliver(
        self,
        connection: Connection,
        text: str,
        participant_id: str | None = None,
    ) -> bool:
        if not connection.is_open:
            logger.debug(
                f"Skipping connection {connection.id} "
                f"(participant: {participant_id}), not open"
            )
            ws_delivery_failures_total.labels(reason="not_open").inc()
            return False

        try:
            await connection.send_text(text)
        except (WebSocketDisconnect, ConnectionError, RuntimeError) as e:
            # WebSocketDisconnect: Client disconnected
            # ConnectionError: Network errors
            # RuntimeError: WebSocket in invalid state
            logger.warning(
                f"Failed to send to connection {connection.id} "
                f"(participant: {participant_id}): {e}"
            )
            ws_delivery_failures_total.labels(reason="send_error").inc()
            return False
        except Exception as e:
            logger.warning(
                f"Unexpected error sending to connection {connection.id} "
                f"(participant: {participant_id}): {e}"
            )
            ws_delivery_failures_total.labels(reason="send_error").inc()
            return False

        ws_messages_sent_total.inc()
        return True
