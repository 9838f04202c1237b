import time

from fastapi import APIRouter
from starlette.websockets import WebSocket

from translation_relay.api.ws.validation import parse_client_message
from translation_relay.api.ws.websocket import RoomWebSocketEndpoint
from translation_relay.exceptions import NotJoinedError
from translation_relay.logging import logger
from translation_relay.schemas.request import AudioChunkRequest
from translation_relay.services.audio_pipeline import AudioTranslationPipeline
from translation_relay.utils.error_handler import handle_ws_errors
from translation_relay.utils.metrics import (
    ws_message_processing_duration_seconds,
    ws_messages_received_total,
)

router = APIRouter()


class Web(RoomWebSocketEndpoint):
    """
    Room WebSocket consumer for browser clients.

    Room frames (`join_room`, `new_translation`, `start_speaking`,
    `stop_speaking`) go to the RoomManager. `audio_chunk` frames are
    transcribed and translated first and the result is submitted as a
    translation of the sender.
    """

    @handle_ws_errors
    async def on_receive(self, websocket: WebSocket, data: str) -> None:
        """
        Decode, validate and route one frame.

        Invalid frames, frames for a room the sender is not in and provider
        failures are answered with an `error` frame to the sender only.
        """
        message = parse_client_message(data)
        ws_messages_received_total.labels(type=message.type).inc()
        logger.debug(f"Received {message.type} frame")

        start_time = time.time()
        if isinstance(message, AudioChunkRequest):
            await self.relay_audio_chunk(websocket, message)
        else:
            await self.room_manager.handle(self.connection, message)

        ws_message_processing_duration_seconds.labels(
            type=message.type
        ).observe(time.time() - start_time)

    async def relay_audio_chunk(
        self, websocket: WebSocket, message: AudioChunkRequest
    ) -> None:
        if self.connection.participant is None:
            raise NotJoinedError("Join a room first")

        pipeline: AudioTranslationPipeline = websocket.app.state.audio_pipeline
        submission = await pipeline.process(
            message.audio_data, message.target_language
        )
        if submission is None:
            return

        await self.room_manager.submit_translation(self.connection, submission)


router.add_websocket_route("/", Web)
router.add_websocket_route("/ws", Web)
