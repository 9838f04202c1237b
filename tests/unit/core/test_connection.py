"""
Tests for the Connection lifecycle.
"""

import pytest
from starlette.websockets import WebSocketState

from translation_relay.core.connection import Connection, ConnectionState

from tests.mocks import create_mock_websocket


class TestConnection:
    def test_new_connection_is_connecting(self):
        connection = Connection(create_mock_websocket())

        assert connection.state is ConnectionState.CONNECTING
        assert not connection.is_open
        assert connection.participant is None
        assert connection.session_id is None

    def test_connection_ids_are_unique(self):
        first = Connection(create_mock_websocket())
        second = Connection(create_mock_websocket())

        assert first.id != second.id

    @pytest.mark.asyncio
    async def test_accept_opens_connection(self):
        websocket = create_mock_websocket()
        connection = Connection(websocket)

        await connection.accept()

        websocket.accept.assert_awaited_once()
        assert connection.state is ConnectionState.OPEN
        assert connection.is_open

    @pytest.mark.asyncio
    async def test_not_open_when_client_disconnected(self):
        websocket = create_mock_websocket()
        connection = Connection(websocket)
        await connection.accept()

        websocket.client_state = WebSocketState.DISCONNECTED

        assert not connection.is_open

    @pytest.mark.asyncio
    async def test_close_closes_transport_once(self):
        websocket = create_mock_websocket()
        connection = Connection(websocket)
        await connection.accept()

        await connection.close(code=1001, reason="bye")
        websocket.application_state = WebSocketState.DISCONNECTED
        await connection.close()

        websocket.close.assert_awaited_once_with(code=1001, reason="bye")
        assert connection.state is ConnectionState.CLOSED

    @pytest.mark.asyncio
    async def test_close_tolerates_race_with_client(self):
        websocket = create_mock_websocket()
        websocket.close.side_effect = RuntimeError("already closed")
        connection = Connection(websocket)

        await connection.close()

        assert connection.state is ConnectionState.CLOSED

    def test_mark_closed(self):
        connection = Connection(create_mock_websocket())
        connection.state = ConnectionState.OPEN

        connection.mark_closed()

        assert connection.state is ConnectionState.CLOSED
        assert not connection.is_open

    def test_begin_teardown_only_once(self):
        connection = Connection(create_mock_websocket())

        assert connection.begin_teardown() is True
        assert connection.begin_teardown() is False
