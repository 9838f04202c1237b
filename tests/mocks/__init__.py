"""
Mock factory functions for testing.
"""

from tests.mocks.websocket_mocks import (
    create_mock_websocket,
    create_open_connection,
    frames_of_type,
    sent_frames,
)

__all__ = [
    "create_mock_websocket",
    "create_open_connection",
    "frames_of_type",
    "sent_frames",
]
