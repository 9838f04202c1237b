"""
Pytest configuration and fixtures for testing.

Provides fresh, explicitly constructed room state for every test so no
state leaks between tests.
"""

import os

import pytest

# Never reach the real OpenAI API from tests
os.environ["OPENAI_API_KEY"] = ""

from translation_relay.core.dispatcher import BroadcastDispatcher  # noqa: E402
from translation_relay.core.registry import SessionRegistry  # noqa: E402
from translation_relay.managers.room_manager import RoomManager  # noqa: E402
from translation_relay.settings import DuplicateParticipantPolicy  # noqa: E402


@pytest.fixture
def registry():
    """
    Provides an empty SessionRegistry with a history limit of 10.

    Returns:
        SessionRegistry: Fresh registry instance
    """
    return SessionRegistry(history_limit=10)


@pytest.fixture
def dispatcher(registry):
    """
    Provides a BroadcastDispatcher over the registry fixture.

    Returns:
        BroadcastDispatcher: Dispatcher instance
    """
    return BroadcastDispatcher(registry)


@pytest.fixture
def room_manager_factory():
    """
    Provides a factory building RoomManager instances with custom policies.

    Returns:
        Callable: Factory accepting RoomManager keyword arguments and
        `history_limit`
    """

    def factory(history_limit: int = 10, **kwargs) -> RoomManager:
        kwargs.setdefault(
            "duplicate_policy", DuplicateParticipantPolicy.REPLACE
        )
        return RoomManager(SessionRegistry(history_limit=history_limit), **kwargs)

    return factory


@pytest.fixture
def room_manager(room_manager_factory):
    """
    Provides a RoomManager with default policies (replace duplicates, echo
    translations to their author).

    Returns:
        RoomManager: Room manager instance
    """
    return room_manager_factory()
