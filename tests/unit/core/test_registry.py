"""
Tests for the session registry.
"""

from translation_relay.core.participant import Participant
from translation_relay.core.registry import SessionRegistry

from tests.mocks import create_open_connection


class TestSessionRegistry:
    def test_get_or_create_is_idempotent(self, registry):
        first = registry.get_or_create("r1")
        second = registry.get_or_create("r1")

        assert first is second
        assert len(registry) == 1
        assert "r1" in registry

    def test_get_or_create_uses_history_limit(self):
        registry = SessionRegistry(history_limit=3)

        assert registry.get_or_create("r1").history_limit == 3

    def test_find_unknown_session(self, registry):
        assert registry.find("missing") is None

    def test_remove_unknown_session_is_noop(self, registry):
        assert registry.remove("missing") is False

    def test_remove_refuses_non_empty_session(self, registry):
        connection = create_open_connection()
        session = registry.get_or_create("r1")
        session.admit(Participant("user_a", "Alice", "r1"), connection)

        assert registry.remove("r1") is False
        assert registry.find("r1") is session

    def test_removed_session_is_recreated_fresh(self, registry):
        connection = create_open_connection()
        session = registry.get_or_create("r1")
        session.admit(Participant("user_a", "Alice", "r1"), connection)
        session.dismiss("user_a")

        assert registry.remove("r1") is True
        assert registry.find("r1") is None

        recreated = registry.get_or_create("r1")
        assert recreated is not session
        assert recreated.is_empty

    def test_participant_count(self, registry):
        conn_a = create_open_connection()
        conn_b = create_open_connection()
        registry.get_or_create("r1").admit(
            Participant("user_a", "Alice", "r1"), conn_a
        )
        registry.get_or_create("r2").admit(
            Participant("user_b", "Bob", "r2"), conn_b
        )

        assert registry.participant_count() == 2
        assert sorted(registry.session_ids()) == ["r1", "r2"]

    def test_clear(self, registry):
        registry.get_or_create("r1")
        registry.clear()

        assert len(registry) == 0
