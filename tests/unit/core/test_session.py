"""
Tests for room state.

This module tests admitting and dismissing participants, history
retention and snapshots.
"""

import gc

from translation_relay.core.participant import Participant
from translation_relay.core.session import Session, SessionState
from translation_relay.schemas.events import TranslationEvent

from tests.mocks import create_open_connection


def make_event(index: int) -> TranslationEvent:
    return TranslationEvent(
        id=f"trans_{index}",
        author_id="user_a",
        author_name="Alice",
        source_text=f"metin {index}",
        translated_text=f"text {index}",
        language="en",
        timestamp="2024-01-01T00:00:00.000Z",
    )


class TestSessionMembership:
    """Tests for admit/dismiss and the empty/active states."""

    def test_new_session_is_empty(self):
        session = Session("r1")

        assert session.state is SessionState.EMPTY
        assert session.is_empty
        assert len(session) == 0

    def test_admit_activates_session(self):
        session = Session("r1")
        connection = create_open_connection()

        previous = session.admit(Participant("user_a", "Alice", "r1"), connection)

        assert previous is None
        assert session.state is SessionState.ACTIVE
        assert "user_a" in session
        assert session.connection_for("user_a") is connection

    def test_admit_same_id_overwrites_and_returns_previous_connection(self):
        session = Session("r1")
        first = create_open_connection()
        second = create_open_connection()

        session.admit(Participant("user_a", "Alice", "r1"), first)
        previous = session.admit(Participant("user_a", "Alice 2", "r1"), second)

        assert previous is first
        assert len(session) == 1
        assert session.get("user_a").display_name == "Alice 2"
        assert session.connection_for("user_a") is second

    def test_readmit_same_connection_returns_none(self):
        session = Session("r1")
        connection = create_open_connection()
        participant = Participant("user_a", "Alice", "r1")

        session.admit(participant, connection)

        assert session.admit(participant, connection) is None

    def test_dismiss_last_participant_empties_session(self):
        session = Session("r1")
        connection = create_open_connection()
        session.admit(Participant("user_a", "Alice", "r1"), connection)

        removed = session.dismiss("user_a")

        assert removed.id == "user_a"
        assert session.is_empty

    def test_dismiss_unknown_participant(self):
        session = Session("r1")

        assert session.dismiss("nobody") is None

    def test_dismiss_with_stale_connection_keeps_successor(self):
        session = Session("r1")
        stale = create_open_connection()
        current = create_open_connection()
        session.admit(Participant("user_a", "Alice", "r1"), stale)
        session.admit(Participant("user_a", "Alice", "r1"), current)

        assert session.dismiss("user_a", stale) is None
        assert session.connection_for("user_a") is current

        assert session.dismiss("user_a", current) is not None
        assert session.is_empty

    def test_session_does_not_keep_connection_alive(self):
        session = Session("r1")
        connection = create_open_connection()
        session.admit(Participant("user_a", "Alice", "r1"), connection)

        del connection
        gc.collect()

        assert session.connection_for("user_a") is None
        assert session.recipients() == []


class TestSessionRecipients:
    def test_recipients_excludes_participant(self):
        session = Session("r1")
        conn_a = create_open_connection()
        conn_b = create_open_connection()
        session.admit(Participant("user_a", "Alice", "r1"), conn_a)
        session.admit(Participant("user_b", "Bob", "r1"), conn_b)

        recipients = session.recipients(exclude_participant_id="user_a")

        assert [participant.id for participant, _ in recipients] == ["user_b"]
        assert recipients[0][1] is conn_b

    def test_recipients_without_exclusion(self):
        session = Session("r1")
        conn_a = create_open_connection()
        conn_b = create_open_connection()
        session.admit(Participant("user_a", "Alice", "r1"), conn_a)
        session.admit(Participant("user_b", "Bob", "r1"), conn_b)

        assert set(session.connections()) == {conn_a, conn_b}


class TestSessionHistory:
    """Tests for history retention and snapshots."""

    def test_history_keeps_last_n_in_insertion_order(self):
        session = Session("r1", history_limit=10)

        for index in range(1, 16):
            session.append_event(make_event(index))

        ids = [event.id for event in session.snapshot().recent_translations]
        assert ids == [f"trans_{index}" for index in range(6, 16)]

    def test_history_below_limit(self):
        session = Session("r1", history_limit=10)
        session.append_event(make_event(1))
        session.append_event(make_event(2))

        ids = [event.id for event in session.snapshot().recent_translations]
        assert ids == ["trans_1", "trans_2"]

    def test_zero_history_limit_keeps_nothing(self):
        session = Session("r1", history_limit=0)
        session.append_event(make_event(1))

        assert session.snapshot().recent_translations == []

    def test_snapshot_lists_participants_without_connections(self):
        session = Session("r1")
        conn_a = create_open_connection()
        conn_b = create_open_connection()
        session.admit(Participant("user_a", "Alice", "r1"), conn_a)
        session.admit(Participant("user_b", "Bob", "r1"), conn_b)

        snapshot = session.snapshot()

        assert [p.model_dump() for p in snapshot.participants] == [
            {"id": "user_a", "name": "Alice"},
            {"id": "user_b", "name": "Bob"},
        ]

    def test_snapshot_is_a_copy(self):
        session = Session("r1")
        session.append_event(make_event(1))

        snapshot = session.snapshot()
        session.append_event(make_event(2))

        assert len(snapshot.recent_translations) == 1
