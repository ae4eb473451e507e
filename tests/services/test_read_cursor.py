"""Tests for read cursors and unread computation."""

from datetime import UTC, datetime

import pytest

from roomchat.repositories import MessageRow, RoomRepository
from roomchat.services.errors import NotAMemberError
from roomchat.services.groups import create_group
from roomchat.services.messaging import send_message
from roomchat.services.read_cursor import (
    advance_cursor,
    annotate_unread,
    is_unread,
    unread_count,
)

SENT = datetime(2026, 1, 5, 12, 0, tzinfo=UTC)


def _row(message_id: int, sender: str) -> MessageRow:
    return MessageRow(
        message_id=message_id,
        room_id=1,
        text=f"m{message_id}",
        sent_datetime=SENT,
        sender_user_id=0,
        sender_username=sender,
    )


def test_is_unread_rules() -> None:
    """Only other people's messages past the cursor are unread."""
    assert is_unread(5, "alice", None, "bob") is True
    assert is_unread(5, "alice", 4, "bob") is True
    assert is_unread(5, "alice", 5, "bob") is False
    assert is_unread(5, "alice", 9, "bob") is False
    assert is_unread(5, "bob", None, "bob") is False


def test_annotate_unread_with_cursor() -> None:
    rows = [_row(1, "alice"), _row(2, "bob"), _row(3, "alice"), _row(4, "alice")]

    annotated = annotate_unread(rows, 2, "bob")

    assert [m.message_id for m in annotated] == [1, 2, 3, 4]
    assert [m.unread for m in annotated] == [False, False, True, True]


def test_annotate_unread_without_cursor_skips_own_messages() -> None:
    rows = [_row(1, "alice"), _row(2, "bob")]

    annotated = annotate_unread(rows, None, "bob")

    assert [m.unread for m in annotated] == [True, False]


def test_unread_count_bounds(db_session, team_room, alice, bob) -> None:
    """No cursor counts every foreign message; a cursor at the max counts none."""
    for text in ("one", "two"):
        send_message(db_session, team_room, "alice", text)
    last = send_message(db_session, team_room, "bob", "three")

    assert unread_count(db_session, team_room, None, bob.user_id) == 2
    assert unread_count(db_session, team_room, None, alice.user_id) == 1
    assert unread_count(db_session, team_room, last.message_id, bob.user_id) == 0


def test_advance_cursor_marks_whole_room(db_session, team_room, bob) -> None:
    messages = [send_message(db_session, team_room, "alice", f"m{i}") for i in range(3)]

    cursor = advance_cursor(db_session, bob.user_id, team_room)
    db_session.commit()

    assert cursor == messages[-1].message_id
    assert RoomRepository(db_session).get_read_cursor(bob.user_id, team_room) == cursor


def test_advance_cursor_on_empty_room_keeps_none(db_session, team_room, bob) -> None:
    assert advance_cursor(db_session, bob.user_id, team_room) is None


def test_cursor_never_moves_backwards(db_session, team_room, bob) -> None:
    """Any sequence of advances yields a non-decreasing cursor."""
    ids = [send_message(db_session, team_room, "alice", f"m{i}").message_id for i in range(4)]

    seen = []
    for target in (ids[2], ids[0], ids[3], ids[1], None, ids[0]):
        seen.append(advance_cursor(db_session, bob.user_id, team_room, upto=target))
        db_session.commit()

    assert seen == sorted(seen)
    assert seen[-1] == ids[3]


def test_advance_cursor_rejects_message_from_other_room(db_session, team_room, alice, bob) -> None:
    other = create_group(db_session, "Other", "alice", ["bob"])
    foreign = send_message(db_session, other.room_id, "alice", "elsewhere")

    with pytest.raises(ValueError):
        advance_cursor(db_session, bob.user_id, team_room, upto=foreign.message_id)


def test_advance_cursor_requires_membership(db_session, team_room, carol) -> None:
    with pytest.raises(NotAMemberError):
        advance_cursor(db_session, carol.user_id, team_room)
