"""Tests for room membership checks."""

import pytest
from sqlalchemy.exc import OperationalError

from roomchat.repositories import RoomRepository
from roomchat.services.errors import NotAMemberError, StoreFailureError
from roomchat.services.membership import is_member, require_membership


def test_members_are_recognised(db_session, team_room) -> None:
    """Creator and invitee both hold membership rows."""
    assert is_member(db_session, "alice", team_room) is True
    assert is_member(db_session, "bob", team_room) is True


def test_non_member_is_rejected(db_session, team_room, carol) -> None:
    """A registered user outside the room is not a member."""
    assert is_member(db_session, "carol", team_room) is False
    with pytest.raises(NotAMemberError):
        require_membership(db_session, "carol", team_room)


def test_unknown_user_is_treated_as_non_member(db_session, team_room) -> None:
    """A username with no account fails like a non-member instead of raising."""
    assert is_member(db_session, "ghost", team_room) is False
    with pytest.raises(NotAMemberError):
        require_membership(db_session, "ghost", team_room)


def test_unknown_room_is_rejected(db_session, alice) -> None:
    assert is_member(db_session, "alice", 9999) is False


def test_require_membership_returns_row_with_cursor(db_session, team_room, alice) -> None:
    membership = require_membership(db_session, "alice", team_room)
    assert membership.user_id == alice.user_id
    assert membership.room_id == team_room
    assert membership.last_read_message_id is None


def test_store_failure_fails_closed(db_session, team_room, monkeypatch) -> None:
    """Storage errors deny access rather than leaking past the boundary."""

    def boom(self, user_id, room_id):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr(RoomRepository, "get_membership", boom)

    assert is_member(db_session, "alice", team_room) is False
    with pytest.raises(StoreFailureError):
        require_membership(db_session, "alice", team_room)
