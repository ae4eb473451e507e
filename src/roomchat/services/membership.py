"""Room membership checks that gate every room-scoped operation."""
from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from roomchat.models import RoomUser
from roomchat.repositories import RoomRepository, UserRepository
from roomchat.services.errors import NotAMemberError, StoreFailureError

logger = logging.getLogger(__name__)

__all__ = ["is_member", "require_membership"]


def _find_membership(db: Session, username: str, room_id: int) -> RoomUser | None:
    user_id = UserRepository(db).get_id(username)
    if user_id is None:
        return None
    return RoomRepository(db).get_membership(user_id, room_id)


def is_member(db: Session, username: str, room_id: int) -> bool:
    """Return True if `username` has a membership row for the room.

    An unknown user is simply not a member. Storage errors fail closed.
    """
    try:
        return _find_membership(db, username, room_id) is not None
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Membership lookup failed for %s in room %s", username, room_id)
        return False


def require_membership(db: Session, username: str, room_id: int) -> RoomUser:
    """Return the caller's membership row or refuse the operation.

    Raises:
        NotAMemberError: If the user is unknown or not in the room.
        StoreFailureError: If the lookup itself failed.
    """
    try:
        membership = _find_membership(db, username, room_id)
    except SQLAlchemyError as err:
        db.rollback()
        logger.exception("Membership lookup failed for %s in room %s", username, room_id)
        raise StoreFailureError("membership lookup failed") from err
    if membership is None:
        logger.info("Rejected %s: not a member of room %s", username, room_id)
        raise NotAMemberError(username, room_id)
    return membership
