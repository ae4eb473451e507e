"""Per-member read cursors and the unread state derived from them.

Each membership row stores the highest message id its user has seen in the
room. A message is unread for a viewer when its id is above the viewer's
cursor and somebody else sent it. The cursor is coarse: advancing it marks
everything up to the target id as read.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from roomchat.repositories import MessageRepository, MessageRow, RoomRepository
from roomchat.services.errors import NotAMemberError, StoreFailureError

logger = logging.getLogger(__name__)

__all__ = [
    "MessageView",
    "advance_cursor",
    "annotate_unread",
    "is_unread",
    "unread_count",
]


@dataclass(frozen=True)
class MessageView:
    """A message as shown to one particular viewer."""

    message_id: int
    room_id: int
    text: str
    sent_datetime: datetime
    sender_username: str
    unread: bool


def is_unread(
    message_id: int,
    sender_username: str,
    cursor: int | None,
    viewer_username: str,
) -> bool:
    """Return True if the viewer has not yet seen a message from someone else."""
    if sender_username == viewer_username:
        return False
    return cursor is None or message_id > cursor


def annotate_unread(
    messages: Iterable[MessageRow],
    cursor: int | None,
    viewer_username: str,
) -> list[MessageView]:
    """Attach an `unread` flag to each message for `viewer_username`."""
    return [
        MessageView(
            message_id=row.message_id,
            room_id=row.room_id,
            text=row.text,
            sent_datetime=row.sent_datetime,
            sender_username=row.sender_username,
            unread=is_unread(row.message_id, row.sender_username, cursor, viewer_username),
        )
        for row in messages
    ]


def unread_count(
    db: Session,
    room_id: int,
    cursor: int | None,
    exclude_user_id: int | None,
) -> int:
    """Count messages after `cursor` not sent by `exclude_user_id`.

    With no cursor every qualifying message counts. Best effort: a storage
    error is logged and reported as zero.
    """
    try:
        return MessageRepository(db).count_unread(room_id, cursor, exclude_user_id)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Unread count failed for room %s", room_id)
        return 0


def advance_cursor(
    db: Session,
    user_id: int,
    room_id: int,
    upto: int | None = None,
) -> int | None:
    """Move a member's cursor forward and return the stored value.

    Args:
        db: Database session; the caller owns the commit.
        user_id: Member whose cursor moves.
        room_id: Room the cursor belongs to.
        upto: Target message id. ``None`` means the room's current newest
            message, i.e. mark the entire room read.

    Returns:
        The cursor after the update. It is never lower than before.

    Raises:
        NotAMemberError: If the user has no membership row for the room.
        ValueError: If `upto` is not a message of this room.
        StoreFailureError: If the update failed; the session is rolled back.
    """
    rooms = RoomRepository(db)
    messages = MessageRepository(db)
    try:
        membership = rooms.get_membership(user_id, room_id)
        if membership is None:
            raise NotAMemberError(user_id, room_id)

        if upto is None:
            target = messages.max_message_id(room_id)
        else:
            if messages.room_of(upto) != room_id:
                raise ValueError(f"Message {upto} does not belong to room {room_id}")
            target = upto

        if target is None:
            return membership.last_read_message_id

        if rooms.set_read_cursor(user_id, room_id, target):
            logger.debug("Cursor for user %s in room %s advanced to %s", user_id, room_id, target)
        return rooms.get_read_cursor(user_id, room_id)
    except SQLAlchemyError as err:
        db.rollback()
        logger.exception("Cursor update failed for user %s in room %s", user_id, room_id)
        raise StoreFailureError("cursor update failed") from err
