"""Append-only room messaging and the read-side views over it."""
from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from roomchat.db.time import utcnow
from roomchat.models import RoomUser
from roomchat.repositories import MessageRepository
from roomchat.services.errors import StoreFailureError
from roomchat.services.membership import require_membership
from roomchat.services.read_cursor import MessageView, advance_cursor, annotate_unread

logger = logging.getLogger(__name__)

__all__ = [
    "list_group_messages",
    "mark_room_read",
    "send_message",
    "view_group_messages",
]

MAX_MESSAGE_LENGTH = 4000


def _commit(db: Session, action: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError as err:
        db.rollback()
        logger.exception("Commit failed while %s", action)
        raise StoreFailureError(f"{action} failed") from err


def send_message(
    db: Session,
    room_id: int,
    sender_username: str,
    text: str,
    *,
    now: datetime | None = None,
) -> MessageView:
    """Append a message to the room and catch the sender's cursor up to it.

    The cursor moves to the id of the message just written, never further,
    so messages other members post concurrently stay unread for the sender.

    Raises:
        ValueError: If the text is blank or too long.
        NotAMemberError: If the sender is not in the room.
        StoreFailureError: If the append or cursor update failed.
    """
    body = text.strip()
    if not body:
        raise ValueError("Message text must not be empty")
    if len(body) > MAX_MESSAGE_LENGTH:
        raise ValueError(f"Message text exceeds {MAX_MESSAGE_LENGTH} characters")

    membership = require_membership(db, sender_username, room_id)
    user_id = membership.user_id
    try:
        message = MessageRepository(db).insert(membership.room_user_id, body, now or utcnow())
        message_id = message.message_id
        sent_at = message.sent_datetime
    except SQLAlchemyError as err:
        db.rollback()
        logger.exception("Error sending message to room %s", room_id)
        raise StoreFailureError("message send failed") from err

    advance_cursor(db, user_id, room_id, upto=message_id)
    _commit(db, "sending a message")
    logger.debug("Message %s appended to room %s by %s", message_id, room_id, sender_username)

    return MessageView(
        message_id=message_id,
        room_id=room_id,
        text=body,
        sent_datetime=sent_at,
        sender_username=sender_username,
        unread=False,
    )


def _fetch_annotated(
    db: Session,
    membership: RoomUser,
    room_id: int,
    viewer_username: str,
) -> list[MessageView]:
    cursor = membership.last_read_message_id
    try:
        rows = MessageRepository(db).list_for_room(room_id)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error getting messages for room %s", room_id)
        return []
    return annotate_unread(rows, cursor, viewer_username)


def list_group_messages(db: Session, room_id: int, viewer_username: str) -> list[MessageView]:
    """Return the room's messages, oldest first, flagged unread for the viewer.

    Has no side effects; see `view_group_messages` for the read-and-advance
    variant used when a member opens the room.
    """
    membership = require_membership(db, viewer_username, room_id)
    return _fetch_annotated(db, membership, room_id, viewer_username)


def view_group_messages(db: Session, room_id: int, viewer_username: str) -> list[MessageView]:
    """Return the annotated messages and mark what was returned as read.

    The cursor advances to the highest id in this response rather than the
    room's current maximum, so a message that lands between the fetch and
    the update stays unread.
    """
    membership = require_membership(db, viewer_username, room_id)
    user_id = membership.user_id
    messages = _fetch_annotated(db, membership, room_id, viewer_username)
    observed_max = max((m.message_id for m in messages), default=None)
    if observed_max is not None:
        advance_cursor(db, user_id, room_id, upto=observed_max)
        _commit(db, "advancing a read cursor")
    return messages


def mark_room_read(db: Session, room_id: int, username: str) -> int | None:
    """Mark every message currently in the room as read for `username`."""
    membership = require_membership(db, username, room_id)
    cursor = advance_cursor(db, membership.user_id, room_id)
    _commit(db, "marking a room read")
    return cursor
