"""Data access helpers for room messages."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from roomchat.models import Message, RoomUser, User

__all__ = ["MessageRepository", "MessageRow"]


@dataclass(frozen=True)
class MessageRow:
    """A message joined with its room and sender."""

    message_id: int
    room_id: int
    text: str
    sent_datetime: datetime
    sender_user_id: int
    sender_username: str


class MessageRepository:
    """Thin wrapper around database access for messages."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def _joined(self):
        return (
            select(
                Message.message_id,
                RoomUser.room_id,
                Message.text,
                Message.sent_datetime,
                User.user_id.label("sender_user_id"),
                User.username.label("sender_username"),
            )
            .join(RoomUser, RoomUser.room_user_id == Message.room_user_id)
            .join(User, User.user_id == RoomUser.user_id)
        )

    def insert(self, room_user_id: int, text: str, sent_at: datetime) -> Message:
        """Append a message and flush so the store assigns its id."""
        message = Message(room_user_id=room_user_id, text=text, sent_datetime=sent_at)
        self.session.add(message)
        self.session.flush()
        return message

    def list_for_room(self, room_id: int) -> list[MessageRow]:
        """Return every message in the room, oldest first.

        Ordered by send time with the message id as a stable tiebreak.
        """
        stmt = (
            self._joined()
            .where(RoomUser.room_id == room_id)
            .order_by(Message.sent_datetime.asc(), Message.message_id.asc())
        )
        return [MessageRow(**row._asdict()) for row in self.session.execute(stmt)]

    def last_message(self, room_id: int) -> MessageRow | None:
        """Return the most recently sent message in the room."""
        stmt = (
            self._joined()
            .where(RoomUser.room_id == room_id)
            .order_by(Message.sent_datetime.desc(), Message.message_id.desc())
            .limit(1)
        )
        row = self.session.execute(stmt).first()
        return MessageRow(**row._asdict()) if row is not None else None

    def room_of(self, message_id: int) -> int | None:
        """Return the room a message was posted in."""
        stmt = (
            select(RoomUser.room_id)
            .join(Message, Message.room_user_id == RoomUser.room_user_id)
            .where(Message.message_id == message_id)
        )
        return self.session.scalar(stmt)

    def max_message_id(self, room_id: int) -> int | None:
        """Return the highest message id in the room, or None when empty."""
        stmt = (
            select(func.max(Message.message_id))
            .join(RoomUser, RoomUser.room_user_id == Message.room_user_id)
            .where(RoomUser.room_id == room_id)
        )
        return self.session.scalar(stmt)

    def count_unread(
        self,
        room_id: int,
        after_id: int | None,
        exclude_user_id: int | None,
    ) -> int:
        """Count messages newer than `after_id` not sent by `exclude_user_id`."""
        stmt = (
            select(func.count(Message.message_id))
            .join(RoomUser, RoomUser.room_user_id == Message.room_user_id)
            .where(RoomUser.room_id == room_id)
        )
        if after_id is not None:
            stmt = stmt.where(Message.message_id > after_id)
        if exclude_user_id is not None:
            stmt = stmt.where(RoomUser.user_id != exclude_user_id)
        return int(self.session.scalar(stmt) or 0)
