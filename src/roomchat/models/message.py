"""SQLAlchemy model for room messages."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from roomchat.db.session import Base
from roomchat.db.time import utcnow
from roomchat.models.room import RoomUser


class Message(Base):
    """Append-only text message.

    The room and the author are both reached through the sender's membership
    row; messages are never edited or deleted.
    """

    __tablename__ = "message"

    message_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    room_user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("room_user.room_user_id"), nullable=False, index=True
    )
    sent_datetime: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, index=True
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)

    sender_membership: Mapped[RoomUser] = relationship(
        "RoomUser", foreign_keys=[room_user_id]
    )
