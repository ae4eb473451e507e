"""SQLAlchemy models for rooms and room membership."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from roomchat.db.session import Base
from roomchat.db.time import utcnow
from roomchat.models.user import User


class Room(Base):
    """A group conversation."""

    __tablename__ = "room"

    room_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    start_datetime: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    memberships: Mapped[list[RoomUser]] = relationship("RoomUser", back_populates="room")


class RoomUser(Base):
    """Membership of one user in one room, carrying that user's read cursor.

    `last_read_message_id` is the highest message id the member has seen in
    the room, or None when nothing has been read yet. It only moves forward.
    """

    __tablename__ = "room_user"
    __table_args__ = (UniqueConstraint("user_id", "room_id", name="uq_room_user_user_room"),)

    room_user_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("user.user_id"), nullable=False, index=True
    )
    room_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("room.room_id"), nullable=False, index=True
    )
    # room_user <-> message is a cycle; the constraint is added after both tables exist.
    last_read_message_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey(
            "message.message_id",
            use_alter=True,
            name="fk_room_user_last_read_message",
        ),
        nullable=True,
    )

    user: Mapped[User] = relationship("User")
    room: Mapped[Room] = relationship("Room", back_populates="memberships")
