"""Data access helpers for rooms and memberships."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import or_, select, update
from sqlalchemy.orm import Session

from roomchat.models import Room, RoomUser, User

__all__ = ["RoomRepository"]


class RoomRepository:
    """Thin wrapper around database access for rooms and their members."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_room(self, room_id: int) -> Room | None:
        """Return a room by identifier."""
        return self.session.get(Room, room_id)

    def create_room(self, name: str, started_at: datetime) -> Room:
        """Insert a room and flush so its id is assigned."""
        room = Room(name=name, start_datetime=started_at)
        self.session.add(room)
        self.session.flush()
        return room

    def add_member(self, user_id: int, room_id: int) -> RoomUser:
        """Insert a membership row with an empty read cursor."""
        membership = RoomUser(user_id=user_id, room_id=room_id, last_read_message_id=None)
        self.session.add(membership)
        self.session.flush()
        return membership

    def list_for_username(self, username: str) -> list[tuple[int, str]]:
        """Return ``(room_id, name)`` for every room the user belongs to."""
        stmt = (
            select(Room.room_id, Room.name)
            .join(RoomUser, RoomUser.room_id == Room.room_id)
            .join(User, User.user_id == RoomUser.user_id)
            .where(User.username == username)
            .order_by(Room.room_id)
        )
        return [(row.room_id, row.name) for row in self.session.execute(stmt)]

    def get_membership(self, user_id: int, room_id: int) -> RoomUser | None:
        """Return the membership row (and therefore the read cursor), if any."""
        stmt = select(RoomUser).where(
            RoomUser.user_id == user_id,
            RoomUser.room_id == room_id,
        )
        return self.session.scalars(stmt).first()

    def get_read_cursor(self, user_id: int, room_id: int) -> int | None:
        """Return the stored cursor value straight from the database."""
        stmt = select(RoomUser.last_read_message_id).where(
            RoomUser.user_id == user_id,
            RoomUser.room_id == room_id,
        )
        return self.session.scalar(stmt)

    def set_read_cursor(self, user_id: int, room_id: int, message_id: int) -> bool:
        """Move the cursor forward to `message_id`.

        The update only applies when the stored cursor is empty or lower, so
        concurrent writers can never move it backwards. Returns True when a
        row changed.
        """
        stmt = (
            update(RoomUser)
            .where(
                RoomUser.user_id == user_id,
                RoomUser.room_id == room_id,
                or_(
                    RoomUser.last_read_message_id.is_(None),
                    RoomUser.last_read_message_id < message_id,
                ),
            )
            .values(last_read_message_id=message_id)
            .execution_options(synchronize_session="fetch")
        )
        result = self.session.execute(stmt)
        return bool(result.rowcount)

    def list_member_usernames(self, room_id: int) -> list[str]:
        """Return usernames of every member of the room, alphabetically."""
        stmt = (
            select(User.username)
            .join(RoomUser, RoomUser.user_id == User.user_id)
            .where(RoomUser.room_id == room_id)
            .order_by(User.username)
        )
        return list(self.session.scalars(stmt))
