"""Data access helpers; parameterized SQLAlchemy queries only."""

from .message_repo import MessageRepository, MessageRow
from .room_repo import RoomRepository
from .user_repo import UserRepository

__all__ = ["MessageRepository", "MessageRow", "RoomRepository", "UserRepository"]
