"""SQLAlchemy models for the roomchat application."""

from .message import Message
from .room import Room, RoomUser
from .user import User

__all__ = [
    "Message",
    "Room", "RoomUser",
    "User",
]
