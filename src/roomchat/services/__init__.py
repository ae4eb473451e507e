"""Business logic services for the roomchat application."""

from . import accounts, groups, membership, messaging, read_cursor
from .errors import (
    CreatorNotFoundError,
    DuplicateUserError,
    InvalidCredentialsError,
    NotAMemberError,
    NotFoundError,
    RoomchatError,
    RoomNotFoundError,
    StoreFailureError,
    UserNotFoundError,
)

__all__ = [
    "accounts",
    "groups",
    "membership",
    "messaging",
    "read_cursor",
    "CreatorNotFoundError",
    "DuplicateUserError",
    "InvalidCredentialsError",
    "NotAMemberError",
    "NotFoundError",
    "RoomchatError",
    "RoomNotFoundError",
    "StoreFailureError",
    "UserNotFoundError",
]
