"""Exception taxonomy raised by the service layer.

Endpoints translate these into HTTP responses; repository errors never cross
the service boundary untranslated.
"""

from __future__ import annotations


class RoomchatError(Exception):
    """Base class for all service-level failures."""


class NotFoundError(RoomchatError):
    """A referenced user, room or membership does not exist."""


class UserNotFoundError(NotFoundError):
    """No account exists for the given username."""

    def __init__(self, username: str) -> None:
        super().__init__(f"User not found: {username}")
        self.username = username


class RoomNotFoundError(NotFoundError):
    """No room exists for the given id."""

    def __init__(self, room_id: int) -> None:
        super().__init__(f"Room not found: {room_id}")
        self.room_id = room_id


class CreatorNotFoundError(UserNotFoundError):
    """The user creating a group could not be resolved."""


class NotAMemberError(RoomchatError):
    """The caller has no membership row for the room."""

    def __init__(self, who: str | int, room_id: int) -> None:
        super().__init__(f"{who} is not a member of room {room_id}")
        self.who = who
        self.room_id = room_id


class DuplicateUserError(RoomchatError):
    """Signup collided with an existing username or email."""

    def __init__(self, field: str) -> None:
        super().__init__(f"{field} already exists")
        self.field = field


class InvalidCredentialsError(RoomchatError):
    """Username/password combination did not match."""


class StoreFailureError(RoomchatError):
    """The backing store failed; details are logged, never returned to clients."""
