"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .group import (
    GroupCreate,
    GroupCreateResponse,
    GroupResponse,
    GroupSummaryResponse,
    InviteOutcomeResponse,
    InviteRequest,
)
from .message import MessageCreate, MessageResponse, ReadCursorResponse
from .user import LoginRequest, LoginResponse, SignupRequest, UserResponse

__all__ = [
    "GroupCreate", "GroupCreateResponse", "GroupResponse", "GroupSummaryResponse",
    "InviteOutcomeResponse", "InviteRequest",
    "MessageCreate", "MessageResponse", "ReadCursorResponse",
    "LoginRequest", "LoginResponse", "SignupRequest", "UserResponse",
]
