"""Group-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from roomchat.services.groups import InviteStatus


class GroupCreate(BaseModel):
    """Schema for creating a group; the caller becomes its first member."""

    name: str = Field(..., min_length=1, max_length=100)
    invitees: list[str] = Field(default_factory=list, description="Usernames to add")


class InviteRequest(BaseModel):
    """Schema for adding members to an existing group."""

    usernames: list[str] = Field(..., min_length=1)


class InviteOutcomeResponse(BaseModel):
    username: str
    status: InviteStatus

    model_config = ConfigDict(from_attributes=True)


class GroupCreateResponse(BaseModel):
    """Result of group creation, including skipped invitees."""

    room_id: int
    name: str
    ok: bool = Field(..., description="Always true; failures are error responses")
    invitees: list[InviteOutcomeResponse]

    model_config = ConfigDict(from_attributes=True)


class GroupResponse(BaseModel):
    """Schema for room information returned by the API."""

    room_id: int
    name: str
    start_datetime: datetime

    model_config = ConfigDict(from_attributes=True)


class GroupSummaryResponse(BaseModel):
    """One entry of the caller's group list."""

    room_id: int
    name: str
    last_message_at: datetime | None
    last_message_text: str | None
    last_message_sender: str | None
    days_since_last_message: int | None
    unread_count: int

    model_config = ConfigDict(from_attributes=True)
