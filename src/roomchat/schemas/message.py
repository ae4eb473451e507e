"""Message-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from roomchat.services.messaging import MAX_MESSAGE_LENGTH


class MessageCreate(BaseModel):
    """Schema for posting a message to a group."""

    text: str = Field(..., min_length=1, max_length=MAX_MESSAGE_LENGTH)


class MessageResponse(BaseModel):
    """A message as seen by the requesting member."""

    message_id: int
    room_id: int
    text: str
    sent_datetime: datetime
    sender_username: str
    unread: bool

    model_config = ConfigDict(from_attributes=True)


class ReadCursorResponse(BaseModel):
    """The caller's read cursor for a room."""

    room_id: int
    last_read_message_id: int | None
