"""Group message endpoints for the roomchat API."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from roomchat.api.v1.dependencies import CurrentUserDep, SessionDep, http_error
from roomchat.schemas.message import MessageCreate, MessageResponse, ReadCursorResponse
from roomchat.services import messaging
from roomchat.services.errors import RoomchatError
from roomchat.services.read_cursor import MessageView

router = APIRouter(prefix="/groups", tags=["messages"])


@router.get("/{room_id}/messages", response_model=list[MessageResponse])
async def get_messages(
    room_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> list[MessageView]:
    """Return the group's messages and mark them read for the caller.

    Each message's `unread` flag reflects the state before this request.
    """
    try:
        return messaging.view_group_messages(db, room_id, current_user.username)
    except RoomchatError as err:
        raise http_error(err) from err


@router.post(
    "/{room_id}/messages",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def send_message(
    room_id: int,
    message_data: MessageCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MessageView:
    """Post a message to a group the caller belongs to."""
    try:
        return messaging.send_message(db, room_id, current_user.username, message_data.text)
    except ValueError as err:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(err)) from err
    except RoomchatError as err:
        raise http_error(err) from err


@router.post("/{room_id}/read", response_model=ReadCursorResponse)
async def mark_read(
    room_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> ReadCursorResponse:
    """Mark every message currently in the group as read."""
    try:
        cursor = messaging.mark_room_read(db, room_id, current_user.username)
    except RoomchatError as err:
        raise http_error(err) from err
    return ReadCursorResponse(room_id=room_id, last_read_message_id=cursor)
