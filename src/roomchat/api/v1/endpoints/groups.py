"""Group-related endpoints for the roomchat API."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from roomchat.api.v1.dependencies import CurrentUserDep, SessionDep, http_error
from roomchat.models import Room
from roomchat.schemas.group import (
    GroupCreate,
    GroupCreateResponse,
    GroupResponse,
    GroupSummaryResponse,
    InviteOutcomeResponse,
    InviteRequest,
)
from roomchat.services import groups
from roomchat.services.errors import RoomchatError
from roomchat.services.groups import GroupSummary, InviteOutcome

router = APIRouter(prefix="/groups", tags=["groups"])


@router.get("/", response_model=list[GroupSummaryResponse])
async def list_groups(current_user: CurrentUserDep, db: SessionDep) -> list[GroupSummary]:
    """List the caller's groups with last activity and unread counts."""
    return groups.list_groups(db, current_user.username)


@router.post("/", response_model=GroupCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_group(
    group_data: GroupCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> GroupCreateResponse:
    """Create a group with the caller as creator; unknown invitees are skipped."""
    try:
        creation = groups.create_group(
            db,
            group_data.name,
            current_user.username,
            group_data.invitees,
        )
    except ValueError as err:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(err)) from err
    except RoomchatError as err:
        raise http_error(err) from err
    return GroupCreateResponse.model_validate(creation)


@router.get("/{room_id}", response_model=GroupResponse)
async def get_group(room_id: int, current_user: CurrentUserDep, db: SessionDep) -> Room:
    """Get a group the caller belongs to."""
    try:
        return groups.get_group(db, room_id, current_user.username)
    except RoomchatError as err:
        raise http_error(err) from err


@router.get("/{room_id}/members", response_model=list[str])
async def list_members(room_id: int, current_user: CurrentUserDep, db: SessionDep) -> list[str]:
    """List usernames of the group's members."""
    try:
        return groups.list_members(db, room_id, current_user.username)
    except RoomchatError as err:
        raise http_error(err) from err


@router.post("/{room_id}/members", response_model=list[InviteOutcomeResponse])
async def invite_members(
    room_id: int,
    invite: InviteRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> list[InviteOutcome]:
    """Add users to the group; each username gets its own outcome."""
    try:
        return groups.invite_members(db, room_id, current_user.username, invite.usernames)
    except RoomchatError as err:
        raise http_error(err) from err
