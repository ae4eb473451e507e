"""User directory endpoints for the roomchat API."""

from __future__ import annotations

from fastapi import APIRouter

from roomchat.api.v1.dependencies import CurrentUserDep, SessionDep
from roomchat.models import User
from roomchat.schemas.user import UserResponse
from roomchat.services import accounts

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
async def read_me(current_user: CurrentUserDep) -> User:
    """Return the authenticated user."""
    return current_user


@router.get("/", response_model=list[str])
async def list_users(current_user: CurrentUserDep, db: SessionDep) -> list[str]:
    """List every other username, e.g. to choose group invitees."""
    return accounts.list_other_usernames(db, current_user.username)
