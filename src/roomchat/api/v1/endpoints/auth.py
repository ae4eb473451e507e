"""Authentication endpoints for the roomchat API."""

from __future__ import annotations

from fastapi import APIRouter, status

from roomchat.api.v1.dependencies import SessionDep, http_error
from roomchat.core.security import create_access_token
from roomchat.models import User
from roomchat.schemas.user import LoginRequest, LoginResponse, SignupRequest, UserResponse
from roomchat.services import accounts
from roomchat.services.errors import RoomchatError

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post(
    "/signup",
    summary="Create an account",
    status_code=status.HTTP_201_CREATED,
    response_model=UserResponse,
)
async def signup(payload: SignupRequest, db: SessionDep) -> User:
    """Register a new user; username and email must both be unused."""
    try:
        return accounts.signup(
            db,
            username=payload.username,
            email=str(payload.email),
            password=payload.password,
        )
    except RoomchatError as err:
        raise http_error(err) from err


@router.post(
    "/login",
    summary="Exchange a username and password for an access token",
    response_model=LoginResponse,
)
async def login(payload: LoginRequest, db: SessionDep) -> LoginResponse:
    """Authenticate with username and password."""
    try:
        user = accounts.authenticate(db, payload.username, payload.password)
    except RoomchatError as err:
        raise http_error(err) from err

    access_token = create_access_token(user.username, {"user_type": user.user_type})
    return LoginResponse(access_token=access_token, token_type="bearer")
