"""Shared API dependencies for authentication and error translation."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from roomchat.core.security import InvalidTokenError, decode_access_token
from roomchat.db.session import get_db
from roomchat.models import User
from roomchat.services.accounts import get_user
from roomchat.services.errors import (
    DuplicateUserError,
    InvalidCredentialsError,
    NotAMemberError,
    NotFoundError,
    RoomchatError,
    UserNotFoundError,
)

# HTTP Bearer scheme for JWT authentication
bearer_scheme = HTTPBearer()

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]

GENERIC_ERROR_DETAIL = "Internal server error"


def http_error(err: RoomchatError) -> HTTPException:
    """Translate a service error into the HTTP error returned to clients.

    Storage failures collapse into a generic 500 so no internal detail leaks.
    """
    if isinstance(err, NotAMemberError):
        return HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not a member of this group",
        )
    if isinstance(err, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(err))
    if isinstance(err, DuplicateUserError):
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"{err.field.capitalize()} already exists",
        )
    if isinstance(err, InvalidCredentialsError):
        return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(err))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=GENERIC_ERROR_DETAIL,
    )


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
    db: SessionDep,
) -> User:
    """Get the current authenticated user from JWT token.

    Args:
        credentials: HTTP Bearer token credentials
        db: Database session

    Returns:
        User object for the authenticated user

    Raises:
        HTTPException: If token is invalid or user not found
    """
    try:
        username = decode_access_token(credentials.credentials)
    except InvalidTokenError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        ) from err

    try:
        return get_user(db, username)
    except UserNotFoundError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        ) from err
    except RoomchatError as err:
        raise http_error(err) from err


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]
