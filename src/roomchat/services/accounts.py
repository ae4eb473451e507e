"""Account signup, credential checks and the user directory."""
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from roomchat.core.security import hash_password, verify_password
from roomchat.models import User
from roomchat.repositories import UserRepository
from roomchat.services.errors import (
    DuplicateUserError,
    InvalidCredentialsError,
    StoreFailureError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)

__all__ = [
    "authenticate",
    "get_user",
    "list_other_usernames",
    "signup",
]


def signup(db: Session, *, username: str, email: str, password: str) -> User:
    """Create an account with a hashed password.

    Raises:
        DuplicateUserError: If the username or email is already taken.
        StoreFailureError: If the insert failed for any other reason.
    """
    users = UserRepository(db)
    try:
        if users.get_by_username(username) is not None:
            raise DuplicateUserError("username")
        if users.get_by_email(email) is not None:
            raise DuplicateUserError("email")
        user = users.create(
            email=email,
            username=username,
            password_hash=hash_password(password),
        )
        db.commit()
        db.refresh(user)
    except IntegrityError as err:
        # A concurrent signup claimed the name between the check and the insert.
        db.rollback()
        raise DuplicateUserError("username or email") from err
    except SQLAlchemyError as err:
        db.rollback()
        logger.exception("Error inserting user %s", username)
        raise StoreFailureError("signup failed") from err

    logger.info("Created user %s", username)
    return user


def authenticate(db: Session, username: str, password: str) -> User:
    """Return the user if the password matches.

    Unknown usernames and wrong passwords raise the same error.
    """
    try:
        user = UserRepository(db).get_by_username(username)
    except SQLAlchemyError as err:
        db.rollback()
        logger.exception("Error looking up user %s", username)
        raise StoreFailureError("login failed") from err

    if user is None or not verify_password(user.password_hash, password):
        logger.info("Invalid username/password combination for %s", username)
        raise InvalidCredentialsError("Invalid username/password combination")
    return user


def get_user(db: Session, username: str) -> User:
    """Return a user by username or raise `UserNotFoundError`."""
    try:
        user = UserRepository(db).get_by_username(username)
    except SQLAlchemyError as err:
        db.rollback()
        logger.exception("Error looking up user %s", username)
        raise StoreFailureError("user lookup failed") from err
    if user is None:
        raise UserNotFoundError(username)
    return user


def list_other_usernames(db: Session, username: str) -> list[str]:
    """Return every username except the caller's, for picking invitees."""
    try:
        return UserRepository(db).list_usernames(exclude=username)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error getting all users")
        return []
