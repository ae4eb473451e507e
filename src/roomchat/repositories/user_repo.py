"""Data access helpers for working with accounts."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from roomchat.models.user import USER_TYPE_USER, User

__all__ = ["UserRepository"]


class UserRepository:
    """Thin wrapper around database access for user entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_username(self, username: str) -> User | None:
        """Return a user by unique username."""
        return self.session.scalars(select(User).where(User.username == username)).first()

    def get_by_email(self, email: str) -> User | None:
        """Return a user by unique email address."""
        return self.session.scalars(select(User).where(User.email == email)).first()

    def get_id(self, username: str) -> int | None:
        """Return only the surrogate key for `username`."""
        return self.session.scalar(select(User.user_id).where(User.username == username))

    def list_usernames(self, exclude: str | None = None) -> list[str]:
        """Return all usernames in alphabetical order, optionally skipping one."""
        stmt = select(User.username)
        if exclude is not None:
            stmt = stmt.where(User.username != exclude)
        return list(self.session.scalars(stmt.order_by(User.username)))

    def create(
        self,
        *,
        email: str,
        username: str,
        password_hash: str,
        user_type: str = USER_TYPE_USER,
    ) -> User:
        """Insert a new user and return the persisted ORM instance.

        Uniqueness is enforced by the database; an ``IntegrityError`` escapes
        on collision and is interpreted by the caller.
        """
        user = User(
            email=email,
            username=username,
            password_hash=password_hash,
            user_type=user_type,
        )
        self.session.add(user)
        self.session.flush()
        return user
