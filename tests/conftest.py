# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from roomchat.core.security import create_access_token, hash_password
from roomchat.db.session import Base, enable_sqlite_savepoints
from roomchat.db.session import get_db as app_get_session
from roomchat.main import app as fastapi_app
from roomchat.models import User
from roomchat.repositories import RoomRepository, UserRepository
from roomchat.services.groups import create_group
from roomchat.services.read_cursor import unread_count

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "Secret!Pass1"

# Argon2 is deliberately slow; hash the shared fixture password once.
_TEST_PASSWORD_HASH = hash_password(TEST_PASSWORD)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_savepoints(engine)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()

        # Services commit for real; wipe every table so each test starts empty.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def _make_user(db: Session, username: str) -> User:
    user = User(
        username=username,
        email=f"{username}@roomchat.io",
        password_hash=_TEST_PASSWORD_HASH,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture()
def make_user(db_session: Session) -> Callable[[str], User]:
    """Return a factory persisting users that share `TEST_PASSWORD`."""
    return lambda username: _make_user(db_session, username)


@pytest.fixture()
def alice(make_user: Callable[[str], User]) -> User:
    return make_user("alice")


@pytest.fixture()
def bob(make_user: Callable[[str], User]) -> User:
    return make_user("bob")


@pytest.fixture()
def carol(make_user: Callable[[str], User]) -> User:
    return make_user("carol")


@pytest.fixture()
def team_room(db_session: Session, alice: User, bob: User) -> int:
    """Create a room "Team" owned by alice with bob as a member."""
    creation = create_group(db_session, "Team", "alice", ["bob"])
    return creation.room_id


@pytest.fixture()
def auth_headers() -> Callable[[User], dict[str, str]]:
    """Return a factory producing bearer headers for a user."""

    def _headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user.username)}"}

    return _headers


@pytest.fixture()
def unread_for(db_session: Session) -> Callable[[str, int], int]:
    """Return the unread badge count a user would see for a room."""

    def _unread(username: str, room_id: int) -> int:
        user_id = UserRepository(db_session).get_id(username)
        cursor = RoomRepository(db_session).get_read_cursor(user_id, room_id)
        return unread_count(db_session, room_id, cursor, user_id)

    return _unread
