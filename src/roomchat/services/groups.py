"""Group (room) lifecycle: creation, invitations and the per-user overview."""
from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from roomchat.db.time import utcnow
from roomchat.models import Room
from roomchat.repositories import MessageRepository, RoomRepository, UserRepository
from roomchat.services.errors import (
    CreatorNotFoundError,
    RoomNotFoundError,
    StoreFailureError,
)
from roomchat.services.membership import require_membership
from roomchat.services.read_cursor import unread_count

logger = logging.getLogger(__name__)

__all__ = [
    "GroupCreation",
    "GroupSummary",
    "InviteOutcome",
    "InviteStatus",
    "create_group",
    "get_group",
    "invite_members",
    "list_groups",
    "list_members",
]


class InviteStatus(str, Enum):
    """Result of trying to attach one invitee to a room."""

    ADDED = "added"
    NOT_FOUND = "not_found"
    ALREADY_MEMBER = "already_member"
    FAILED = "failed"


@dataclass(frozen=True)
class InviteOutcome:
    username: str
    status: InviteStatus


@dataclass(frozen=True)
class GroupCreation:
    """Outcome of `create_group`.

    The room and the creator's membership always exist together; invitees
    that could not be added are reported, not raised.
    """

    room_id: int
    name: str
    invitees: list[InviteOutcome] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """Boolean success reported to clients.

        Always True: `create_group` raises instead of returning a failed
        creation, and invitee problems never fail the group.
        """
        return True

    @property
    def skipped(self) -> list[str]:
        """Invitees that were not added, whether unknown or failed."""
        return [
            o.username
            for o in self.invitees
            if o.status in (InviteStatus.NOT_FOUND, InviteStatus.FAILED)
        ]


@dataclass(frozen=True)
class GroupSummary:
    """One row of a user's group list."""

    room_id: int
    name: str
    last_message_at: datetime | None
    last_message_text: str | None
    last_message_sender: str | None
    days_since_last_message: int | None
    unread_count: int


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _add_invitees(db: Session, room_id: int, usernames: Iterable[str]) -> list[InviteOutcome]:
    users = UserRepository(db)
    rooms = RoomRepository(db)
    outcomes: list[InviteOutcome] = []
    for raw in usernames:
        username = raw.strip()
        if not username:
            continue
        # One savepoint per invitee: a failure here leaves the room, the
        # creator link and every other invitee intact.
        try:
            with db.begin_nested():
                user_id = users.get_id(username)
                if user_id is None:
                    status = InviteStatus.NOT_FOUND
                elif rooms.get_membership(user_id, room_id) is not None:
                    status = InviteStatus.ALREADY_MEMBER
                else:
                    rooms.add_member(user_id, room_id)
                    status = InviteStatus.ADDED
        except IntegrityError:
            # Lost a race with a concurrent invite of the same user.
            logger.info("Invitee %s already joined room %s", username, room_id)
            status = InviteStatus.ALREADY_MEMBER
        except SQLAlchemyError:
            logger.exception("Error adding invitee %r to room %s", username, room_id)
            status = InviteStatus.FAILED
        if status is InviteStatus.NOT_FOUND:
            logger.warning("Skipping unknown invitee %r for room %s", username, room_id)
        outcomes.append(InviteOutcome(username, status))
    return outcomes


def create_group(
    db: Session,
    name: str,
    creator_username: str,
    member_usernames: Iterable[str] = (),
    *,
    now: datetime | None = None,
) -> GroupCreation:
    """Create a room owned by `creator_username` and invite members.

    Unknown invitees are skipped and logged; the group is still created.

    Raises:
        ValueError: If the name is blank.
        CreatorNotFoundError: If the creator cannot be resolved. Nothing is persisted.
        StoreFailureError: If the room or the creator link could not be written.
    """
    group_name = name.strip()
    if not group_name:
        raise ValueError("Group name must not be empty")

    users = UserRepository(db)
    rooms = RoomRepository(db)
    try:
        creator_id = users.get_id(creator_username)
        if creator_id is None:
            logger.warning("Cannot create group %r: creator %s not found", group_name, creator_username)
            raise CreatorNotFoundError(creator_username)

        room = rooms.create_room(group_name, now or utcnow())
        room_id = room.room_id
        rooms.add_member(creator_id, room_id)
        outcomes = _add_invitees(db, room_id, member_usernames)
        db.commit()
    except SQLAlchemyError as err:
        db.rollback()
        logger.exception("Error creating group %r for %s", group_name, creator_username)
        raise StoreFailureError("group creation failed") from err

    logger.info(
        "Created room %s (%r) for %s with %d invitee(s)",
        room_id,
        group_name,
        creator_username,
        sum(1 for o in outcomes if o.status is InviteStatus.ADDED),
    )
    return GroupCreation(room_id=room_id, name=group_name, invitees=outcomes)


def invite_members(
    db: Session,
    room_id: int,
    inviter_username: str,
    usernames: Iterable[str],
) -> list[InviteOutcome]:
    """Add users to an existing room on behalf of one of its members."""
    require_membership(db, inviter_username, room_id)
    try:
        outcomes = _add_invitees(db, room_id, usernames)
        db.commit()
    except SQLAlchemyError as err:
        db.rollback()
        logger.exception("Error inviting members to room %s", room_id)
        raise StoreFailureError("invite failed") from err
    return outcomes


def get_group(db: Session, room_id: int, username: str) -> Room:
    """Return a room the caller belongs to.

    Raises:
        RoomNotFoundError: If no such room exists.
        NotAMemberError: If the caller is not in the room.
    """
    try:
        room = RoomRepository(db).get_room(room_id)
    except SQLAlchemyError as err:
        db.rollback()
        logger.exception("Error fetching room %s", room_id)
        raise StoreFailureError("room lookup failed") from err
    if room is None:
        raise RoomNotFoundError(room_id)
    require_membership(db, username, room_id)
    return room


def list_members(db: Session, room_id: int, username: str) -> list[str]:
    """Return member usernames of a room the caller belongs to."""
    require_membership(db, username, room_id)
    try:
        return RoomRepository(db).list_member_usernames(room_id)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error listing members of room %s", room_id)
        return []


def list_groups(db: Session, username: str, *, now: datetime | None = None) -> list[GroupSummary]:
    """Return the user's rooms with last activity and unread badge counts.

    Rooms with the most recent message come first; rooms without messages
    come last. Storage errors yield an empty list.
    """
    today = (now or utcnow()).date()
    users = UserRepository(db)
    rooms = RoomRepository(db)
    messages = MessageRepository(db)
    summaries: list[GroupSummary] = []
    try:
        user_id = users.get_id(username)
        if user_id is None:
            return []
        for room_id, name in rooms.list_for_username(username):
            cursor = rooms.get_read_cursor(user_id, room_id)
            last = messages.last_message(room_id)
            last_at = _as_utc(last.sent_datetime) if last is not None else None
            summaries.append(
                GroupSummary(
                    room_id=room_id,
                    name=name,
                    last_message_at=last_at,
                    last_message_text=last.text if last is not None else None,
                    last_message_sender=last.sender_username if last is not None else None,
                    days_since_last_message=(
                        max(0, (today - last_at.date()).days) if last_at is not None else None
                    ),
                    unread_count=unread_count(db, room_id, cursor, user_id),
                )
            )
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error getting groups for %s", username)
        return []

    summaries.sort(
        key=lambda s: (
            s.last_message_at is None,
            -s.last_message_at.timestamp() if s.last_message_at is not None else 0.0,
            s.room_id,
        )
    )
    return summaries
