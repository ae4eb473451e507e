"""initial schema: user, room, room_user, message

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-10-19 09:12:40.118204

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the four core tables."""
    op.create_table(
        "user",
        sa.Column("user_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(length=20), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("user_type", sa.String(length=16), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("user_id"),
        sa.UniqueConstraint("username"),
        sa.UniqueConstraint("email"),
    )
    op.create_table(
        "room",
        sa.Column("room_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("start_datetime", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("room_id"),
    )
    op.create_table(
        "room_user",
        sa.Column("room_user_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("room_id", sa.Integer(), nullable=False),
        sa.Column("last_read_message_id", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(["room_id"], ["room.room_id"]),
        sa.ForeignKeyConstraint(["user_id"], ["user.user_id"]),
        sa.PrimaryKeyConstraint("room_user_id"),
        sa.UniqueConstraint("user_id", "room_id", name="uq_room_user_user_room"),
    )
    op.create_index("ix_room_user_user_id", "room_user", ["user_id"])
    op.create_index("ix_room_user_room_id", "room_user", ["room_id"])
    op.create_table(
        "message",
        sa.Column("message_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("room_user_id", sa.Integer(), nullable=False),
        sa.Column("sent_datetime", sa.DateTime(timezone=True), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(["room_user_id"], ["room_user.room_user_id"]),
        sa.PrimaryKeyConstraint("message_id"),
    )
    op.create_index("ix_message_room_user_id", "message", ["room_user_id"])
    op.create_index("ix_message_sent_datetime", "message", ["sent_datetime"])

    # room_user and message reference each other; add the cursor FK last.
    with op.batch_alter_table("room_user") as batch_op:
        batch_op.create_foreign_key(
            "fk_room_user_last_read_message",
            "message",
            ["last_read_message_id"],
            ["message_id"],
        )


def downgrade() -> None:
    """Drop the core tables."""
    with op.batch_alter_table("room_user") as batch_op:
        batch_op.drop_constraint("fk_room_user_last_read_message", type_="foreignkey")
    op.drop_index("ix_message_sent_datetime", table_name="message")
    op.drop_index("ix_message_room_user_id", table_name="message")
    op.drop_table("message")
    op.drop_index("ix_room_user_room_id", table_name="room_user")
    op.drop_index("ix_room_user_user_id", table_name="room_user")
    op.drop_table("room_user")
    op.drop_table("room")
    op.drop_table("user")
