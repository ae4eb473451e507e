"""SQLAlchemy model for registered accounts."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from roomchat.db.session import Base
from roomchat.db.time import utcnow

USER_TYPE_USER = "user"


class User(Base):
    """An account identified by a unique username and email."""

    __tablename__ = "user"

    user_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    user_type: Mapped[str] = mapped_column(String(16), nullable=False, default=USER_TYPE_USER)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
