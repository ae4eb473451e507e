"""Alembic migrations produce the same schema as the ORM models."""

from sqlalchemy import create_engine, inspect

from roomchat.core.settings import settings
from roomchat.scripts.migrate import run_upgrade_head


def test_upgrade_head_creates_schema(tmp_path, monkeypatch) -> None:
    db_url = f"sqlite:///{tmp_path / 'migrated.db'}"
    monkeypatch.setattr(settings, "database_url", db_url)

    run_upgrade_head()

    engine = create_engine(db_url)
    try:
        inspector = inspect(engine)
        assert {"user", "room", "room_user", "message", "alembic_version"} <= set(
            inspector.get_table_names()
        )
        cursor_fks = [
            fk
            for fk in inspector.get_foreign_keys("room_user")
            if fk["constrained_columns"] == ["last_read_message_id"]
        ]
        assert len(cursor_fks) == 1
        assert cursor_fks[0]["referred_table"] == "message"
        unique_sets = {tuple(u["column_names"]) for u in inspector.get_unique_constraints("room_user")}
        assert ("user_id", "room_id") in unique_sets
    finally:
        engine.dispose()
