"""The migration chain builds the same tables as the models."""
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

ALEMBIC_DIR = Path(__file__).resolve().parent.parent / "alembic"


def test_upgrade_head_creates_schema(tmp_path):
    url = f"sqlite:///{tmp_path / 'seaward.db'}"
    config = Config()
    config.set_main_option("script_location", str(ALEMBIC_DIR))
    config.set_main_option("sqlalchemy.url", url)

    command.upgrade(config, "head")

    inspector = inspect(create_engine(url))
    assert {"media", "users", "user_projects", "project_sessions", "session_messages"} <= set(inspector.get_table_names())
    columns = {c["name"] for c in inspector.get_columns("session_messages")}
    assert {"id", "role", "parts", "metadata", "project_session_id", "created_at", "updated_at"} <= columns
