"""Database configuration for the Seaward backend."""
from typing import Callable, Generator
import logging
import os

from sqlmodel import create_engine, Session
from sqlalchemy import event

from seaward import config  # noqa: F401  (loads .env before DATABASE_URL is read)

logger = logging.getLogger(__name__)

# Postgres in production, SQLite file for local development
DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///./seaward_dev.db")

if DATABASE_URL.startswith("postgresql"):
    logger.info("Using PostgreSQL database")
else:
    logger.info(f"Using SQLite database: {DATABASE_URL}")

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

if DATABASE_URL.startswith("sqlite"):
    engine = create_engine(DATABASE_URL, echo=False, connect_args=connect_args)

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()
else:
    engine = create_engine(DATABASE_URL, echo=False, pool_pre_ping=True)


def get_session() -> Generator[Session, None, None]:
    """Dependency for getting database sessions."""
    with Session(engine) as session:
        yield session


def get_session_factory() -> Callable[[], Session]:
    """
    Dependency returning a session factory.

    Streaming routes persist after the response has started, so they open
    their own session instead of borrowing the request-scoped one.
    """
    return lambda: Session(engine)
