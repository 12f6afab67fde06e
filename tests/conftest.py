"""Shared fixtures: in-memory database, API client and signed-in users."""
import os

# Configure before any seaward module reads the environment
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEAWARD_AUTH_SECRET"] = "test-secret"
os.environ.pop("SEAWEED_ENGINE_URL", None)
os.environ.pop("GALATEA_RELEASE", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import event
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from seaward.db.config import get_session, get_session_factory
from seaward.models import User, UserProject, ProjectSession
from seaward.routers.auth import create_jwt_token
from seaward.services.user_service import UserService


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def app(engine):
    from seaward.main import app

    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_session_factory] = lambda: (lambda: Session(engine))
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app)


def _make_user(db: Session, email: str, role: str = "user") -> User:
    user = UserService(db).register(email, "secret-password", username=email.split("@")[0])
    if role != "user":
        user.role = role
        db.add(user)
        db.commit()
        db.refresh(user)
    return user


def _headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_jwt_token(user.id, user.email).token}"}


@pytest.fixture
def user(db) -> User:
    return _make_user(db, "owner@example.com")


@pytest.fixture
def other_user(db) -> User:
    return _make_user(db, "stranger@example.com")


@pytest.fixture
def admin_user(db) -> User:
    return _make_user(db, "admin@example.com", role="admin")


@pytest.fixture
def auth_headers(user) -> dict:
    return _headers(user)


@pytest.fixture
def other_headers(other_user) -> dict:
    return _headers(other_user)


@pytest.fixture
def admin_headers(admin_user) -> dict:
    return _headers(admin_user)


@pytest.fixture
def project(db, user) -> UserProject:
    project = UserProject(
        name="Storefront",
        user_id=user.id,
        public_address="https://storefront.example.com",
        ssh_credentials=[{"address": "10.0.0.5", "port": 22, "username": "devbox", "password": "pw"}],
    )
    db.add(project)
    db.commit()
    db.refresh(project)
    return project


@pytest.fixture
def project_session(db, project) -> ProjectSession:
    project_session = ProjectSession(name="First session", project_id=project.id)
    db.add(project_session)
    db.commit()
    db.refresh(project_session)
    return project_session


def user_message(message_id: str, text: str, **extra) -> dict:
    message = {"id": message_id, "role": "user", "parts": [{"type": "text", "text": text}]}
    message.update(extra)
    return message
