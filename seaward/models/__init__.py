"""SQLModel entities for the Seaward backend."""
from seaward.models.media import Media
from seaward.models.user import User, UserRole
from seaward.models.project import UserProject
from seaward.models.session import ProjectSession
from seaward.models.message import SessionMessage, MessageRole

__all__ = [
    "Media",
    "User",
    "UserRole",
    "UserProject",
    "ProjectSession",
    "SessionMessage",
    "MessageRole",
]
