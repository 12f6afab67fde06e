"""
ProjectSession Model

A chat session inside a project. Its messages are removed one by one by the
session service before the session itself is deleted.
"""

from datetime import datetime
from typing import List, Optional, TYPE_CHECKING
import uuid

from sqlmodel import SQLModel, Field, Relationship

from seaward.models.types import UTCDateTime, utc_now

if TYPE_CHECKING:
    from seaward.models.project import UserProject
    from seaward.models.message import SessionMessage


class ProjectSession(SQLModel, table=True):
    """Chat session belonging to a project."""
    __tablename__ = "project_sessions"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    name: Optional[str] = Field(default=None, max_length=255)
    project_id: str = Field(foreign_key="user_projects.id", index=True)
    created_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)

    project: "UserProject" = Relationship(back_populates="sessions")
    messages: List["SessionMessage"] = Relationship(
        back_populates="project_session",
        sa_relationship_kwargs={"order_by": "SessionMessage.created_at"}
    )
