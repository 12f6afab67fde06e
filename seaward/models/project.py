"""
UserProject Model

A project a user works on through the assistant: where it is served, how to
reach its machine over SSH, and the chat sessions held about it.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, TYPE_CHECKING
import uuid

from sqlmodel import SQLModel, Field, Relationship, Column
from sqlalchemy import JSON

from seaward.models.types import UTCDateTime, utc_now

if TYPE_CHECKING:
    from seaward.models.user import User
    from seaward.models.session import ProjectSession


class UserProject(SQLModel, table=True):
    """
    Project owned by one user.

    Relationships:
    - Belongs to one User
    - Has many ProjectSessions

    ssh_credentials is a list of {address, port, username, password} entries.
    """
    __tablename__ = "user_projects"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    name: str = Field(max_length=255)
    user_id: str = Field(foreign_key="users.id", index=True)
    ssh_credentials: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON))
    public_address: Optional[str] = Field(default=None, max_length=2000)
    internal_vector_store_address: Optional[str] = Field(default=None, max_length=2000)
    created_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)

    user: "User" = Relationship(back_populates="projects")
    sessions: List["ProjectSession"] = Relationship(back_populates="project")
