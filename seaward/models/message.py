"""
SessionMessage Model

Stores one UI message of a project session. The primary key is the UI
message id so a replayed conversation keeps the ids the client generated.
Writes are checked by a before-insert/before-update hook: role enum, parts
shape, metadata shape and created_at normalisation.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from sqlmodel import SQLModel, Field, Relationship, Column
from sqlalchemy import JSON, String, event

from seaward.models.types import UTCDateTime, utc_now
from seaward.schemas.ui_message import validate_parts

if TYPE_CHECKING:
    from seaward.models.session import ProjectSession


class MessageRole(str, Enum):
    """Message sender role"""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class SessionMessage(SQLModel, table=True):
    """
    Individual chat message of a project session.

    Relationships:
    - Belongs to one ProjectSession
    """
    __tablename__ = "session_messages"

    id: str = Field(primary_key=True, max_length=255)
    role: str = Field(sa_column=Column(String(20), nullable=False))
    parts: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    # "metadata" is reserved on declarative classes, so the attribute is renamed
    message_metadata: Optional[Dict[str, Any]] = Field(
        default=None,
        sa_column=Column("metadata", JSON, nullable=True)
    )
    project_session_id: str = Field(foreign_key="project_sessions.id", index=True)
    created_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime, index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)

    project_session: "ProjectSession" = Relationship(back_populates="messages")


def parse_created_at(value: Any) -> Optional[datetime]:
    """Normalise a timestamp to a timezone-aware UTC datetime. Returns None if absent or unparseable."""
    if value is None:
        return None
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    if not isinstance(value, datetime):
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@event.listens_for(SessionMessage, "before_insert")
@event.listens_for(SessionMessage, "before_update")
def validate_session_message(mapper, connection, target: SessionMessage):
    """Reject malformed messages before they reach the table."""
    allowed_roles = {role.value for role in MessageRole}
    if target.role not in allowed_roles:
        raise ValueError(f"Invalid role '{target.role}', expected one of {sorted(allowed_roles)}")

    if target.parts is None:
        raise ValueError("Message parts are required")
    target.parts = validate_parts(target.parts)

    if target.message_metadata is not None and not isinstance(target.message_metadata, dict):
        raise ValueError("Message metadata must be an object")

    target.created_at = parse_created_at(target.created_at) or utc_now()
