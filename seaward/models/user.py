"""User model for SQLModel."""
from sqlmodel import SQLModel, Field, Relationship
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Optional
import uuid

from seaward.models.types import UTCDateTime, utc_now

if TYPE_CHECKING:
    from seaward.models.project import UserProject


class UserRole(str, Enum):
    """User permission level"""
    ADMIN = "admin"
    USER = "user"


class User(SQLModel, table=True):
    """User entity for authentication and project ownership."""
    __tablename__ = "users"

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        primary_key=True,
        index=True
    )
    email: str = Field(unique=True, index=True, max_length=255)
    username: Optional[str] = Field(default=None, max_length=255)
    password_hash: Optional[str] = Field(default=None, max_length=255)
    role: str = Field(default=UserRole.USER.value, max_length=20)
    avatar_id: Optional[str] = Field(default=None, foreign_key="media.id")
    certificate_authority_data: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)

    projects: list["UserProject"] = Relationship(back_populates="user")

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value
