"""Media model for SQLModel."""
from sqlmodel import SQLModel, Field
from datetime import datetime
from typing import Optional
import uuid

from seaward.models.types import UTCDateTime, utc_now


class Media(SQLModel, table=True):
    """
    Metadata for an uploaded media file (avatars, screenshots).

    Only the document is managed here; the binary lives in external storage.
    """
    __tablename__ = "media"

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        primary_key=True,
        index=True
    )
    alt: str = Field(max_length=500)
    filename: Optional[str] = Field(default=None, max_length=255)
    mime_type: Optional[str] = Field(default=None, max_length=100)
    filesize: Optional[int] = Field(default=None)
    url: Optional[str] = Field(default=None, max_length=2000)
    width: Optional[int] = Field(default=None)
    height: Optional[int] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)
