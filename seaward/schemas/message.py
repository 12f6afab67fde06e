"""Session message and media schemas."""
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from seaward.schemas.ui_message import UIMessage, UIMessagePart


class MessageCreate(BaseModel):
    """A new message for a session; the id is generated server side."""
    role: Literal["system", "user", "assistant"]
    parts: List[UIMessagePart]
    metadata: Optional[Dict[str, Any]] = None
    project_session: str


class MessageUpdate(BaseModel):
    """Only the UI message fields can be changed."""
    role: Optional[Literal["system", "user", "assistant"]] = None
    parts: Optional[List[UIMessagePart]] = None
    metadata: Optional[Dict[str, Any]] = None


class MessageRead(BaseModel):
    """Stored message with its session link."""
    id: str
    role: str
    parts: List[Dict[str, Any]]
    metadata: Optional[Dict[str, Any]] = None
    project_session: str
    created_at: datetime
    updated_at: datetime


class SaveMessagesRequest(BaseModel):
    """Full message list of a session; entries are validated one by one."""
    messages: List[Dict[str, Any]]


class SessionMessagesResponse(BaseModel):
    messages: List[UIMessage]


class MediaCreate(BaseModel):
    """Media metadata; alt text is mandatory."""
    alt: str = Field(..., min_length=1, max_length=500)
    filename: Optional[str] = None
    mime_type: Optional[str] = None
    filesize: Optional[int] = None
    url: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None


class MediaUpdate(BaseModel):
    alt: Optional[str] = Field(None, min_length=1, max_length=500)
    filename: Optional[str] = None
    url: Optional[str] = None


class MediaRead(BaseModel):
    id: str
    alt: str
    filename: Optional[str] = None
    mime_type: Optional[str] = None
    filesize: Optional[int] = None
    url: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
