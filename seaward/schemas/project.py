"""Project and session schemas."""
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class SSHCredential(BaseModel):
    """One way of reaching the project's machine over SSH."""
    address: Optional[str] = None
    port: Optional[int] = None
    username: Optional[str] = None
    password: Optional[str] = None


class ProjectCreate(BaseModel):
    """Schema for creating a project."""
    name: str = Field(..., min_length=1, max_length=255)
    ssh_credentials: List[SSHCredential] = Field(default_factory=list)
    public_address: Optional[str] = None
    internal_vector_store_address: Optional[str] = None


class ProjectUpdate(BaseModel):
    """Schema for updating a project."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    ssh_credentials: Optional[List[SSHCredential]] = None
    public_address: Optional[str] = None
    internal_vector_store_address: Optional[str] = None


class SessionRead(BaseModel):
    """Schema for session API responses."""
    id: str
    name: Optional[str] = None
    project_id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProjectRead(BaseModel):
    """Schema for project API responses."""
    id: str
    name: str
    user_id: str
    ssh_credentials: List[Dict[str, Any]] = Field(default_factory=list)
    public_address: Optional[str] = None
    internal_vector_store_address: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    project_sessions: Optional[List[SessionRead]] = None

    class Config:
        from_attributes = True


class SessionCreate(BaseModel):
    """Schema for creating a session; the name defaults to a timestamp."""
    name: Optional[str] = Field(None, max_length=255)


class SessionUpdate(BaseModel):
    """Schema for renaming a session."""
    name: Optional[str] = Field(None, max_length=255)
