"""User schemas."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class UserRead(BaseModel):
    """User as returned by the API (no password hash)."""
    id: str
    email: str
    username: Optional[str] = None
    role: str
    avatar_id: Optional[str] = None
    certificate_authority_data: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class UserUpdate(BaseModel):
    """Partial user update."""
    email: Optional[EmailStr] = None
    username: Optional[str] = Field(None, max_length=255)
    role: Optional[str] = Field(None, pattern=r"^(admin|user)$")
    avatar_id: Optional[str] = None
    certificate_authority_data: Optional[str] = None
