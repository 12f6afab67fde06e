"""Authentication schemas."""
from pydantic import BaseModel, EmailStr, Field


class TokenResponse(BaseModel):
    """Response containing JWT token after sign in."""
    token: str
    user_id: str
    email: str
    exp: int


class SignUpRequest(BaseModel):
    """Sign up request body."""
    email: EmailStr
    password: str = Field(..., min_length=6)
    username: str | None = None


class SignInRequest(BaseModel):
    """Sign in request body."""
    email: EmailStr
    password: str
