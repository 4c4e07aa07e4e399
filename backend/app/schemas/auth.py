"""Authentication schemas."""
from typing import Any, Literal

from pydantic import BaseModel, EmailStr, Field

LiquorBaseCode = Literal["RON", "TEQUILA", "WHISKY", "GIN", "VODKA", "BRANDY", "NA"]


class UserRegister(BaseModel):
    """User registration request."""

    email: EmailStr
    password: str = Field(..., min_length=8, max_length=255)
    display_name: str = Field(..., min_length=1, max_length=100)
    favorite_base: LiquorBaseCode


class UserLogin(BaseModel):
    """User login request."""

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=255)


class AccessClaims(BaseModel):
    """Claims carried by an access token."""

    user_id: str
    email: str


class RefreshClaims(BaseModel):
    """Claims carried by a refresh token."""

    user_id: str
    email: str
    token_version: int = 0
    session_id: str


class SessionTokens(BaseModel):
    """Freshly issued token pair handed to the transport layer."""

    access_token: str
    refresh_token: str
    session_id: str


class UserResponse(BaseModel):
    """Public user profile (never includes the password hash)."""

    id: str
    email: str
    display_name: str
    favorite_base: str
    created_at: str

    class Config:
        from_attributes = True


class Envelope(BaseModel):
    """Response envelope shared by every auth endpoint."""

    ok: bool
    message: str | None = None
    user: dict[str, Any] | None = None


class RefreshResponse(BaseModel):
    ok: bool = True
    rotated: bool = False
