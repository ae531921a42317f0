"""
Taskboard Backend — User & Auth Schemas
=========================================

What:  API contract for /api/users and /api/auth.

Security:
    UserResponse deliberately has no password field; every user payload the
    API emits goes through it, so the hash cannot leak by accident.
"""

from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, EmailStr, Field, field_validator

from app.schemas.common import ensure_utc


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def _strip_name(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("Name must not be blank")
    return v


class UserCreate(BaseModel):
    """Body of POST /api/auth/register."""
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        # EmailStr lower-cases only the domain
        return normalize_email(v)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return _strip_name(v)


class UserUpdate(BaseModel):
    """Body of PUT /api/users/{id}; every field optional."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=8, max_length=128)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else normalize_email(v)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: Optional[str]) -> Optional[str]:
        return _strip_name(v)

    def changes(self) -> dict:
        return {k: v for k, v in self.model_dump(exclude_unset=True).items() if v is not None}


class UserResponse(BaseModel):
    """Public representation of a user."""
    id: int
    name: str
    email: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("created_at", "updated_at")
    @classmethod
    def as_utc(cls, v: datetime) -> datetime:
        return ensure_utc(v)


class LoginRequest(BaseModel):
    """Body of POST /api/auth/login. Not validated beyond presence."""
    email: str
    password: str


class RefreshRequest(BaseModel):
    """
    Body of POST /api/auth/refresh.

    Optional on purpose: a missing token is answered with 400
    "Refresh token is required" rather than FastAPI's generic 422.
    Accepts `refreshToken` as well for camelCase clients.
    """
    refresh_token: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("refresh_token", "refreshToken"),
    )


class TokenResponse(BaseModel):
    """Access/refresh token pair issued by login and refresh."""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int = Field(description="Access token lifetime in seconds")
