"""Authentication request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from roster.core.config import settings


class RegisterRequest(BaseModel):
    """Request payload for the register endpoint."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=settings.MIN_PASSWORD_LENGTH, max_length=256)

    @field_validator("name", "email", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        # password is kept byte-for-byte; login compares it unstripped
        return value.strip() if isinstance(value, str) else value


class LoginRequest(BaseModel):
    """Request payload for the login endpoint."""

    email: str = Field(..., min_length=1, max_length=320)
    password: str = Field(..., min_length=1, max_length=256)


class UserResponse(BaseModel):
    """Public view of a user account."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str


class CurrentUserResponse(BaseModel):
    """Authenticated user returned by /auth/me."""

    user: UserResponse


class AuthResponse(BaseModel):
    """Result of register and login."""

    message: str
    user: UserResponse
