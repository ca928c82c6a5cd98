"""Request schemas for registration, login, refresh and profile updates."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from accounts.core.security import (
    EMAIL_MAX_LEN,
    EMAIL_MIN_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
)
from accounts.models.user import ROLE_USER


class RegisterRequest(BaseModel):
    """New account details. Role is taken as given (ADMIN or USER)."""

    email: str = Field(..., min_length=EMAIL_MIN_LEN, max_length=EMAIL_MAX_LEN, description="Login email")
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN, description="Password")
    name: str | None = Field(default=None, max_length=255)
    city: str | None = Field(default=None, max_length=255)
    role: str = Field(default=ROLE_USER, max_length=32)


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., min_length=EMAIL_MIN_LEN, max_length=EMAIL_MAX_LEN, description="Login email")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")


class RefreshTokenRequest(BaseModel):
    """Refresh token previously issued by login."""

    token: str = Field(..., min_length=1, description="Refresh token")


class UserUpdate(BaseModel):
    """
    Partial update for a user. Empty or missing fields are left unchanged.

    role is accepted for wire compatibility but never applied.
    """

    model_config = ConfigDict(extra="ignore")

    email: str | None = Field(default=None, max_length=EMAIL_MAX_LEN)
    name: str | None = Field(default=None, max_length=255)
    city: str | None = Field(default=None, max_length=255)
    password: str | None = Field(default=None, max_length=PASSWORD_MAX_LEN)
    role: str | None = None

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str | None) -> str | None:
        # Empty means "keep the current password"; anything else obeys the registration minimum.
        if v and len(v) < PASSWORD_MIN_LEN:
            raise ValueError(f"password must be at least {PASSWORD_MIN_LEN} characters")
        return v


class CurrentUser(BaseModel):
    """Authenticated user (id, email, role) for dependency injection."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    role: str
