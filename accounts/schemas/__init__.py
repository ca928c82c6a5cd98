"""Pydantic request/response schemas."""

from accounts.schemas.auth import (
    CurrentUser,
    LoginRequest,
    RefreshTokenRequest,
    RegisterRequest,
    UserUpdate,
)
from accounts.schemas.envelope import ReqRes
from accounts.schemas.health import HealthResponse
from accounts.schemas.user import UserOut

__all__ = [
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "RefreshTokenRequest",
    "RegisterRequest",
    "ReqRes",
    "UserOut",
    "UserUpdate",
]
