"""Pydantic request/response schemas."""

from app.schemas.account import (
    AccountOut,
    ApiResponse,
    AuthData,
    ChangePasswordRequest,
    LoginRequest,
    MessageData,
    RegisterRequest,
    Role,
    UpdateProfileRequest,
    UserData,
    UsersData,
)
from app.schemas.auth import CallerContext
from app.schemas.health import HealthResponse

__all__ = [
    "AccountOut",
    "ApiResponse",
    "AuthData",
    "CallerContext",
    "ChangePasswordRequest",
    "HealthResponse",
    "LoginRequest",
    "MessageData",
    "RegisterRequest",
    "Role",
    "UpdateProfileRequest",
    "UserData",
    "UsersData",
]
