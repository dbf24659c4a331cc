"""Request/response schemas for accounts: roles, registration, profile and password payloads."""

import re
from datetime import datetime
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

# Account roles. Stored and transmitted upper-case.
Role = Literal["USER", "ADMIN"]
ROLE_USER = "USER"
ROLE_ADMIN = "ADMIN"
ROLE_VALUES: frozenset[str] = frozenset({ROLE_USER, ROLE_ADMIN})

NAME_MIN_LEN = 2
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 30

_PASSWORD_PATTERN = re.compile(
    r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&])[A-Za-z\d@$!%*?&]+$"
)


def _validate_password_strength(value: str) -> str:
    """Enforce length and character-class rules for new passwords."""
    if len(value) < PASSWORD_MIN_LEN:
        raise ValueError(f"Password must be at least {PASSWORD_MIN_LEN} characters")
    if len(value) > PASSWORD_MAX_LEN:
        raise ValueError(f"Password must not exceed {PASSWORD_MAX_LEN} characters")
    if not _PASSWORD_PATTERN.match(value):
        raise ValueError(
            "Password must contain at least one uppercase letter, one lowercase letter, "
            "one number, and one special character (@$!%*?&)"
        )
    return value


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterRequest(_CamelModel):
    """Payload for self-registration."""

    name: str = Field(..., min_length=NAME_MIN_LEN, description="Display name")
    email: EmailStr = Field(..., description="Unique email address")
    password: str = Field(..., description="Password (8-30 chars, mixed classes)")
    role: Role = Field(default=ROLE_USER, description="Account role")

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        return _validate_password_strength(v)


class LoginRequest(_CamelModel):
    """Credentials for login."""

    email: EmailStr = Field(..., description="Account email")
    password: str = Field(..., min_length=1, description="Password")


class UpdateProfileRequest(_CamelModel):
    """Partial profile update. Absent fields are left unchanged."""

    name: str | None = Field(default=None, min_length=NAME_MIN_LEN)
    email: EmailStr | None = None


class ChangePasswordRequest(_CamelModel):
    """Current password as proof, plus the new password."""

    current_password: str = Field(..., min_length=1)
    new_password: str

    @field_validator("new_password")
    @classmethod
    def check_new_password(cls, v: str, info: ValidationInfo) -> str:
        _validate_password_strength(v)
        if info.data.get("current_password") == v:
            raise ValueError("New password must be different from current password")
        return v


class AccountOut(_CamelModel):
    """Outward representation of an account. Never carries the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    role: Role
    created_at: datetime | None = None
    updated_at: datetime | None = None


class AuthData(BaseModel):
    """Account plus freshly issued bearer token."""

    user: AccountOut
    token: str


class UserData(BaseModel):
    user: AccountOut


class UsersData(BaseModel):
    users: list[AccountOut]


class MessageData(BaseModel):
    message: str


T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Success envelope: {"success": true, "data": ...}."""

    success: Literal[True] = True
    data: T
