"""Password hashing and JWT creation/verification for authentication."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from app.core.config import settings
from app.schemas.account import ROLE_VALUES
from app.schemas.auth import CallerContext


class InvalidTokenError(Exception):
    """Raised when a bearer token is malformed, has a bad signature, is expired, or lacks claims."""


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash. Malformed hashes never verify."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError, AttributeError):
        return False


def create_access_token(sub: str, role: str) -> str:
    """Create a JWT access token with sub (account id), role, iat and exp."""
    now = datetime.now(UTC)
    expire = now + timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "sub": str(sub),
        "role": role,
        "exp": expire,
        "iat": now,
    }
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.encode(
        payload,
        secret,
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and validate JWT; return payload (sub, role, exp, iat).
    Raises jwt.PyJWTError on invalid or expired token.
    """
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.decode(
        token,
        secret,
        algorithms=[settings.JWT_ALGORITHM],
        options={"require": ["sub", "exp"]},
    )


def verify_access_token(token: str) -> CallerContext:
    """
    Verify a bearer token and return the caller identity it carries.

    Raises InvalidTokenError on bad signature, malformed token, expiry, or
    missing/unknown claims.
    """
    try:
        payload = decode_access_token(token)
    except jwt.PyJWTError as e:
        raise InvalidTokenError("Invalid or expired token") from e
    sub = payload.get("sub")
    role = payload.get("role")
    if not sub or role not in ROLE_VALUES:
        raise InvalidTokenError("Invalid token payload")
    return CallerContext(id=str(sub), role=role)
