"""ORM model for user accounts (auth and RBAC)."""

import uuid

from sqlalchemy import Column, DateTime, String, func

from app.models.base import Base
from app.schemas.account import ROLE_USER


def _new_account_id() -> str:
    return str(uuid.uuid4())


class Account(Base):
    """
    User account for JWT authentication and role-based access control.

    role: 'USER' or 'ADMIN'. email is unique at the storage level.
    """

    __tablename__ = "accounts"

    id = Column(String(36), primary_key=True, default=_new_account_id)
    name = Column(String(255), nullable=False)
    email = Column(String(320), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(16), nullable=False, default=ROLE_USER, index=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
