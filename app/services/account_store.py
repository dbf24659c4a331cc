"""Credential store: persistence of Account rows behind simple key lookups and mutations."""

import logging
from typing import Any

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.models import Account

logger = logging.getLogger(__name__)

# Columns that update_partial may touch. id and timestamps are system-managed.
UPDATABLE_FIELDS = frozenset({"name", "email", "password_hash", "role"})


class StoreError(Exception):
    """Raised when the database fails for a reason other than not-found or a constraint."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


class RecordNotFoundError(StoreError):
    """Raised when a mutation targets an account that does not exist."""


class ConstraintViolationError(StoreError):
    """Raised when a write violates a storage-level constraint (e.g. unique email)."""


class AccountStore:
    """Account persistence over one SQLAlchemy session. Each mutation commits."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def find_by_email(self, email: str) -> Account | None:
        return self.session.query(Account).filter(Account.email == email).first()

    def find_by_id(self, account_id: str) -> Account | None:
        return self.session.get(Account, account_id)

    def list_all(self) -> list[Account]:
        return self.session.query(Account).order_by(Account.created_at, Account.id).all()

    def count_by_role(self, role: str) -> int:
        return (
            self.session.query(func.count(Account.id))
            .filter(Account.role == role)
            .scalar()
            or 0
        )

    def insert(self, *, name: str, email: str, password_hash: str, role: str) -> Account:
        """Create an account. Raises ConstraintViolationError on duplicate email."""
        account = Account(name=name, email=email, password_hash=password_hash, role=role)
        self.session.add(account)
        self._commit()
        self.session.refresh(account)
        return account

    def update_partial(self, account_id: str, **fields: Any) -> Account:
        """
        Apply only the given fields to an account and commit.

        Raises RecordNotFoundError if the account is gone, ConstraintViolationError
        if the new values collide with another row.
        """
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update fields: {sorted(unknown)}")
        account = self.find_by_id(account_id)
        if account is None:
            raise RecordNotFoundError(f"Account {account_id} not found")
        for key, value in fields.items():
            setattr(account, key, value)
        self._commit()
        self.session.refresh(account)
        return account

    def delete(self, account_id: str) -> None:
        """Delete an account. Raises RecordNotFoundError if it does not exist."""
        account = self.find_by_id(account_id)
        if account is None:
            raise RecordNotFoundError(f"Account {account_id} not found")
        self.session.delete(account)
        self._commit()

    def _commit(self) -> None:
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise ConstraintViolationError("Constraint violated", cause=e) from e
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.exception("Account store commit failed")
            raise StoreError("Database error", cause=e) from e
