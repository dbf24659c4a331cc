"""
Account service: registration, login, profile, password and role management.

Every operation takes the caller context explicitly and returns either its result
or a Failure. Expected outcomes (duplicate email, wrong password, missing rights)
are never raised; only unexpected store errors propagate.
"""

import logging
from collections.abc import Callable

from app.core.errors import Failure, FailureKind
from app.core.security import create_access_token, hash_password, verify_password
from app.models import Account
from app.schemas.account import ROLE_ADMIN, ROLE_USER, ROLE_VALUES, AccountOut, AuthData
from app.schemas.auth import CallerContext
from app.services.account_store import (
    AccountStore,
    ConstraintViolationError,
    RecordNotFoundError,
)

logger = logging.getLogger(__name__)

# Same message for unknown email and wrong password so callers cannot probe for accounts.
INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"

RoleConfirmation = Callable[[AccountOut, str], bool]


def _unauthorized() -> Failure:
    return Failure(FailureKind.UNAUTHORIZED, "Unauthorized")


def _not_found() -> Failure:
    return Failure(FailureKind.NOT_FOUND, "User not found")


def _duplicate_email() -> Failure:
    return Failure(FailureKind.DUPLICATE_EMAIL, "Email already registered")


def to_account_out(account: Account) -> AccountOut:
    """Strip the password hash: the only way accounts leave the service."""
    return AccountOut.model_validate(account)


class AccountService:
    """Auth policy over an AccountStore. Stateless apart from the store it wraps."""

    def __init__(self, store: AccountStore) -> None:
        self.store = store

    def _issue(self, account: Account) -> AuthData:
        token = create_access_token(sub=account.id, role=account.role)
        return AuthData(user=to_account_out(account), token=token)

    def register(
        self,
        name: str,
        email: str,
        password: str,
        role: str = ROLE_USER,
    ) -> AuthData | Failure:
        """Create an account and return it with a token. Fails DuplicateEmail."""
        if role not in ROLE_VALUES:
            return Failure(FailureKind.INVALID_ROLE, f"Invalid role: {role}")
        if self.store.find_by_email(email) is not None:
            return _duplicate_email()
        try:
            account = self.store.insert(
                name=name,
                email=email,
                password_hash=hash_password(password),
                role=role,
            )
        except ConstraintViolationError:
            # Lost a race with a concurrent registration; the unique index caught it.
            return _duplicate_email()
        logger.info("Registered account id=%s role=%s", account.id, account.role)
        return self._issue(account)

    def login(self, email: str, password: str) -> AuthData | Failure:
        """Authenticate by email and password. Fails InvalidCredentials either way."""
        account = self.store.find_by_email(email)
        if account is None or not verify_password(password, account.password_hash):
            logger.info("Failed login attempt")
            return Failure(FailureKind.INVALID_CREDENTIALS, INVALID_CREDENTIALS_MESSAGE)
        return self._issue(account)

    def get_profile(self, caller: CallerContext | None) -> AccountOut | Failure:
        if caller is None:
            return _unauthorized()
        account = self.store.find_by_id(caller.id)
        if account is None:
            return _not_found()
        return to_account_out(account)

    def update_profile(
        self,
        caller: CallerContext | None,
        name: str | None = None,
        email: str | None = None,
    ) -> AccountOut | Failure:
        """
        Apply a partial name/email update to the caller's own account.

        Role is never changed here. An email owned by another account fails
        DuplicateEmail; re-submitting one's own email is fine.
        """
        if caller is None:
            return _unauthorized()
        account = self.store.find_by_id(caller.id)
        if account is None:
            return _not_found()

        changes: dict[str, str] = {}
        if name is not None:
            changes["name"] = name
        if email is not None:
            owner = self.store.find_by_email(email)
            if owner is not None and owner.id != account.id:
                return Failure(FailureKind.DUPLICATE_EMAIL, "Email already in use")
            changes["email"] = email
        if not changes:
            return to_account_out(account)

        try:
            updated = self.store.update_partial(account.id, **changes)
        except RecordNotFoundError:
            return _not_found()
        except ConstraintViolationError:
            return Failure(FailureKind.DUPLICATE_EMAIL, "Email already in use")
        return to_account_out(updated)

    def change_password(
        self,
        caller: CallerContext | None,
        current_password: str,
        new_password: str,
    ) -> None | Failure:
        """Replace the caller's password after verifying the current one."""
        if caller is None:
            return _unauthorized()
        account = self.store.find_by_id(caller.id)
        if account is None:
            return _not_found()
        if not verify_password(current_password, account.password_hash):
            return Failure(FailureKind.INVALID_CREDENTIALS, "Current password is incorrect")
        if verify_password(new_password, account.password_hash):
            return Failure(
                FailureKind.SAME_PASSWORD,
                "New password must be different from current password",
            )
        try:
            self.store.update_partial(account.id, password_hash=hash_password(new_password))
        except RecordNotFoundError:
            return _not_found()
        logger.info("Password changed for account id=%s", account.id)
        return None

    def list_users(self, caller: CallerContext | None) -> list[AccountOut] | Failure:
        if caller is None:
            return _unauthorized()
        if not caller.is_admin:
            return Failure(FailureKind.FORBIDDEN, "Forbidden: Admin access required")
        return [to_account_out(a) for a in self.store.list_all()]

    def delete_user(self, caller: CallerContext | None, target_id: str) -> None | Failure:
        """
        Delete an account. Admins may delete anyone, others only themselves.

        The last remaining ADMIN can never be deleted.
        """
        if caller is None:
            return _unauthorized()
        if not caller.is_admin and target_id != caller.id:
            return Failure(FailureKind.FORBIDDEN, "You can only delete your own account")
        target = self.store.find_by_id(target_id)
        if target is None:
            return _not_found()
        if target.role == ROLE_ADMIN and self.store.count_by_role(ROLE_ADMIN) <= 1:
            return Failure(
                FailureKind.LAST_ADMIN_PROTECTED,
                "Cannot delete the last admin account",
            )
        try:
            self.store.delete(target_id)
        except RecordNotFoundError:
            return _not_found()
        logger.info("Deleted account id=%s by caller id=%s", target_id, caller.id)
        return None

    def change_role(
        self,
        email: str,
        new_role: str,
        confirm: RoleConfirmation,
    ) -> AccountOut | Failure:
        """
        Operator path: set an account's role after explicit confirmation.

        confirm receives the current account and requested role; returning False
        cancels without touching the store. Demoting the last ADMIN fails
        LastAdminProtected before the operator is asked.
        """
        account = self.store.find_by_email(email)
        if account is None:
            return _not_found()
        if new_role not in ROLE_VALUES:
            return Failure(
                FailureKind.INVALID_ROLE,
                f"Invalid role. Must be one of: {', '.join(sorted(ROLE_VALUES))}",
            )
        old_role = account.role
        if (
            old_role == ROLE_ADMIN
            and new_role != ROLE_ADMIN
            and self.store.count_by_role(ROLE_ADMIN) <= 1
        ):
            return Failure(
                FailureKind.LAST_ADMIN_PROTECTED,
                "Cannot demote the last admin account",
            )
        if not confirm(to_account_out(account), new_role):
            return Failure(FailureKind.CANCELLED, "Operation cancelled")
        try:
            updated = self.store.update_partial(account.id, role=new_role)
        except RecordNotFoundError:
            return _not_found()
        logger.info(
            "Role changed for account id=%s from %s to %s", updated.id, old_role, updated.role
        )
        return to_account_out(updated)
