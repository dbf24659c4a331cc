"""Failure taxonomy shared by the account service and the HTTP layer."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class FailureKind(str, Enum):
    """Kinds of failure an account operation can report. Values are the wire `type`."""

    UNAUTHORIZED = "Unauthorized"
    FORBIDDEN = "Forbidden"
    NOT_FOUND = "NotFound"
    INVALID_CREDENTIALS = "InvalidCredentials"
    DUPLICATE_EMAIL = "DuplicateEmail"
    SAME_PASSWORD = "SamePassword"
    INVALID_ROLE = "InvalidRole"
    LAST_ADMIN_PROTECTED = "LastAdminProtected"
    VALIDATION_ERROR = "ValidationError"
    INTERNAL = "Internal"
    # Operator declined a confirmation prompt (CLI only).
    CANCELLED = "Cancelled"


FAILURE_STATUS_CODES: dict[FailureKind, int] = {
    FailureKind.UNAUTHORIZED: 401,
    FailureKind.FORBIDDEN: 403,
    FailureKind.NOT_FOUND: 404,
    FailureKind.INVALID_CREDENTIALS: 401,
    FailureKind.DUPLICATE_EMAIL: 400,
    FailureKind.SAME_PASSWORD: 400,
    FailureKind.INVALID_ROLE: 400,
    FailureKind.LAST_ADMIN_PROTECTED: 400,
    FailureKind.VALIDATION_ERROR: 400,
    FailureKind.INTERNAL: 500,
}


@dataclass(frozen=True)
class Failure:
    """A typed, expected failure returned (not raised) by account operations."""

    kind: FailureKind
    message: str
    details: Any = None

    @property
    def status_code(self) -> int:
        return FAILURE_STATUS_CODES.get(self.kind, 500)

    def to_dict(self) -> dict[str, Any]:
        """Render as the `error` member of the failure envelope."""
        error: dict[str, Any] = {
            "code": self.status_code,
            "type": self.kind.value,
            "message": self.message,
        }
        if self.details is not None:
            error["details"] = self.details
        return error


class ApiError(Exception):
    """Raised inside the HTTP layer to abort a request with a Failure."""

    def __init__(self, failure: Failure, headers: dict[str, str] | None = None) -> None:
        self.failure = failure
        self.headers = headers
        super().__init__(failure.message)
