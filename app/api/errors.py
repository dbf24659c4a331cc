"""Exception handlers rendering every failure as {"success": false, "error": {...}}."""

import logging
from typing import Any, TypeVar

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.core.errors import ApiError, Failure, FailureKind

logger = logging.getLogger(__name__)

T = TypeVar("T")

_HTTP_STATUS_KINDS: dict[int, FailureKind] = {
    401: FailureKind.UNAUTHORIZED,
    403: FailureKind.FORBIDDEN,
    404: FailureKind.NOT_FOUND,
}

# Request locations FastAPI prefixes onto validation error paths.
_LOCATION_PREFIXES = frozenset({"body", "query", "path", "header", "cookie"})


def raise_for_failure(result: T | Failure) -> T:
    """Return a service result unchanged, or abort the request with its Failure."""
    if isinstance(result, Failure):
        raise ApiError(result)
    return result


def failure_response(failure: Failure, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=failure.status_code,
        content={"success": False, "error": failure.to_dict()},
        headers=headers,
    )


def _validation_details(errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    details = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ())]
        if loc and loc[0] in _LOCATION_PREFIXES:
            loc = loc[1:]
        message = str(err.get("msg", "Invalid value"))
        # pydantic prefixes messages raised from custom validators
        message = message.removeprefix("Value error, ")
        details.append({"field": ".".join(loc), "message": message})
    return details


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return failure_response(exc.failure, headers=exc.headers)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    failure = Failure(
        FailureKind.VALIDATION_ERROR,
        "Validation failed",
        details=_validation_details(list(exc.errors())),
    )
    return failure_response(failure)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    kind = _HTTP_STATUS_KINDS.get(exc.status_code)
    error = {
        "code": exc.status_code,
        "type": kind.value if kind else "HTTPError",
        "message": str(exc.detail),
    }
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": error},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    message = str(exc) if get_settings().DEBUG and str(exc) else "Internal server error"
    return failure_response(Failure(FailureKind.INTERNAL, message))


def register_exception_handlers(app: FastAPI) -> None:
    """Install the envelope-producing handlers on an app."""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
