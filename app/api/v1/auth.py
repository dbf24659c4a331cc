"""Registration and login routes, plus the auth dependencies (get_caller, get_account_service)."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.api.errors import raise_for_failure
from app.core.database import get_db
from app.core.errors import ApiError, Failure, FailureKind
from app.core.security import InvalidTokenError, verify_access_token
from app.schemas.account import ApiResponse, AuthData, LoginRequest, RegisterRequest
from app.schemas.auth import CallerContext
from app.services.account_store import AccountStore
from app.services.accounts import AccountService

router = APIRouter()
security = HTTPBearer(auto_error=False)

_BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


def get_account_service(db: Annotated[Session, Depends(get_db)]) -> AccountService:
    """Dependency: account service bound to the request's DB session."""
    return AccountService(AccountStore(db))


def get_caller(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> CallerContext:
    """
    Dependency: require a valid Bearer JWT and return the caller identity it carries.
    Raises 401 if the header is missing, not Bearer, or the token does not verify.
    """
    if credentials is None or not credentials.credentials:
        raise ApiError(
            Failure(FailureKind.UNAUTHORIZED, "No token provided"),
            headers=_BEARER_CHALLENGE,
        )
    try:
        return verify_access_token(credentials.credentials)
    except InvalidTokenError as e:
        raise ApiError(
            Failure(FailureKind.UNAUTHORIZED, str(e)),
            headers=_BEARER_CHALLENGE,
        ) from e


@router.post(
    "/register",
    response_model=ApiResponse[AuthData],
    status_code=status.HTTP_201_CREATED,
)
def register(
    body: RegisterRequest,
    service: Annotated[AccountService, Depends(get_account_service)],
) -> ApiResponse[AuthData]:
    """Create an account and return it with a bearer token."""
    result = service.register(
        name=body.name,
        email=body.email,
        password=body.password,
        role=body.role,
    )
    return ApiResponse[AuthData](data=raise_for_failure(result))


@router.post("/login", response_model=ApiResponse[AuthData])
def login(
    body: LoginRequest,
    service: Annotated[AccountService, Depends(get_account_service)],
) -> ApiResponse[AuthData]:
    """
    Authenticate with email and password; returns the account and a JWT.
    Include the token in the Authorization header as: Bearer <token>
    """
    result = service.login(email=body.email, password=body.password)
    return ApiResponse[AuthData](data=raise_for_failure(result))
