"""Profile, password, listing and deletion routes for authenticated callers."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.errors import raise_for_failure
from app.api.v1.auth import get_account_service, get_caller
from app.schemas.account import (
    ApiResponse,
    ChangePasswordRequest,
    MessageData,
    UpdateProfileRequest,
    UserData,
    UsersData,
)
from app.schemas.auth import CallerContext
from app.services.accounts import AccountService

router = APIRouter()

Caller = Annotated[CallerContext, Depends(get_caller)]
Service = Annotated[AccountService, Depends(get_account_service)]


@router.get("/profile", response_model=ApiResponse[UserData])
def get_profile(caller: Caller, service: Service) -> ApiResponse[UserData]:
    """Return the caller's own account."""
    user = raise_for_failure(service.get_profile(caller))
    return ApiResponse[UserData](data=UserData(user=user))


@router.put("/profile", response_model=ApiResponse[UserData])
def update_profile(
    body: UpdateProfileRequest,
    caller: Caller,
    service: Service,
) -> ApiResponse[UserData]:
    """Update name and/or email. Fields left out of the body are unchanged."""
    user = raise_for_failure(
        service.update_profile(caller, name=body.name, email=body.email)
    )
    return ApiResponse[UserData](data=UserData(user=user))


@router.put("/change-password", response_model=ApiResponse[MessageData])
def change_password(
    body: ChangePasswordRequest,
    caller: Caller,
    service: Service,
) -> ApiResponse[MessageData]:
    raise_for_failure(
        service.change_password(
            caller,
            current_password=body.current_password,
            new_password=body.new_password,
        )
    )
    return ApiResponse[MessageData](data=MessageData(message="Password changed successfully"))


@router.get("", response_model=ApiResponse[UsersData])
def list_users(caller: Caller, service: Service) -> ApiResponse[UsersData]:
    """List all accounts (admin only)."""
    users = raise_for_failure(service.list_users(caller))
    return ApiResponse[UsersData](data=UsersData(users=users))


@router.delete("/{user_id}", response_model=ApiResponse[MessageData])
def delete_user(user_id: str, caller: Caller, service: Service) -> ApiResponse[MessageData]:
    """Delete an account: admins may delete anyone, other callers only themselves."""
    raise_for_failure(service.delete_user(caller, user_id))
    return ApiResponse[MessageData](data=MessageData(message="User deleted successfully"))
