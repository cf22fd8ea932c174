"""User endpoints: self-service profile/password/deactivation and admin account management."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from salon_api.api.deps import AdminAuth, CurrentAuth, get_user_service
from salon_api.core.database import get_db
from salon_api.core.roles import UserRole
from salon_api.schemas.common import ApiResponse, MessageResponse
from salon_api.schemas.user import (
    ChangePasswordRequest,
    RoleUpdateRequest,
    UpdateProfileRequest,
    UserData,
    UserPage,
)
from salon_api.services.users import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, UserService

router = APIRouter()

DbSession = Annotated[Session, Depends(get_db)]
Users = Annotated[UserService, Depends(get_user_service)]


@router.get("", response_model=ApiResponse[UserPage])
def list_users(
    _admin: AdminAuth,
    db: DbSession,
    users: Users,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE)] = DEFAULT_PAGE_SIZE,
    role: UserRole | None = None,
    is_active: Annotated[bool | None, Query(alias="isActive")] = None,
) -> ApiResponse[UserPage]:
    """List accounts, newest first (admin only)."""
    result = users.list_users(db, page=page, limit=limit, role=role, is_active=is_active)
    return ApiResponse[UserPage](message="Users retrieved", data=result)


@router.put("/profile", response_model=ApiResponse[UserData])
def update_profile(
    body: UpdateProfileRequest, current: CurrentAuth, db: DbSession, users: Users
) -> ApiResponse[UserData]:
    user = users.update_profile(db, current.user_id, body)
    return ApiResponse[UserData](message="Profile updated successfully", data=UserData(user=user))


@router.put("/change-password", response_model=MessageResponse)
def change_password(
    body: ChangePasswordRequest, current: CurrentAuth, db: DbSession, users: Users
) -> MessageResponse:
    users.change_password(db, current.user_id, body.current_password, body.new_password)
    return MessageResponse(message="Password changed successfully")


@router.delete("/deactivate", response_model=MessageResponse)
def deactivate_account(current: CurrentAuth, db: DbSession, users: Users) -> MessageResponse:
    """Deactivate the caller's own account. Outstanding access tokens stay valid until they expire."""
    users.deactivate(db, current.user_id)
    return MessageResponse(message="Account deactivated successfully")


@router.get("/{user_id}", response_model=ApiResponse[UserData])
def get_user(
    user_id: int, _current: CurrentAuth, db: DbSession, users: Users
) -> ApiResponse[UserData]:
    user = users.get_user(db, user_id)
    return ApiResponse[UserData](message="User retrieved", data=UserData(user=user))


@router.put("/{user_id}/activate", response_model=MessageResponse)
def activate_account(
    user_id: int, _admin: AdminAuth, db: DbSession, users: Users
) -> MessageResponse:
    users.activate(db, user_id)
    return MessageResponse(message="Account activated successfully")


@router.put("/{user_id}/role", response_model=ApiResponse[UserData])
def set_role(
    user_id: int, body: RoleUpdateRequest, _admin: AdminAuth, db: DbSession, users: Users
) -> ApiResponse[UserData]:
    """Change an account's role (admin only). Takes effect in tokens minted at the next refresh or login."""
    user = users.set_role(db, user_id, body.role)
    return ApiResponse[UserData](message="Role updated successfully", data=UserData(user=user))


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(user_id: int, _admin: AdminAuth, db: DbSession, users: Users) -> MessageResponse:
    """Hard-delete an account (admin only)."""
    users.delete_user(db, user_id)
    return MessageResponse(message="User deleted successfully")
