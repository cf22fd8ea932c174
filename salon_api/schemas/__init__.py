"""Pydantic request/response schemas."""

from salon_api.schemas.auth import (
    AuthData,
    LoginRequest,
    RefreshTokenRequest,
    RegisterRequest,
    TokenPairResponse,
    TokensData,
)
from salon_api.schemas.common import ApiResponse, ErrorResponse, FieldError, MessageResponse
from salon_api.schemas.health import ApiIndex, HealthStatus
from salon_api.schemas.user import (
    ChangePasswordRequest,
    Pagination,
    RoleUpdateRequest,
    UpdateProfileRequest,
    UserData,
    UserPage,
    UserPublic,
)

__all__ = [
    "ApiIndex",
    "ApiResponse",
    "AuthData",
    "ChangePasswordRequest",
    "ErrorResponse",
    "FieldError",
    "HealthStatus",
    "LoginRequest",
    "MessageResponse",
    "Pagination",
    "RefreshTokenRequest",
    "RegisterRequest",
    "RoleUpdateRequest",
    "TokenPairResponse",
    "TokensData",
    "UpdateProfileRequest",
    "UserData",
    "UserPage",
    "UserPublic",
]
