"""Schemas for user projections and account-management requests."""

from datetime import datetime

from pydantic import ConfigDict, Field, field_validator

from salon_api.core.roles import UserRole
from salon_api.core.security import (
    NAME_MAX_LEN,
    NAME_MIN_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    PASSWORD_STRENGTH_RE,
    PHONE_RE,
)
from salon_api.schemas.common import CamelModel


def validate_password_strength(value: str) -> str:
    """Require at least one uppercase letter, one lowercase letter and one digit."""
    if not PASSWORD_STRENGTH_RE.match(value):
        raise ValueError(
            "Password must contain at least one uppercase letter, one lowercase letter, and one number"
        )
    return value


def validate_phone(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    if not PHONE_RE.match(value):
        raise ValueError("Invalid phone number format")
    return value


class UserPublic(CamelModel):
    """API-facing projection of a user. Has no password field by construction."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    first_name: str
    last_name: str
    phone: str | None = None
    role: UserRole
    is_active: bool
    last_login_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UpdateProfileRequest(CamelModel):
    """Fields a user may change on their own profile; omitted fields are left as is."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    first_name: str | None = Field(default=None, min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN)
    last_name: str | None = Field(default=None, min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN)
    phone: str | None = None

    @field_validator("first_name", "last_name")
    @classmethod
    def names_not_null(cls, v: str | None) -> str:
        # Names may be omitted but not cleared.
        if v is None:
            raise ValueError("Name cannot be null")
        return v

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v: str | None) -> str | None:
        return validate_phone(v)


class ChangePasswordRequest(CamelModel):
    current_password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN)
    new_password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)

    @field_validator("new_password")
    @classmethod
    def check_strength(cls, v: str) -> str:
        return validate_password_strength(v)


class RoleUpdateRequest(CamelModel):
    role: UserRole


class UserData(CamelModel):
    user: UserPublic


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int


class UserPage(CamelModel):
    users: list[UserPublic]
    pagination: Pagination
