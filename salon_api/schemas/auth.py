"""Request/response schemas for auth endpoints."""

from pydantic import EmailStr, Field, field_validator

from salon_api.core.security import (
    NAME_MAX_LEN,
    NAME_MIN_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    normalize_email,
)
from salon_api.schemas.common import CamelModel
from salon_api.schemas.user import UserPublic, validate_password_strength, validate_phone


class RegisterRequest(CamelModel):
    """Registration form. Email is lower-cased; names are trimmed."""

    email: EmailStr
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
    first_name: str = Field(..., min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN)
    last_name: str = Field(..., min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN)
    phone: str | None = None

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def strip_names(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return normalize_email(v)

    @field_validator("password")
    @classmethod
    def check_strength(cls, v: str) -> str:
        return validate_password_strength(v)

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v: str | None) -> str | None:
        return validate_phone(v)


class LoginRequest(CamelModel):
    """Credentials for login."""

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN)

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return normalize_email(v)


class RefreshTokenRequest(CamelModel):
    """Body of POST /auth/refresh-token. A missing token is a 400, not a 422."""

    refresh_token: str | None = None


class TokenPairResponse(CamelModel):
    """JWT pair returned after register, login and refresh."""

    access_token: str = Field(..., description="Short-lived JWT for the Authorization header")
    refresh_token: str = Field(..., description="Longer-lived JWT for POST /auth/refresh-token")
    token_type: str = Field(default="bearer", description="Token type")


class AuthData(CamelModel):
    user: UserPublic
    tokens: TokenPairResponse


class TokensData(CamelModel):
    tokens: TokenPairResponse
