"""Auth endpoints: register, login, refresh-token, me, logout."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from salon_api.api.deps import CurrentAuth, get_auth_service
from salon_api.core.database import get_db
from salon_api.schemas.auth import (
    AuthData,
    LoginRequest,
    RefreshTokenRequest,
    RegisterRequest,
    TokensData,
)
from salon_api.schemas.common import ApiResponse, MessageResponse
from salon_api.schemas.user import UserData
from salon_api.services.auth import AuthService, to_token_response

router = APIRouter()

DbSession = Annotated[Session, Depends(get_db)]
Auth = Annotated[AuthService, Depends(get_auth_service)]


@router.post(
    "/register",
    response_model=ApiResponse[AuthData],
    status_code=status.HTTP_201_CREATED,
)
def register(body: RegisterRequest, db: DbSession, auth: Auth) -> ApiResponse[AuthData]:
    """Create a customer account and return it with an access/refresh token pair."""
    result = auth.register(db, body)
    return ApiResponse[AuthData](message="User registered successfully", data=result)


@router.post("/login", response_model=ApiResponse[AuthData])
def login(body: LoginRequest, db: DbSession, auth: Auth) -> ApiResponse[AuthData]:
    """
    Authenticate with email and password; returns the user and a token pair.
    Include the access token in the Authorization header as: Bearer <accessToken>
    """
    result = auth.login(db, body.email, body.password)
    return ApiResponse[AuthData](message="Login successful", data=result)


@router.post("/refresh-token", response_model=ApiResponse[TokensData])
def refresh_token(
    body: RefreshTokenRequest, db: DbSession, auth: Auth
) -> ApiResponse[TokensData]:
    """Exchange a refresh token for a new pair carrying the account's current role."""
    pair = auth.refresh(db, body.refresh_token)
    return ApiResponse[TokensData](
        message="Token refreshed successfully",
        data=TokensData(tokens=to_token_response(pair)),
    )


@router.get("/me", response_model=ApiResponse[UserData])
def me(current: CurrentAuth, db: DbSession, auth: Auth) -> ApiResponse[UserData]:
    """Return the caller's profile (re-read from the store, so inactive accounts get 401)."""
    user = auth.current_user(db, current.user_id)
    return ApiResponse[UserData](message="Current user retrieved", data=UserData(user=user))


@router.post("/logout", response_model=MessageResponse)
def logout(_current: CurrentAuth) -> MessageResponse:
    """Tokens are stateless; logging out means the client discards them."""
    return MessageResponse(message="Logout successful")
