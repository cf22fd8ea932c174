"""Request authentication/authorization gate and service providers.

require_auth verifies the bearer token and returns an AuthContext built from its
claims. It does not re-read the user record, so a deactivated account's access
token keeps working until it expires; login, refresh and /auth/me do re-check.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from salon_api.core.errors import ForbiddenError, UnauthorizedError
from salon_api.core.roles import UserRole
from salon_api.core.tokens import TokenExpired, TokenInvalid, TokenService
from salon_api.services.auth import AuthService
from salon_api.services.users import UserService

security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthContext:
    """Identity of the authenticated caller for the duration of one request."""

    user_id: int
    email: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def _authenticate(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None,
    tokens: TokenService,
) -> AuthContext:
    header = request.headers.get("Authorization")
    if not header:
        raise UnauthorizedError("No authorization header provided")
    # HTTPBearer accepts any casing of the scheme; only "Bearer " is allowed here.
    if credentials is None or not header.startswith("Bearer "):
        raise UnauthorizedError("Invalid authorization header format")
    try:
        payload = tokens.verify_access(credentials.credentials)
    except TokenExpired as e:
        raise UnauthorizedError("Access token expired", code="TOKEN_EXPIRED") from e
    except TokenInvalid as e:
        raise UnauthorizedError("Invalid access token", code="INVALID_TOKEN") from e
    return AuthContext(user_id=payload.user_id, email=payload.email, role=payload.role)


def require_auth(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> AuthContext:
    """Dependency: require a valid Bearer access token. Raises 401 if missing, malformed, expired or invalid."""
    return _authenticate(request, credentials, tokens)


def optional_auth(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> AuthContext | None:
    """Dependency: like require_auth, but any failure means an anonymous caller (None)."""
    try:
        return _authenticate(request, credentials, tokens)
    except UnauthorizedError:
        return None


def require_roles(*roles: UserRole) -> Callable[..., AuthContext]:
    """Build a dependency that authenticates and then requires one of the given roles (403 otherwise)."""
    allowed = frozenset(UserRole(r).value for r in roles)

    def _require_role(
        auth: Annotated[AuthContext, Depends(require_auth)],
    ) -> AuthContext:
        if auth.role not in allowed:
            raise ForbiddenError("Insufficient permissions")
        return auth

    return _require_role


require_admin = require_roles(UserRole.ADMIN)

CurrentAuth = Annotated[AuthContext, Depends(require_auth)]
AdminAuth = Annotated[AuthContext, Depends(require_admin)]
OptionalAuth = Annotated[AuthContext | None, Depends(optional_auth)]
