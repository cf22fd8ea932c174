"""JWT access/refresh token issuance and verification.

Two signing contexts exist: access tokens and refresh tokens. Each has its own
secret and lifetime, and every token carries a ``type`` claim naming its
context, so a token minted for one context never verifies on the other path.

Verification is stateless: no storage is consulted, and nothing can revoke a
token before its ``exp`` claim passes.
"""

import uuid
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, Literal

import jwt

from salon_api.core.roles import ROLE_VALUES

TokenType = Literal["access", "refresh"]

REQUIRED_CLAIMS = ["sub", "email", "role", "type", "iat", "exp"]


class TokenError(Exception):
    """Base for token verification failures."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


class TokenExpired(TokenError):
    """The token's exp claim has passed."""


class TokenInvalid(TokenError):
    """Signature, structure or claims verification failed."""


@dataclass(frozen=True)
class TokenPayload:
    """Verified claims of an access or refresh token."""

    user_id: int
    email: str
    role: str
    token_type: TokenType
    issued_at: datetime
    expires_at: datetime


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


@dataclass(frozen=True)
class _SigningContext:
    token_type: TokenType
    secret: str
    lifetime: timedelta


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TokenService:
    """Mints and verifies access and refresh tokens."""

    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        access_expire_minutes: int,
        refresh_expire_minutes: int,
        algorithm: str = "HS256",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not access_secret or not refresh_secret:
            raise ValueError("jwt_secret_blank")
        if access_secret == refresh_secret:
            raise ValueError("access and refresh secrets must differ")
        self._access = _SigningContext(
            "access", access_secret, timedelta(minutes=access_expire_minutes)
        )
        self._refresh = _SigningContext(
            "refresh", refresh_secret, timedelta(minutes=refresh_expire_minutes)
        )
        self._algorithm = algorithm
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Any, **kwargs: Any) -> "TokenService":
        return cls(
            access_secret=settings.JWT_SECRET.get_secret_value(),
            refresh_secret=settings.JWT_REFRESH_SECRET.get_secret_value(),
            access_expire_minutes=settings.JWT_ACCESS_EXPIRE_MINUTES,
            refresh_expire_minutes=settings.JWT_REFRESH_EXPIRE_MINUTES,
            algorithm=settings.JWT_ALGORITHM,
            **kwargs,
        )

    def issue(self, user_id: int, email: str, role: str) -> TokenPair:
        """Mint a fresh access + refresh pair for the given identity."""
        return TokenPair(
            access_token=self.create_access_token(user_id, email, role),
            refresh_token=self.create_refresh_token(user_id, email, role),
        )

    def create_access_token(self, user_id: int, email: str, role: str) -> str:
        return self._sign(self._access, user_id, email, role)

    def create_refresh_token(self, user_id: int, email: str, role: str) -> str:
        return self._sign(self._refresh, user_id, email, role)

    def verify_access(self, token: str) -> TokenPayload:
        """Raises TokenExpired or TokenInvalid."""
        return self._verify(self._access, token)

    def verify_refresh(self, token: str) -> TokenPayload:
        """Raises TokenExpired or TokenInvalid."""
        return self._verify(self._refresh, token)

    @staticmethod
    def decode_unverified(token: str) -> dict[str, Any] | None:
        """Decode claims without checking the signature. For debugging only; never authorize on it."""
        try:
            return jwt.decode(token, options={"verify_signature": False})
        except jwt.PyJWTError:
            return None

    def _sign(self, ctx: _SigningContext, user_id: int, email: str, role: str) -> str:
        now = self._clock()
        payload: dict[str, Any] = {
            "sub": str(user_id),
            "email": email,
            "role": role,
            "type": ctx.token_type,
            "iat": int(now.timestamp()),
            "exp": int((now + ctx.lifetime).timestamp()),
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(payload, ctx.secret, algorithm=self._algorithm)

    def _verify(self, ctx: _SigningContext, token: str) -> TokenPayload:
        if not token:
            raise TokenInvalid(f"Invalid {ctx.token_type} token")
        try:
            # exp is checked against the injected clock below.
            claims = jwt.decode(
                token,
                ctx.secret,
                algorithms=[self._algorithm],
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "require": REQUIRED_CLAIMS,
                },
            )
        except jwt.PyJWTError as e:
            raise TokenInvalid(f"Invalid {ctx.token_type} token", cause=e) from e

        if claims.get("type") != ctx.token_type:
            raise TokenInvalid(f"Invalid {ctx.token_type} token")

        try:
            expires_at = datetime.fromtimestamp(int(claims["exp"]), UTC)
            issued_at = datetime.fromtimestamp(int(claims["iat"]), UTC)
            user_id = int(claims["sub"])
        except (TypeError, ValueError, OverflowError) as e:
            raise TokenInvalid(f"Invalid {ctx.token_type} token", cause=e) from e

        if self._clock() >= expires_at:
            raise TokenExpired(f"{ctx.token_type.capitalize()} token expired")

        role = claims["role"]
        if role not in ROLE_VALUES or not isinstance(claims["email"], str):
            raise TokenInvalid(f"Invalid {ctx.token_type} token")

        return TokenPayload(
            user_id=user_id,
            email=claims["email"],
            role=role,
            token_type=ctx.token_type,
            issued_at=issued_at,
            expires_at=expires_at,
        )
