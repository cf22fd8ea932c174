"""Session orchestration: registration, login, token refresh and current-user resolution.

AuthService is the only component that combines the user store, the password
hasher and the token service. It is stateless across requests; every method
takes the request's database session.
"""

import logging
import secrets
from datetime import UTC, datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from salon_api.core.errors import BadRequestError, ConflictError, UnauthorizedError
from salon_api.core.roles import UserRole
from salon_api.core.security import BCRYPT_ROUNDS, hash_password, normalize_email, verify_password
from salon_api.core.tokens import TokenExpired, TokenInvalid, TokenPair, TokenService
from salon_api.models import User
from salon_api.schemas.auth import AuthData, RegisterRequest, TokenPairResponse
from salon_api.schemas.user import UserPublic

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"
EMAIL_TAKEN = "User with this email already exists"


def to_public(user: User) -> UserPublic:
    """Password-free projection of a user row."""
    return UserPublic.model_validate(user)


def to_token_response(pair: TokenPair) -> TokenPairResponse:
    return TokenPairResponse(access_token=pair.access_token, refresh_token=pair.refresh_token)


class AuthService:
    """Coordinates the user store, password hashing and token issuance."""

    def __init__(self, tokens: TokenService, bcrypt_rounds: int = BCRYPT_ROUNDS) -> None:
        self.tokens = tokens
        self.bcrypt_rounds = bcrypt_rounds
        # Compared against when the email is unknown so every login costs one bcrypt check.
        self._dummy_hash = hash_password(secrets.token_urlsafe(16), rounds=bcrypt_rounds)

    def register(self, db: Session, data: RegisterRequest) -> AuthData:
        """
        Create a customer account and issue its first token pair.

        Raises ConflictError when the email is taken, including when a concurrent
        registration wins the race and the unique index rejects this insert.
        """
        email = normalize_email(data.email)
        if db.query(User).filter(User.email == email).first() is not None:
            raise ConflictError(EMAIL_TAKEN)

        user = User(
            email=email,
            first_name=data.first_name,
            last_name=data.last_name,
            phone=data.phone,
            role=UserRole.CUSTOMER.value,
            is_active=True,
        )
        user.set_password(data.password, rounds=self.bcrypt_rounds)
        db.add(user)
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            logger.info("Registration lost uniqueness race", extra={"reason": "email_taken"})
            raise ConflictError(EMAIL_TAKEN) from e
        db.refresh(user)

        logger.info("User registered", extra={"user_id": user.id, "role": user.role})
        return AuthData(user=to_public(user), tokens=to_token_response(self._issue_for(user)))

    def login(self, db: Session, email: str, password: str) -> AuthData:
        """
        Verify credentials and issue a token pair.

        Unknown email, inactive account and wrong password all raise the same
        UnauthorizedError so callers cannot tell which check failed.
        """
        user = db.query(User).filter(User.email == normalize_email(email)).first()
        if user is None:
            verify_password(password, self._dummy_hash)
            logger.info("Login failed", extra={"reason": "unknown_email"})
            raise UnauthorizedError(INVALID_CREDENTIALS)

        password_ok = user.check_password(password)
        if not user.is_active:
            logger.info("Login failed", extra={"user_id": user.id, "reason": "inactive"})
            raise UnauthorizedError(INVALID_CREDENTIALS)
        if not password_ok:
            logger.info("Login failed", extra={"user_id": user.id, "reason": "bad_password"})
            raise UnauthorizedError(INVALID_CREDENTIALS)

        user.last_login_at = datetime.now(UTC)
        db.commit()
        db.refresh(user)

        logger.info("Login succeeded", extra={"user_id": user.id})
        return AuthData(user=to_public(user), tokens=to_token_response(self._issue_for(user)))

    def refresh(self, db: Session, refresh_token: str | None) -> TokenPair:
        """
        Exchange a refresh token for a new pair minted from the current user record.

        The role in the new tokens is read from the store, never copied from the
        old token, so a role change takes effect at the next refresh.
        """
        if not refresh_token or not refresh_token.strip():
            raise BadRequestError("Refresh token is required")

        try:
            payload = self.tokens.verify_refresh(refresh_token.strip())
        except TokenExpired as e:
            raise UnauthorizedError(e.message, code="TOKEN_EXPIRED") from e
        except TokenInvalid as e:
            raise UnauthorizedError(e.message, code="INVALID_TOKEN") from e

        user = db.get(User, payload.user_id)
        if user is None:
            logger.info("Refresh rejected", extra={"user_id": payload.user_id, "reason": "missing"})
            raise UnauthorizedError("User not found")
        if not user.is_active:
            logger.info("Refresh rejected", extra={"user_id": user.id, "reason": "inactive"})
            raise UnauthorizedError("Account is deactivated")

        return self._issue_for(user)

    def current_user(self, db: Session, user_id: int) -> UserPublic:
        """Resolve the caller's own record. Raises UnauthorizedError if missing or inactive."""
        user = db.get(User, user_id)
        if user is None:
            raise UnauthorizedError("User not found")
        if not user.is_active:
            raise UnauthorizedError("Account is deactivated")
        return to_public(user)

    def _issue_for(self, user: User) -> TokenPair:
        return self.tokens.issue(user.id, user.email, user.role)
