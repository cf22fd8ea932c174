"""Account management: profile edits, password changes, activation and admin listing."""

import logging
import math

from sqlalchemy.orm import Session

from salon_api.core.errors import ConflictError, NotFoundError, UnauthorizedError
from salon_api.core.roles import UserRole
from salon_api.core.security import BCRYPT_ROUNDS
from salon_api.models import User
from salon_api.schemas.user import Pagination, UpdateProfileRequest, UserPage, UserPublic
from salon_api.services.auth import to_public

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


class UserService:
    """CRUD over user accounts. Returned users are always password-free projections."""

    def __init__(self, bcrypt_rounds: int = BCRYPT_ROUNDS) -> None:
        self.bcrypt_rounds = bcrypt_rounds

    def get_user(self, db: Session, user_id: int) -> UserPublic:
        return to_public(self._get_or_404(db, user_id))

    def update_profile(self, db: Session, user_id: int, data: UpdateProfileRequest) -> UserPublic:
        user = self._get_or_404(db, user_id)
        changes = data.model_dump(exclude_unset=True)
        for field in ("first_name", "last_name", "phone"):
            if field in changes:
                setattr(user, field, changes[field])
        db.commit()
        db.refresh(user)
        return to_public(user)

    def change_password(
        self, db: Session, user_id: int, current_password: str, new_password: str
    ) -> None:
        """Raises UnauthorizedError for a wrong current password, ConflictError if unchanged."""
        user = self._get_or_404(db, user_id)
        if not user.check_password(current_password):
            raise UnauthorizedError("Current password is incorrect")
        if current_password == new_password:
            raise ConflictError("New password must be different from current password")
        user.set_password(new_password, rounds=self.bcrypt_rounds)
        db.commit()
        logger.info("Password changed", extra={"user_id": user_id})

    def deactivate(self, db: Session, user_id: int) -> None:
        self._set_active(db, user_id, False)

    def activate(self, db: Session, user_id: int) -> None:
        self._set_active(db, user_id, True)

    def set_role(self, db: Session, user_id: int, role: UserRole) -> UserPublic:
        """Administrative role change; existing tokens keep the old role until they are refreshed."""
        user = self._get_or_404(db, user_id)
        user.role = UserRole(role).value
        db.commit()
        db.refresh(user)
        logger.info("Role changed", extra={"user_id": user_id, "role": user.role})
        return to_public(user)

    def list_users(
        self,
        db: Session,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        role: UserRole | None = None,
        is_active: bool | None = None,
    ) -> UserPage:
        """Newest accounts first, optionally filtered by role and active flag."""
        page = max(page, 1)
        limit = min(max(limit, 1), MAX_PAGE_SIZE)

        query = db.query(User)
        if role is not None:
            query = query.filter(User.role == UserRole(role).value)
        if is_active is not None:
            query = query.filter(User.is_active == is_active)

        total = query.count()
        rows = (
            query.order_by(User.created_at.desc(), User.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return UserPage(
            users=[to_public(u) for u in rows],
            pagination=Pagination(
                page=page,
                limit=limit,
                total=total,
                total_pages=math.ceil(total / limit),
            ),
        )

    def delete_user(self, db: Session, user_id: int) -> None:
        """Hard delete."""
        user = self._get_or_404(db, user_id)
        db.delete(user)
        db.commit()
        logger.info("User deleted", extra={"user_id": user_id})

    def _set_active(self, db: Session, user_id: int, active: bool) -> None:
        user = self._get_or_404(db, user_id)
        user.is_active = active
        db.commit()
        logger.info(
            "Account activated" if active else "Account deactivated",
            extra={"user_id": user_id},
        )

    @staticmethod
    def _get_or_404(db: Session, user_id: int) -> User:
        user = db.get(User, user_id)
        if user is None:
            raise NotFoundError("User")
        return user
