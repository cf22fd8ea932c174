"""ORM model for salon accounts (customers and admins)."""

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Integer, String, func, true

from salon_api.core.roles import UserRole
from salon_api.core.security import BCRYPT_ROUNDS, hash_password, verify_password
from salon_api.models.base import Base


class User(Base):
    """
    Account used for JWT authentication and role-based access control.

    role: 'customer' or 'admin'. password_hash never leaves this model; API
    projections are built from schemas that do not declare it.
    """

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('customer', 'admin')", name="ck_users_role"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    phone = Column(String(20), nullable=True)
    role = Column(
        String(16),
        nullable=False,
        default=UserRole.CUSTOMER.value,
        server_default=UserRole.CUSTOMER.value,
        index=True,
    )
    is_active = Column(Boolean, nullable=False, default=True, server_default=true(), index=True)
    last_login_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def set_password(self, plain_password: str, rounds: int = BCRYPT_ROUNDS) -> None:
        """Replace the stored hash; the plain password is never kept."""
        self.password_hash = hash_password(plain_password, rounds=rounds)

    def check_password(self, plain_password: str) -> bool:
        return verify_password(plain_password, self.password_hash)

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r} role={self.role}>"
