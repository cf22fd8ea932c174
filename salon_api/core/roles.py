"""User roles for role-based access control."""

from enum import Enum


class UserRole(str, Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"


ROLE_VALUES: frozenset[str] = frozenset(r.value for r in UserRole)
