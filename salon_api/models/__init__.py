"""SQLAlchemy ORM models."""

from salon_api.models.base import Base
from salon_api.models.user import User

__all__ = ["Base", "User"]
