"""Core app configuration, database, security and token primitives."""

from salon_api.core.config import Settings, get_settings
from salon_api.core.database import get_db
from salon_api.core.tokens import TokenService

__all__ = ["Settings", "get_settings", "get_db", "TokenService"]
