"""Business services. Instances are built once in create_app and injected per request."""

from salon_api.services.auth import AuthService
from salon_api.services.users import UserService

__all__ = ["AuthService", "UserService"]
