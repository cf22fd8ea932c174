"""Operational error taxonomy. Each error carries its HTTP status and a stable code."""

from typing import Any


class AppError(Exception):
    """Base for expected (operational) failures surfaced to API clients."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        if code is not None:
            self.code = code
        self.errors = errors
        super().__init__(message)


class ValidationError(AppError):
    """Malformed or missing input (422)."""

    status_code = 422
    code = "VALIDATION_ERROR"


class BadRequestError(AppError):
    """A required argument is missing (400)."""

    status_code = 400
    code = "BAD_REQUEST"


class UnauthorizedError(AppError):
    """Missing, invalid or expired credentials or token (401)."""

    status_code = 401
    code = "UNAUTHORIZED"

    def __init__(self, message: str = "Unauthorized", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class ForbiddenError(AppError):
    """Authenticated but the role is not allowed (403)."""

    status_code = 403
    code = "FORBIDDEN"

    def __init__(self, message: str = "Forbidden", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class NotFoundError(AppError):
    """Resource does not exist (404). Takes the resource name, e.g. NotFoundError("User")."""

    status_code = 404
    code = "NOT_FOUND"

    def __init__(self, resource: str, **kwargs: Any) -> None:
        super().__init__(f"{resource} not found", **kwargs)


class ConflictError(AppError):
    """Uniqueness or state conflict (409)."""

    status_code = 409
    code = "CONFLICT"
