# server/core/errors.py

from fastapi import status


class AppError(Exception):
    """
    Base class for failures that cross the core boundary.
    Each subclass carries a stable kind and the HTTP status it maps to.
    """
    kind = "internal_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ConflictError(AppError):
    kind = "conflict"
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class UnauthorizedError(AppError):
    kind = "unauthorized"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class NotFoundError(AppError):
    kind = "not_found"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class InternalError(AppError):
    pass
