# core/errors.py
"""
Domain error kinds.

Raised by the guard and db_manager layers; translated into HTTP responses
only by the exception handlers registered in main.py.
"""


class AppError(Exception):
    """Base class for errors that map to a client-visible response."""
    status_code = 500
    kind = "error"

    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self) -> dict:
        body = {"detail": self.message, "error": self.kind}
        if self.field is not None:
            body["field"] = self.field
        return body


class ValidationError(AppError):
    """Bad input shape or length. User-correctable."""
    status_code = 400
    kind = "validation_error"


class AuthenticationError(AppError):
    """Missing, invalid or expired session."""
    status_code = 401
    kind = "unauthenticated"


class ForbiddenError(AppError):
    """Requester does not own the target asset."""
    status_code = 403
    kind = "forbidden"


class NotFoundError(AppError):
    status_code = 404
    kind = "not_found"


class ConflictError(AppError):
    status_code = 409
    kind = "conflict"


class StoreFailure(AppError):
    """Persistence layer failed. Never recovered locally."""
    status_code = 500
    kind = "store_failure"
