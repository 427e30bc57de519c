"""
Application Exceptions.

Services and repositories raise these; the exception handlers turn
them into the error envelope. Each class fixes its error code and
HTTP status so handlers never need a lookup table.
"""

from typing import Any


class ApplicationError(Exception):
    """Base exception for all application errors."""

    code = "SYS_INTERNAL_ERROR"
    status_code = 500

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        if code is not None:
            self.code = code
        self.details = details or {}
        super().__init__(message)


class NotFoundError(ApplicationError):
    """A todo or category id that does not exist."""

    code = "RES_NOT_FOUND"
    status_code = 404

    def __init__(self, message: str = "Resource not found", details: dict[str, Any] | None = None) -> None:
        super().__init__(message, details=details)


class ValidationError(ApplicationError):
    """A business rule rejected the request (bad status, category in use)."""

    code = "VAL_VALIDATION_ERROR"
    status_code = 400

    def __init__(self, message: str = "Validation failed", details: dict[str, Any] | None = None) -> None:
        super().__init__(message, details=details)


class ConflictError(ApplicationError):
    """Insert collided with an existing id."""

    code = "RES_CONFLICT"
    status_code = 409

    def __init__(self, message: str = "Resource conflict") -> None:
        super().__init__(message)


class DatabaseError(ApplicationError):
    """Storage failed; the unit of work was rolled back."""

    code = "SYS_DATABASE_ERROR"
    status_code = 503

    def __init__(self, message: str = "Database error") -> None:
        super().__init__(message)
