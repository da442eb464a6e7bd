"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
Every error carries a stable code and a details dict (entity kind, id,
field name) so callers can build a useful message without parsing text.
"""

from typing import Any


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(
        self,
        message: str,
        code: str = "SYS_INTERNAL_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(ApplicationError):
    """Raised when a resource cannot be found."""

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Any = None,
        message: str | None = None,
    ) -> None:
        self.resource = resource
        self.resource_id = resource_id
        details: dict[str, Any] = {"resource": resource}
        if resource_id is not None:
            details["id"] = resource_id
            default = f"{resource} not found with id: {resource_id}"
        else:
            default = f"{resource} not found"
        super().__init__(message or default, code="RES_NOT_FOUND", details=details)


class ValidationError(ApplicationError):
    """Raised when validation fails."""

    def __init__(self, message: str = "Validation failed", details: dict | None = None) -> None:
        super().__init__(message, code="VAL_VALIDATION_ERROR", details=details)


class ConflictError(ApplicationError):
    """Raised when the store rejects a write because of a constraint."""

    def __init__(self, message: str = "Resource conflict", details: dict | None = None) -> None:
        super().__init__(message, code="RES_CONFLICT", details=details)


class DatabaseError(ApplicationError):
    """Raised when a database operation fails."""

    def __init__(self, message: str = "Database error", details: dict | None = None) -> None:
        super().__init__(message, code="SYS_DATABASE_ERROR", details=details)
