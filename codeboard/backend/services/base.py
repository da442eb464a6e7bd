"""
Base Service.

Base class for all services providing common patterns for business logic.
Services orchestrate repositories, validate input before anything touches
the store, and translate storage failures into application errors.

Usage:
    from codeboard.backend.services.base import BaseService

    class NoteService(BaseService):
        def __init__(self, session: AsyncSession) -> None:
            super().__init__(session)
            self.repo = NoteRepository(session)
"""

from typing import Any, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from codeboard.backend.core.exceptions import (
    ConflictError,
    DatabaseError,
    ValidationError,
)
from codeboard.backend.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class BaseService:
    """
    Base class for all services.

    Provides:
    - Database session access
    - Error wrapping for database operations
    - Required-field and length validation
    - Logging helpers tagged with the service name
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize the service with a database session.

        Args:
            session: SQLAlchemy async session for database operations
        """
        self._session = session
        self._logger = get_logger(self.__class__.__module__)

    @property
    def session(self) -> AsyncSession:
        """Get the database session."""
        return self._session

    async def _execute_db_operation(
        self,
        operation: str,
        coro: Any,
    ) -> T:
        """
        Execute a database operation with error handling.

        Args:
            operation: Description of the operation for logging
            coro: Coroutine to execute

        Returns:
            Result of the coroutine

        Raises:
            ConflictError: When the store rejects the write on a constraint
            DatabaseError: For any other database error
        """
        try:
            return await coro
        except IntegrityError as e:
            self._logger.warning(
                "Database integrity error",
                extra={"operation": operation, "error": str(e.orig)},
            )
            raise ConflictError(
                f"Constraint violation during {operation}",
                details={"operation": operation},
            ) from e
        except SQLAlchemyError as e:
            self._logger.error(
                "Database error",
                extra={"operation": operation, "error": str(e)},
            )
            raise DatabaseError(
                f"Database operation failed: {operation}",
                details={"operation": operation},
            ) from e

    def _validate_required(
        self,
        fields: dict[str, Any],
        field_names: list[str],
        entity: str | None = None,
    ) -> None:
        """
        Validate that required fields are present and not blank.

        Raises:
            ValidationError: If any required field is missing or blank
        """
        missing = []
        for name in field_names:
            value = fields.get(name)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(name)

        if missing:
            details: dict[str, Any] = {"missing_fields": missing}
            if entity:
                details["entity"] = entity
            raise ValidationError(
                f"{', '.join(missing)} is required",
                details=details,
            )

    def _validate_string_length(
        self,
        value: str | None,
        field_name: str,
        min_length: int | None = None,
        max_length: int | None = None,
        entity: str | None = None,
    ) -> None:
        """
        Validate string length constraints. None values are not checked.

        Raises:
            ValidationError: If string length is out of bounds
        """
        if value is None:
            return
        details: dict[str, Any] = {"field": field_name, "length": len(value)}
        if entity:
            details["entity"] = entity
        if min_length is not None and len(value) < min_length:
            raise ValidationError(
                f"{field_name} too short",
                details={**details, "min_length": min_length},
            )
        if max_length is not None and len(value) > max_length:
            raise ValidationError(
                f"{field_name} must not exceed {max_length} characters",
                details={**details, "max_length": max_length},
            )

    def _log_operation(
        self,
        operation: str,
        **context: Any,
    ) -> None:
        """Log a service operation with context."""
        self._logger.info(
            operation,
            extra={"service": self.__class__.__name__, **context},
        )

    def _log_debug(
        self,
        message: str,
        **context: Any,
    ) -> None:
        """Log debug information."""
        self._logger.debug(
            message,
            extra={"service": self.__class__.__name__, **context},
        )
