"""
Base Service.

Base class for all services providing common patterns for business logic.
Services orchestrate repositories, handle transactions, and implement
business rules.

Usage:
    from thinkspace.backend.services.base import BaseService

    class NoteService(BaseService):
        def __init__(self, session: AsyncSession) -> None:
            super().__init__(session)
            self.repo = NoteRepository(session)
"""

from collections.abc import Awaitable
from typing import Any, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from thinkspace.backend.core.exceptions import InvalidIdError, StoreError
from thinkspace.backend.core.logging import get_logger
from thinkspace.backend.core.utils import is_valid_id

T = TypeVar("T")


class BaseService:
    """
    Base class for all services.

    Provides:
    - Database session management
    - Logging context
    - Error wrapping for database operations
    - Identifier shape checks

    Subclasses should:
    - Call super().__init__(session) in their __init__
    - Initialize repositories in __init__
    - Implement business logic methods
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
        coro: Awaitable[T],
        error_cls: type[StoreError] = StoreError,
    ) -> T:
        """
        Execute a database operation with error handling.

        Wraps database operations to convert SQLAlchemy exceptions
        to application-specific exceptions. The underlying database
        message is kept in the raised error.

        Args:
            operation: Description of the operation for logging
            coro: Coroutine to execute
            error_cls: StoreError subclass to raise on failure

        Returns:
            Result of the coroutine

        Raises:
            StoreError: (or error_cls) for any database error
        """
        try:
            return await coro
        except SQLAlchemyError as e:
            self._logger.error(
                "Database error",
                extra={"operation": operation, "error": str(e)},
            )
            raise error_cls(f"{operation} failed: {e}") from e

    def _require_valid_id(self, record_id: str, label: str = "Record") -> None:
        """
        Reject identifiers that are not in the store's id shape.

        Raises:
            InvalidIdError: If the id is malformed
        """
        if not is_valid_id(record_id):
            raise InvalidIdError(f"Invalid {label.lower()} id: {record_id}")

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
