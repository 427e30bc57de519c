"""
Base Service.

Base class for all services providing common patterns for business logic.
Services orchestrate repositories, own transaction boundaries, and
publish change events once a unit of work has committed.

Usage:
    from todoboard.backend.services.base import BaseService

    class TodoService(BaseService):
        def __init__(self, session: AsyncSession, publisher: ChangeEventPublisher) -> None:
            super().__init__(session)
            self.repo = TodoRepository(session)
            self.publisher = publisher

        async def delete_todo(self, todo_id: str) -> None:
            await self._run_in_transaction("delete_todo", self.repo.soft_delete(todo_id))
            self.publisher.todo_deleted(todo_id)
"""

from typing import Any, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from todoboard.backend.core.exceptions import ConflictError, DatabaseError
from todoboard.backend.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class BaseService:
    """
    Base class for all services.

    Provides:
    - Database session management
    - Error wrapping for database operations
    - Commit/rollback around a unit of work

    Subclasses should:
    - Call super().__init__(session) in their __init__
    - Initialize repositories in __init__
    - Publish events only after _run_in_transaction returns
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

        Wraps database operations to convert SQLAlchemy exceptions
        to application-specific exceptions. Application errors raised
        by the coroutine pass through untouched.

        Args:
            operation: Description of the operation for logging
            coro: Coroutine to execute

        Returns:
            Result of the coroutine

        Raises:
            ConflictError: For unique constraint violations
            DatabaseError: For other database errors
        """
        try:
            return await coro
        except IntegrityError as e:
            self._logger.warning(
                "Database integrity error",
                extra={"operation": operation, "error": str(e)},
            )
            error_str = str(e).lower()
            if "unique" in error_str or "duplicate" in error_str:
                raise ConflictError("Resource already exists") from e
            raise DatabaseError(f"Database constraint violation: {operation}") from e
        except SQLAlchemyError as e:
            self._logger.error(
                "Database error",
                extra={"operation": operation, "error": str(e)},
            )
            raise DatabaseError(f"Database operation failed: {operation}") from e

    async def _run_in_transaction(
        self,
        operation: str,
        coro: Any,
    ) -> T:
        """
        Run a unit of work and commit it.

        Any failure, including application errors raised part-way
        through, rolls back everything the coroutine wrote.

        Args:
            operation: Description of the operation for logging
            coro: Coroutine performing the writes

        Returns:
            Result of the coroutine
        """
        try:
            result = await self._execute_db_operation(operation, coro)
            await self._execute_db_operation(f"{operation}.commit", self._session.commit())
        except Exception:
            await self._session.rollback()
            raise
        return result

    def _log_operation(
        self,
        operation: str,
        **context: Any,
    ) -> None:
        """
        Log a service operation with context.

        Args:
            operation: Description of the operation
            **context: Additional context to include in log
        """
        self._logger.info(
            operation,
            extra={"service": self.__class__.__name__, **context},
        )

    def _log_debug(
        self,
        message: str,
        **context: Any,
    ) -> None:
        """
        Log debug information.

        Args:
            message: Debug message
            **context: Additional context to include in log
        """
        self._logger.debug(
            message,
            extra={"service": self.__class__.__name__, **context},
        )
