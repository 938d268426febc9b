"""
Base service class.

Provides common functionality for all service classes including session
management, bound logging and the transaction decorator.
"""

import functools
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.utils.exceptions import DomainError, TransactionFailedError


# Type variable for generic decorator return types
T = TypeVar("T")


class BaseService:
    """
    Base service class.

    Provides common functionality for all service classes:
    - Session management
    - Logging with bound service context
    - Transaction helpers
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize base service.

        Args:
            session: Async database session
        """
        self.session = session
        self.logger = logger.bind(service=self.__class__.__name__)

    async def commit(self) -> None:
        """Commit current transaction."""
        await self.session.commit()

    async def rollback(self) -> None:
        """Rollback current transaction."""
        await self.session.rollback()


def transaction(
    func: Callable[..., Awaitable[T]],
) -> Callable[..., Awaitable[T]]:
    """
    Decorator to run a service method as one atomic transaction.

    Commits on success, rolls back on any exception. Domain errors are
    re-raised unchanged; store errors become TransactionFailedError so
    callers can retry the whole operation.

    Usage:
        @transaction
        async def approve(self, purchase_id: int) -> ApprovalResult:
            ...

    Args:
        func: Async method to wrap

    Returns:
        Wrapped async method
    """
    @functools.wraps(func)
    async def wrapper(self: BaseService, *args: Any, **kwargs: Any) -> T:
        try:
            result = await func(self, *args, **kwargs)
            await self.commit()
            return result
        except DomainError:
            await self.rollback()
            raise
        except SQLAlchemyError as e:
            await self.rollback()
            self.logger.error(
                f"Transaction failed in {func.__name__}",
                extra={
                    "error": str(e),
                    "function": func.__name__,
                },
            )
            raise TransactionFailedError(func.__name__, e) from e
        except BaseException:
            # Covers cancellation: never leave a half-applied transaction
            await self.rollback()
            raise

    return wrapper
