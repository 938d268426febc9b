"""
Withdrawal repository.

Data access layer for WithdrawalRequest model.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums import WithdrawalStatus
from app.models.withdrawal import WithdrawalRequest
from app.repositories.base import BaseRepository


class WithdrawalRepository(BaseRepository[WithdrawalRequest]):
    """Withdrawal request queries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize withdrawal repository."""
        super().__init__(WithdrawalRequest, session)

    async def has_pending(self, user_id: int) -> bool:
        """
        Check whether the user has a withdrawal waiting for review.

        Args:
            user_id: User ID

        Returns:
            True if a PENDING request exists
        """
        stmt = (
            select(WithdrawalRequest.id)
            .where(WithdrawalRequest.user_id == user_id)
            .where(WithdrawalRequest.status == WithdrawalStatus.PENDING.value)
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def get_pending(self, limit: int = 100) -> list[WithdrawalRequest]:
        """
        Get requests waiting for review, oldest first.

        Args:
            limit: Max number of results

        Returns:
            Pending requests
        """
        stmt = (
            select(WithdrawalRequest)
            .where(WithdrawalRequest.status == WithdrawalStatus.PENDING.value)
            .order_by(WithdrawalRequest.created_at)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
