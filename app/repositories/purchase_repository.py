"""
Purchase repository.

Data access layer for Purchase model.
"""

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.enums import PurchaseStatus
from app.models.purchase import Purchase
from app.repositories.base import BaseRepository


class PurchaseRepository(BaseRepository[Purchase]):
    """Purchase repository with specific queries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize purchase repository."""
        super().__init__(Purchase, session)

    async def get_by_user(
        self, user_id: int, status: PurchaseStatus | None = None
    ) -> list[Purchase]:
        """
        Get purchases by user.

        Args:
            user_id: User ID
            status: Optional status filter

        Returns:
            List of purchases, oldest first
        """
        stmt = select(Purchase).where(Purchase.user_id == user_id)
        if status:
            stmt = stmt.where(Purchase.status == status.value)
        stmt = stmt.order_by(Purchase.created_at, Purchase.id)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_active_by_user(
        self, user_id: int, for_update: bool = False
    ) -> list[Purchase]:
        """
        Get ACTIVE purchases of a user.

        Args:
            user_id: User ID
            for_update: Lock the rows until the transaction ends

        Returns:
            List of active purchases
        """
        stmt = (
            select(Purchase)
            .where(Purchase.user_id == user_id)
            .where(Purchase.status == PurchaseStatus.ACTIVE.value)
            .order_by(Purchase.id)
        )
        if for_update:
            stmt = self._locked(stmt)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def has_other_active(
        self, user_id: int, exclude_purchase_id: int
    ) -> bool:
        """
        Check whether the user already has an ACTIVE purchase.

        Args:
            user_id: User ID
            exclude_purchase_id: Purchase being approved

        Returns:
            True if another ACTIVE purchase exists
        """
        stmt = (
            select(Purchase.id)
            .where(Purchase.user_id == user_id)
            .where(Purchase.status == PurchaseStatus.ACTIVE.value)
            .where(Purchase.id != exclude_purchase_id)
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def get_pending(self, limit: int = 100) -> list[Purchase]:
        """
        Get purchases waiting for admin review, with packages loaded.

        Args:
            limit: Max number of results

        Returns:
            Pending purchases, oldest first
        """
        stmt = (
            select(Purchase)
            .options(selectinload(Purchase.vip_package))
            .where(Purchase.status == PurchaseStatus.PENDING.value)
            .order_by(Purchase.created_at)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def compare_and_set_last_profit(
        self,
        purchase_id: int,
        expected: datetime | None,
        new_value: datetime,
    ) -> bool:
        """
        Move last_profit_at forward only if nobody moved it meanwhile.

        Args:
            purchase_id: Purchase ID
            expected: Value read earlier in this transaction
            new_value: New stamp

        Returns:
            True if exactly this caller updated the row
        """
        stmt = (
            update(Purchase)
            .where(Purchase.id == purchase_id)
            .where(Purchase.status == PurchaseStatus.ACTIVE.value)
        )
        if expected is None:
            stmt = stmt.where(Purchase.last_profit_at.is_(None))
        else:
            stmt = stmt.where(Purchase.last_profit_at == expected)
        stmt = stmt.values(last_profit_at=new_value)

        result = await self.session.execute(stmt)
        return result.rowcount == 1
