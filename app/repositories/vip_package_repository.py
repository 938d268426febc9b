"""
VIP package repository.

Data access layer for VipPackage model.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.vip_package import VipPackage
from app.repositories.base import BaseRepository


class VipPackageRepository(BaseRepository[VipPackage]):
    """VIP package catalog queries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize VIP package repository."""
        super().__init__(VipPackage, session)

    async def get_by_level(self, level: int) -> VipPackage | None:
        """
        Get package by level.

        Args:
            level: Package level

        Returns:
            Package or None
        """
        return await self.get_by(level=level)

    async def list_enabled(self) -> list[VipPackage]:
        """
        Get packages currently on sale.

        Returns:
            Enabled packages ordered by level
        """
        stmt = (
            select(VipPackage)
            .where(VipPackage.is_enabled == True)  # noqa: E712
            .order_by(VipPackage.level)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
