"""
Referral bonus rule repository.

Data access layer for ReferralBonusRule model.
"""

from decimal import Decimal

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.referral_bonus_rule import ReferralBonusRule
from app.repositories.base import BaseRepository


class ReferralBonusRuleRepository(BaseRepository[ReferralBonusRule]):
    """Bonus rules table queries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize bonus rule repository."""
        super().__init__(ReferralBonusRule, session)

    async def list_rules(self) -> list[ReferralBonusRule]:
        """
        Get all rules ordered by level.

        Returns:
            List of rules
        """
        stmt = select(ReferralBonusRule).order_by(ReferralBonusRule.level)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_rates(self) -> dict[int, Decimal]:
        """
        Get the level -> percentage mapping.

        Returns:
            Dict mapping level to percentage
        """
        return {rule.level: rule.percentage for rule in await self.list_rules()}

    async def get_max_level(self) -> int:
        """
        Deepest configured level.

        Returns:
            Max level, 0 when no rules exist
        """
        stmt = select(func.max(ReferralBonusRule.level))
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def upsert(self, level: int, percentage: Decimal) -> ReferralBonusRule:
        """
        Create or update the rule for a level.

        Args:
            level: Referral level
            percentage: Percentage of investment

        Returns:
            Stored rule
        """
        rule = await self.get_by(level=level)
        if rule:
            rule.percentage = percentage
            await self.session.flush()
            return rule
        return await self.create(level=level, percentage=percentage)

    async def delete_by_level(self, level: int) -> bool:
        """
        Delete the rule for a level.

        Args:
            level: Referral level

        Returns:
            True if a rule was deleted
        """
        stmt = delete(ReferralBonusRule).where(ReferralBonusRule.level == level)
        result = await self.session.execute(stmt)
        return result.rowcount > 0
