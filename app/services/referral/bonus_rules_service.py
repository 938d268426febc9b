"""
Bonus rules administration.

Admin edits of the level -> percentage table.
"""

from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.referral_bonus_rule import ReferralBonusRule
from app.repositories.referral_bonus_rule_repository import (
    ReferralBonusRuleRepository,
)
from app.services.base_service import BaseService, transaction
from app.utils.exceptions import InvalidAmountError, NotFoundError


class BonusRulesService(BaseService):
    """Reads and edits referral bonus rules."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize bonus rules service."""
        super().__init__(session)
        self.rule_repo = ReferralBonusRuleRepository(session)

    async def list_rules(self) -> list[ReferralBonusRule]:
        """All rules ordered by level."""
        return await self.rule_repo.list_rules()

    async def max_level(self) -> int:
        """Deepest configured level (0 without rules)."""
        return await self.rule_repo.get_max_level()

    @transaction
    async def upsert_rule(
        self, level: int, percentage: Decimal
    ) -> ReferralBonusRule:
        """
        Create or update the percentage of a level.

        Args:
            level: Referral level (>= 1)
            percentage: Percentage of investment (0..100)

        Returns:
            Stored rule

        Raises:
            InvalidAmountError: If level or percentage is out of range
        """
        if level < 1:
            raise InvalidAmountError(f"Referral level must be >= 1, got {level}")
        if percentage < 0 or percentage > 100:
            raise InvalidAmountError(
                f"Percentage must be between 0 and 100, got {percentage}"
            )

        rule = await self.rule_repo.upsert(level, percentage)
        self.logger.info(
            "Referral bonus rule saved",
            extra={"level": level, "percentage": str(percentage)},
        )
        return rule

    @transaction
    async def delete_rule(self, level: int) -> None:
        """
        Delete the rule of a level.

        Args:
            level: Referral level

        Raises:
            NotFoundError: If no rule exists for the level
        """
        if not await self.rule_repo.delete_by_level(level):
            raise NotFoundError("ReferralBonusRule", level)
        self.logger.info("Referral bonus rule deleted", extra={"level": level})
