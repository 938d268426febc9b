"""
Referral payout processor.

Appends REFERRAL_BONUS ledger entries to a buyer's upline. Runs inside
the caller's transaction and never commits.
"""

from dataclasses import dataclass, field
from decimal import Decimal

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums import LedgerEntryType
from app.models.purchase import Purchase
from app.repositories.referral_bonus_rule_repository import (
    ReferralBonusRuleRepository,
)
from app.repositories.wallet_ledger_repository import WalletLedgerRepository
from app.services.referral.bonus_calculator import calculate_referral_bonus
from app.services.referral.upline_resolver import UplineResolver


@dataclass
class ReferralPayout:
    """One bonus paid to one ancestor."""

    user_id: int
    level: int
    amount: Decimal


@dataclass
class PayoutResult:
    """Result of paying an upline."""

    total: Decimal = Decimal("0")
    payouts: list[ReferralPayout] = field(default_factory=list)


class ReferralPayoutProcessor:
    """Pays referral bonuses for an activated purchase."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize payout processor."""
        self.session = session
        self.resolver = UplineResolver(session)
        self.rule_repo = ReferralBonusRuleRepository(session)
        self.ledger_repo = WalletLedgerRepository(session)

    async def pay_upline(self, purchase: Purchase) -> PayoutResult:
        """
        Credit every ancestor that has a positive rule for its level.

        Uses the purchase's investment snapshot, never the live package
        price. Levels without a rule are skipped.

        Args:
            purchase: Purchase being activated

        Returns:
            PayoutResult with the total and each payout
        """
        rates = await self.rule_repo.get_rates()
        max_level = max(rates, default=0)
        result = PayoutResult()

        if max_level == 0:
            logger.debug(
                "No referral rules configured",
                extra={"purchase_id": purchase.id},
            )
            return result

        upline = await self.resolver.resolve_upline(purchase.user_id, max_level)

        for member in upline:
            percentage = rates.get(member.level)
            if percentage is None or percentage <= 0:
                continue

            amount = calculate_referral_bonus(purchase.investment_bs, percentage)
            if amount <= 0:
                continue

            await self.ledger_repo.append(
                user_id=member.user_id,
                entry_type=LedgerEntryType.REFERRAL_BONUS,
                amount_bs=amount,
                description=(
                    f"Bono referido nivel {member.level} - compra #{purchase.id}"
                ),
                referral_level=member.level,
                source_purchase_id=purchase.id,
                source_user_id=purchase.user_id,
            )

            result.payouts.append(
                ReferralPayout(
                    user_id=member.user_id, level=member.level, amount=amount
                )
            )
            result.total += amount

            logger.info(
                "Referral bonus credited",
                extra={
                    "referrer_id": member.user_id,
                    "referral_user_id": purchase.user_id,
                    "purchase_id": purchase.id,
                    "level": member.level,
                    "percentage": str(percentage),
                    "amount": str(amount),
                },
            )

        return result
