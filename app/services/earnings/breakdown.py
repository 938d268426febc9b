"""
Earnings breakdown assembly.

Pure grouping of ledger entries into the categories shown to users and
admins. The authoritative total comes from the database; the category
totals are derived from the same entries and always add up to it.
"""

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from app.models.enums import AdjustmentKind, LedgerEntryType
from app.models.wallet_ledger import WalletLedgerEntry
from app.utils.datetime_utils import utc_day


ZERO = Decimal("0")


@dataclass
class DailyProfitSummary:
    total: Decimal = ZERO
    days: int = 0


@dataclass
class AdjustmentItem:
    amount: Decimal
    kind: AdjustmentKind
    description: str
    created_at: datetime | None = None


@dataclass
class AdjustmentSummary:
    items: list[AdjustmentItem] = field(default_factory=list)
    total: Decimal = ZERO


@dataclass
class LevelAmount:
    level: int
    amount: Decimal


@dataclass
class ReferralBonusSummary:
    by_level: list[LevelAmount] = field(default_factory=list)
    total: Decimal = ZERO


@dataclass
class EarningsBreakdown:
    """Per-category view of a user's ledger."""

    daily_profit: DailyProfitSummary
    adjustments: AdjustmentSummary
    referral_bonus: ReferralBonusSummary
    task_bonus: Decimal
    withdrawals: Decimal
    total_earnings: Decimal

    @property
    def categories_total(self) -> Decimal:
        """Sum of the category totals."""
        return (
            self.daily_profit.total
            + self.adjustments.total
            + self.referral_bonus.total
            + self.task_bonus
            + self.withdrawals
        )


def build_breakdown(
    entries: Iterable[WalletLedgerEntry], total_earnings: Decimal
) -> EarningsBreakdown:
    """
    Group ledger entries by category.

    Args:
        entries: All entries of one user
        total_earnings: SUM(amount_bs) computed by the database

    Returns:
        EarningsBreakdown

    Example:
        Two DAILY_PROFIT entries of 8 on the same UTC day give
        daily_profit.total == 16 and daily_profit.days == 1.
    """
    daily = DailyProfitSummary()
    profit_days = set()
    adjustments = AdjustmentSummary()
    by_level: dict[int, Decimal] = defaultdict(lambda: ZERO)
    task_bonus = ZERO
    withdrawals = ZERO

    for entry in entries:
        entry_type = LedgerEntryType(entry.entry_type)
        amount = entry.amount_bs

        if entry_type == LedgerEntryType.DAILY_PROFIT:
            daily.total += amount
            profit_days.add(utc_day(entry.created_at))
        elif entry_type == LedgerEntryType.MANUAL_ADJUSTMENT:
            adjustments.items.append(
                AdjustmentItem(
                    amount=amount,
                    kind=AdjustmentKind(entry.adjustment_kind),
                    description=entry.description,
                    created_at=entry.created_at,
                )
            )
            adjustments.total += amount
        elif entry_type == LedgerEntryType.REFERRAL_BONUS:
            by_level[entry.referral_level] += amount
        elif entry_type == LedgerEntryType.TASK_BONUS:
            task_bonus += amount
        elif entry_type == LedgerEntryType.WITHDRAWAL:
            withdrawals += amount

    daily.days = len(profit_days)
    referral = ReferralBonusSummary(
        by_level=[
            LevelAmount(level=level, amount=by_level[level])
            for level in sorted(by_level)
        ],
        total=sum(by_level.values(), ZERO),
    )

    return EarningsBreakdown(
        daily_profit=daily,
        adjustments=adjustments,
        referral_bonus=referral,
        task_bonus=task_bonus,
        withdrawals=withdrawals,
        total_earnings=total_earnings,
    )
