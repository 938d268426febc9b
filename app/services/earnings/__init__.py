"""Earnings aggregation package."""

from .aggregator import EarningsAggregator
from .breakdown import (
    AdjustmentItem,
    AdjustmentSummary,
    DailyProfitSummary,
    EarningsBreakdown,
    LevelAmount,
    ReferralBonusSummary,
    build_breakdown,
)


__all__ = [
    "AdjustmentItem",
    "AdjustmentSummary",
    "DailyProfitSummary",
    "EarningsAggregator",
    "EarningsBreakdown",
    "LevelAmount",
    "ReferralBonusSummary",
    "build_breakdown",
]
