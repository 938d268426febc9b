"""
Daily profit eligibility rules.

Pure functions over purchases and timestamps. The gate uses a rolling
window measured from the most recent claim.
"""

from collections.abc import Iterable
from datetime import datetime, timedelta
from decimal import Decimal

from app.models.purchase import Purchase
from app.utils.datetime_utils import ensure_utc


def claim_anchor(purchases: Iterable[Purchase]) -> datetime | None:
    """
    Most recent gate claim among a user's ACTIVE purchases.

    Activation stamps last_profit_at == activated_at; only a stamp past
    activation counts as a claim.

    Args:
        purchases: ACTIVE purchases of one user

    Returns:
        Latest claim time, or None if the user never claimed
    """
    stamps = [
        ensure_utc(purchase.last_profit_at)
        for purchase in purchases
        if purchase.has_claimed_profit
    ]
    return max(stamps, default=None)


def next_eligible_at(
    anchor: datetime | None, window_hours: int
) -> datetime | None:
    """When the next claim opens (None if never claimed)."""
    if anchor is None:
        return None
    return anchor + timedelta(hours=window_hours)


def is_eligible(
    anchor: datetime | None, now: datetime, window_hours: int
) -> bool:
    """
    Check whether a claim is allowed at `now`.

    Args:
        anchor: Latest claim time (None if never claimed)
        now: Current time
        window_hours: Rolling window length

    Returns:
        True if never claimed or the window has elapsed
    """
    unlocks_at = next_eligible_at(anchor, window_hours)
    return unlocks_at is None or ensure_utc(now) >= unlocks_at


def pending_profit(purchases: Iterable[Purchase]) -> Decimal:
    """Sum of daily profit snapshots a claim would credit."""
    return sum(
        (purchase.daily_profit_bs for purchase in purchases), Decimal("0")
    )
