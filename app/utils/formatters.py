"""
Formatters utility.

Utility functions for formatting amounts in messages and descriptions.
"""

from decimal import ROUND_HALF_UP, Decimal

from app.config.business_constants import MONEY_QUANTUM
from app.config.settings import settings


def quantize_money(amount: Decimal) -> Decimal:
    """
    Round an amount to cents.

    Args:
        amount: Raw amount

    Returns:
        Amount rounded half-up to two decimals
    """
    return amount.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


def format_money(amount: Decimal, currency: str | None = None) -> str:
    """
    Format amount as "Bs 12.50".

    Args:
        amount: Amount to format
        currency: Currency label (defaults to settings.currency_label)

    Returns:
        Formatted string
    """
    label = currency or settings.currency_label
    return f"{label} {quantize_money(amount):.2f}"
