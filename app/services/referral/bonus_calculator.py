"""
Referral bonus math.

Pure functions, no database access.
"""

from decimal import Decimal

from app.utils.formatters import quantize_money


def calculate_referral_bonus(
    investment_bs: Decimal, percentage: Decimal
) -> Decimal:
    """
    Calculate the bonus an ancestor earns from a downline investment.

    Formula: investment_bs * percentage / 100, rounded to cents.

    Args:
        investment_bs: Investment snapshot of the purchase
        percentage: Rule percentage for the ancestor's level

    Returns:
        Bonus amount (0 for non-positive inputs)

    Example:
        >>> calculate_referral_bonus(Decimal("1000"), Decimal("10"))
        Decimal('100.00')
    """
    if investment_bs <= 0 or percentage <= 0:
        return Decimal("0")

    return quantize_money(investment_bs * percentage / Decimal("100"))
