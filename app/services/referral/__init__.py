"""
Referral services package.

- upline_resolver: sponsor chain lookup
- bonus_calculator: pure bonus math
- payout_processor: REFERRAL_BONUS ledger entries for an activation
- bonus_rules_service: admin edits of the rules table
"""

from app.services.referral.bonus_calculator import calculate_referral_bonus
from app.services.referral.bonus_rules_service import BonusRulesService
from app.services.referral.payout_processor import (
    PayoutResult,
    ReferralPayout,
    ReferralPayoutProcessor,
)
from app.services.referral.upline_resolver import UplineMember, UplineResolver


__all__ = [
    "calculate_referral_bonus",
    "BonusRulesService",
    "PayoutResult",
    "ReferralPayout",
    "ReferralPayoutProcessor",
    "UplineMember",
    "UplineResolver",
]
