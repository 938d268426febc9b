"""Daily profit gate package."""

from .eligibility import claim_anchor, is_eligible, next_eligible_at
from .gate import ActivationResult, DailyProfitGate, GateStatus


__all__ = [
    "ActivationResult",
    "DailyProfitGate",
    "GateStatus",
    "claim_anchor",
    "is_eligible",
    "next_eligible_at",
]
