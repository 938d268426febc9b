"""
Enumerations shared by models, services and schemas.
"""

from enum import StrEnum


class PurchaseStatus(StrEnum):
    """Purchase lifecycle status."""

    PENDING = "PENDING"  # Waiting for admin review of the receipt
    ACTIVE = "ACTIVE"  # Approved, accrues daily profit
    REJECTED = "REJECTED"  # Refused by admin


class LedgerEntryType(StrEnum):
    """Source of a wallet ledger entry."""

    DAILY_PROFIT = "DAILY_PROFIT"
    REFERRAL_BONUS = "REFERRAL_BONUS"
    MANUAL_ADJUSTMENT = "MANUAL_ADJUSTMENT"
    TASK_BONUS = "TASK_BONUS"
    WITHDRAWAL = "WITHDRAWAL"


class AdjustmentKind(StrEnum):
    """Direction of a manual admin adjustment."""

    ABONADO = "ABONADO"  # credit
    DESCUENTO = "DESCUENTO"  # debit


class TaskType(StrEnum):
    """Pre-VIP social tasks, in the order they must be completed."""

    FOLLOW = "FOLLOW"
    LIKE = "LIKE"
    COMMENT = "COMMENT"
    SHARE = "SHARE"


class WithdrawalStatus(StrEnum):
    """Withdrawal request status."""

    PENDING = "PENDING"
    PAID = "PAID"
    REJECTED = "REJECTED"
