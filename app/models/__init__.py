"""
Database models.

Exports all SQLAlchemy models for easy imports.
"""

from app.models.base import Base
from app.models.enums import (
    AdjustmentKind,
    LedgerEntryType,
    PurchaseStatus,
    TaskType,
    WithdrawalStatus,
)

# Core Models
from app.models.purchase import Purchase
from app.models.referral_bonus_rule import ReferralBonusRule
from app.models.task_bonus import TaskBonusRecord
from app.models.user import User
from app.models.vip_package import VipPackage
from app.models.wallet_ledger import WalletLedgerEntry
from app.models.withdrawal import WithdrawalRequest

__all__ = [
    # Base
    "Base",
    # Enums
    "AdjustmentKind",
    "LedgerEntryType",
    "PurchaseStatus",
    "TaskType",
    "WithdrawalStatus",
    # Core Models
    "User",
    "VipPackage",
    "Purchase",
    "WalletLedgerEntry",
    "ReferralBonusRule",
    "TaskBonusRecord",
    "WithdrawalRequest",
]
