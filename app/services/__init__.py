"""
Services.

Business logic layer.
"""

# Base Service Infrastructure
from app.services.base_service import BaseService, transaction

# Core Services
from app.services.core_operations import CoreOperations
from app.services.daily_profit import DailyProfitGate
from app.services.earnings import EarningsAggregator
from app.services.purchase import (
    PurchaseActivationService,
    PurchaseCreator,
    TaskBonusConverter,
)
from app.services.referral import (
    BonusRulesService,
    ReferralPayoutProcessor,
    UplineResolver,
)

# Wallet & Support Services
from app.services.task_bonus_service import TaskBonusService
from app.services.wallet import AdjustmentService, LedgerService
from app.services.withdrawal_service import WithdrawalService


__all__ = [
    # Base
    "BaseService",
    "transaction",
    # Core
    "CoreOperations",
    "DailyProfitGate",
    "EarningsAggregator",
    "PurchaseActivationService",
    "PurchaseCreator",
    "TaskBonusConverter",
    "BonusRulesService",
    "ReferralPayoutProcessor",
    "UplineResolver",
    # Wallet & Support
    "TaskBonusService",
    "AdjustmentService",
    "LedgerService",
    "WithdrawalService",
]
