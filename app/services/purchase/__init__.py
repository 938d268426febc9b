"""
Purchase services package.

- creator: PENDING purchase requests
- activation: approve / reject state machine
- task_bonus_converter: task bonus credit on first activation
"""

from .activation import (
    ApprovalResult,
    PurchaseActivationService,
    RejectionResult,
)
from .creator import PurchaseCreator
from .task_bonus_converter import TaskBonusConverter


__all__ = [
    "ApprovalResult",
    "PurchaseActivationService",
    "PurchaseCreator",
    "RejectionResult",
    "TaskBonusConverter",
]
