"""Wallet services package."""

from .adjustment_service import AdjustmentService
from .ledger_service import LedgerService


__all__ = [
    "AdjustmentService",
    "LedgerService",
]
