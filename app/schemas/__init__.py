"""
Pydantic schemas exchanged with the HTTP layer.
"""

from app.schemas.earnings import EarningsBreakdownResponse
from app.schemas.ledger import LedgerEntrySchema, ledger_entry_from_model
from app.schemas.operations import (
    ActivateDailyProfitResponse,
    ActivationStatusResponse,
    AdjustBalanceRequest,
    ApprovePurchaseResponse,
    CreatePurchaseRequest,
    PendingPurchaseResponse,
    ProcessWithdrawalRequest,
    PurchaseResponse,
    RejectPurchaseResponse,
    SubmitTaskRequest,
    TaskStatusResponse,
    VipPackageResponse,
    WithdrawalCreateRequest,
    WithdrawalResponse,
)


__all__ = [
    "ActivateDailyProfitResponse",
    "ActivationStatusResponse",
    "AdjustBalanceRequest",
    "ApprovePurchaseResponse",
    "CreatePurchaseRequest",
    "EarningsBreakdownResponse",
    "LedgerEntrySchema",
    "PendingPurchaseResponse",
    "ProcessWithdrawalRequest",
    "PurchaseResponse",
    "RejectPurchaseResponse",
    "SubmitTaskRequest",
    "TaskStatusResponse",
    "VipPackageResponse",
    "WithdrawalCreateRequest",
    "WithdrawalResponse",
    "ledger_entry_from_model",
]
