"""Request and response schemas of the core operations."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import (
    AdjustmentKind,
    PurchaseStatus,
    TaskType,
    WithdrawalStatus,
)
from app.schemas.common import Money


class ApprovePurchaseResponse(BaseModel):
    message: str
    task_bonus_credited: Money = Field(
        ..., description="TikTok bonus credited on this approval"
    )


class RejectPurchaseResponse(BaseModel):
    message: str


class ActivationStatusResponse(BaseModel):
    can_activate: bool
    unlocks_at: datetime | None = None


class ActivateDailyProfitResponse(BaseModel):
    message: str
    total_profit: Money
    unlocks_at: datetime


class CreatePurchaseRequest(BaseModel):
    user_id: int
    package_level: int = Field(..., ge=1)
    receipt_url: str | None = Field(default=None, max_length=500)


class PurchaseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    investment_bs: Money
    daily_profit_bs: Money
    status: PurchaseStatus
    created_at: datetime
    activated_at: datetime | None = None


class SubmitTaskRequest(BaseModel):
    user_id: int
    task_type: TaskType
    screenshot_url: str = Field(..., min_length=1, max_length=500)


class TaskStatusResponse(BaseModel):
    has_vip: bool
    tasks_completed: int
    total_earned: Money
    next_task: TaskType | None
    is_complete: bool
    completed_tasks: list[TaskType]


class AdjustBalanceRequest(BaseModel):
    user_id: int
    kind: AdjustmentKind
    amount: Money = Field(..., gt=0)
    description: str = Field(default="", max_length=500)
    admin_id: int | None = None


class WithdrawalCreateRequest(BaseModel):
    user_id: int
    amount: Money = Field(..., gt=0)
    payout_details: str = Field(..., min_length=1)


class ProcessWithdrawalRequest(BaseModel):
    withdrawal_id: int
    action: Literal["pay", "reject"]
    note: str | None = None


class WithdrawalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    amount_bs: Money
    status: WithdrawalStatus
    admin_note: str | None = None
    created_at: datetime
    processed_at: datetime | None = None


class VipPackageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    level: int
    name: str
    investment_bs: Money
    daily_profit_bs: Money


class PendingPurchaseResponse(PurchaseResponse):
    """Purchase waiting for admin review, with its package."""

    receipt_url: str | None = None
    vip_package: VipPackageResponse
