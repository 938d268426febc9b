"""
Ledger entry schemas.

Entries are a tagged union on `type`; each variant only carries the
fields meaningful for its source.
"""

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from app.models.enums import AdjustmentKind
from app.models.wallet_ledger import WalletLedgerEntry
from app.schemas.common import Money


class _LedgerEntryBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    amount: Money = Field(..., description="Signed amount in Bs")
    description: str
    created_at: datetime


class DailyProfitEntry(_LedgerEntryBase):
    type: Literal["DAILY_PROFIT"] = "DAILY_PROFIT"
    source_purchase_id: int | None = None


class ReferralBonusEntry(_LedgerEntryBase):
    type: Literal["REFERRAL_BONUS"] = "REFERRAL_BONUS"
    level: int = Field(..., ge=1, description="Upline distance to the buyer")
    source_user_id: int | None = None
    source_purchase_id: int | None = None


class ManualAdjustmentEntry(_LedgerEntryBase):
    type: Literal["MANUAL_ADJUSTMENT"] = "MANUAL_ADJUSTMENT"
    kind: AdjustmentKind


class TaskBonusEntry(_LedgerEntryBase):
    type: Literal["TASK_BONUS"] = "TASK_BONUS"
    source_purchase_id: int | None = None


class WithdrawalEntry(_LedgerEntryBase):
    type: Literal["WITHDRAWAL"] = "WITHDRAWAL"
    withdrawal_id: int | None = None


LedgerEntrySchema = Annotated[
    DailyProfitEntry
    | ReferralBonusEntry
    | ManualAdjustmentEntry
    | TaskBonusEntry
    | WithdrawalEntry,
    Field(discriminator="type"),
]

_ledger_entry_adapter = TypeAdapter(LedgerEntrySchema)


def ledger_entry_from_model(entry: WalletLedgerEntry) -> LedgerEntrySchema:
    """Convert an ORM ledger row into its typed schema."""
    return _ledger_entry_adapter.validate_python(
        {
            "type": entry.entry_type,
            "id": entry.id,
            "amount": entry.amount_bs,
            "description": entry.description,
            "created_at": entry.created_at,
            "level": entry.referral_level,
            "kind": entry.adjustment_kind,
            "source_user_id": entry.source_user_id,
            "source_purchase_id": entry.source_purchase_id,
            "withdrawal_id": entry.withdrawal_id,
        }
    )
