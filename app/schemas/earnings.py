"""
Earnings breakdown schema.

Serialized with camelCase keys (dailyProfit, referralBonus.byLevel,
totalEarnings) for the admin and home dashboards.
"""

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.models.enums import AdjustmentKind
from app.schemas.common import Money

if TYPE_CHECKING:
    from app.services.earnings.breakdown import EarningsBreakdown


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class DailyProfitSchema(_CamelModel):
    total: Money
    days: int = Field(..., ge=0, description="Distinct UTC days with profit")


class AdjustmentItemSchema(_CamelModel):
    amount: Money
    type: AdjustmentKind
    description: str


class AdjustmentsSchema(_CamelModel):
    items: list[AdjustmentItemSchema]
    total: Money


class LevelAmountSchema(_CamelModel):
    level: int
    amount: Money


class ReferralBonusSchema(_CamelModel):
    by_level: list[LevelAmountSchema]
    total: Money


class EarningsBreakdownResponse(_CamelModel):
    """Per-category earnings of one user."""

    daily_profit: DailyProfitSchema
    adjustments: AdjustmentsSchema
    referral_bonus: ReferralBonusSchema
    task_bonus: Money
    withdrawals: Money
    total_earnings: Money

    @classmethod
    def from_breakdown(
        cls, breakdown: "EarningsBreakdown"
    ) -> "EarningsBreakdownResponse":
        """Build the response from a service breakdown."""
        return cls(
            daily_profit=DailyProfitSchema(
                total=breakdown.daily_profit.total,
                days=breakdown.daily_profit.days,
            ),
            adjustments=AdjustmentsSchema(
                items=[
                    AdjustmentItemSchema(
                        amount=item.amount,
                        type=item.kind,
                        description=item.description,
                    )
                    for item in breakdown.adjustments.items
                ],
                total=breakdown.adjustments.total,
            ),
            referral_bonus=ReferralBonusSchema(
                by_level=[
                    LevelAmountSchema(level=row.level, amount=row.amount)
                    for row in breakdown.referral_bonus.by_level
                ],
                total=breakdown.referral_bonus.total,
            ),
            task_bonus=breakdown.task_bonus,
            withdrawals=breakdown.withdrawals,
            total_earnings=breakdown.total_earnings,
        )
