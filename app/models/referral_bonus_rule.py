"""
Referral bonus rule model.

Maps an upline level to the percentage of a downline investment it earns.
"""

from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import CheckConstraint, DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base
from app.models.types import PercentType


class ReferralBonusRule(Base):
    """Bonus percentage for one referral level."""

    __tablename__ = "referral_bonus_rules"
    __table_args__ = (
        CheckConstraint("level >= 1", name="bonus_rule_level_positive"),
        CheckConstraint(
            "percentage >= 0 AND percentage <= 100",
            name="bonus_rule_percentage_range",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    level: Mapped[int] = mapped_column(
        Integer, unique=True, index=True, nullable=False
    )
    percentage: Mapped[Decimal] = mapped_column(PercentType, nullable=False)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<ReferralBonusRule(level={self.level}, percentage={self.percentage})>"
