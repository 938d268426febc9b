"""
VIP package model.

Tiered investment products with a fixed daily profit.
"""

from decimal import Decimal

from sqlalchemy import Boolean, CheckConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base
from app.models.types import MoneyType


class VipPackage(Base):
    """VIP package reference data, edited only from admin configuration."""

    __tablename__ = "vip_packages"
    __table_args__ = (
        CheckConstraint("level >= 1", name="vip_level_positive"),
        CheckConstraint("investment_bs > 0", name="vip_investment_positive"),
        CheckConstraint(
            "daily_profit_bs >= 0", name="vip_daily_profit_non_negative"
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    level: Mapped[int] = mapped_column(
        Integer, unique=True, index=True, nullable=False
    )
    name: Mapped[str] = mapped_column(String(50), nullable=False)

    investment_bs: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)
    daily_profit_bs: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)

    is_enabled: Mapped[bool] = mapped_column(
        Boolean, default=True, nullable=False
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<VipPackage(level={self.level}, name={self.name!r}, "
            f"investment_bs={self.investment_bs}, "
            f"daily_profit_bs={self.daily_profit_bs})>"
        )
