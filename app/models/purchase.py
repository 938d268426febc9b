"""
Purchase model.

A user's request to buy a VIP package, reviewed by an admin.
"""

from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base
from app.models.enums import PurchaseStatus
from app.models.types import MoneyType

if TYPE_CHECKING:
    from app.models.user import User
    from app.models.vip_package import VipPackage


class Purchase(Base):
    """
    Purchase entity.

    Lifecycle:
    - Created PENDING by the user together with a payment receipt
    - Approved (ACTIVE) or rejected (REJECTED) by an admin; both are terminal
    - While ACTIVE, the daily profit gate moves last_profit_at forward

    Attributes:
        id: Primary key
        user_id: Buyer
        vip_package_id: Package bought
        investment_bs: Investment snapshot taken at purchase time
        daily_profit_bs: Daily profit snapshot taken at purchase time
        status: PENDING / ACTIVE / REJECTED
        receipt_url: Uploaded payment receipt (storage is external)
        created_at: When the purchase was requested
        activated_at: When the admin approved it
        last_profit_at: Last time daily profit was stamped for it
    """

    __tablename__ = "purchases"
    __table_args__ = (
        CheckConstraint(
            "investment_bs > 0", name="purchase_investment_positive"
        ),
        CheckConstraint(
            "daily_profit_bs >= 0", name="purchase_daily_profit_non_negative"
        ),
        CheckConstraint(
            "(status = 'ACTIVE') = (activated_at IS NOT NULL)",
            name="purchase_activated_iff_active",
        ),
        CheckConstraint(
            "last_profit_at IS NULL OR status = 'ACTIVE'",
            name="purchase_profit_only_when_active",
        ),
        Index("idx_purchases_user_status", "user_id", "status"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    vip_package_id: Mapped[int] = mapped_column(
        ForeignKey("vip_packages.id", ondelete="RESTRICT"),
        nullable=False,
    )

    # Snapshots, decoupled from later package edits
    investment_bs: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)
    daily_profit_bs: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=PurchaseStatus.PENDING.value,
        index=True,
    )
    receipt_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )
    activated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    last_profit_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="purchases")
    vip_package: Mapped["VipPackage"] = relationship("VipPackage")

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<Purchase(id={self.id}, user_id={self.user_id}, "
            f"investment_bs={self.investment_bs}, status={self.status})>"
        )

    @property
    def is_active(self) -> bool:
        """Whether the purchase accrues daily profit."""
        return self.status == PurchaseStatus.ACTIVE.value

    @property
    def has_claimed_profit(self) -> bool:
        """Whether the gate has stamped this purchase after activation."""
        return (
            self.last_profit_at is not None
            and self.activated_at is not None
            and self.last_profit_at > self.activated_at
        )
