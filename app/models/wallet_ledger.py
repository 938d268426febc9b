"""
Wallet ledger model.

Append-only record of every balance-affecting event. The sum of a user's
entries is the user's balance.
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
    Text,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base
from app.models.types import MoneyType

if TYPE_CHECKING:
    from app.models.user import User


class WalletLedgerEntry(Base):
    """
    WalletLedgerEntry entity.

    Attributes:
        id: Primary key
        user_id: Owner of the entry
        entry_type: DAILY_PROFIT / REFERRAL_BONUS / MANUAL_ADJUSTMENT /
            TASK_BONUS / WITHDRAWAL
        adjustment_kind: ABONADO or DESCUENTO for manual adjustments
        amount_bs: Signed amount (debits are negative)
        description: Human readable description
        referral_level: Upline level for referral bonuses
        source_purchase_id: Purchase that produced the entry
        source_user_id: Downline user whose purchase paid a referral bonus
        withdrawal_id: Withdrawal request for withdrawal debits and refunds
        created_at: When the entry was appended
    """

    __tablename__ = "wallet_ledger"
    __table_args__ = (
        CheckConstraint(
            "entry_type IN ('DAILY_PROFIT', 'REFERRAL_BONUS', "
            "'MANUAL_ADJUSTMENT', 'TASK_BONUS', 'WITHDRAWAL')",
            name="ledger_entry_type_valid",
        ),
        CheckConstraint(
            "(entry_type = 'MANUAL_ADJUSTMENT') = (adjustment_kind IS NOT NULL)",
            name="ledger_adjustment_kind_only_for_adjustments",
        ),
        CheckConstraint(
            "(entry_type = 'REFERRAL_BONUS') = (referral_level IS NOT NULL)",
            name="ledger_level_only_for_referral_bonus",
        ),
        Index("idx_wallet_ledger_user_type", "user_id", "entry_type"),
        # One task bonus per user, ever
        Index(
            "uq_wallet_ledger_task_bonus_once",
            "user_id",
            unique=True,
            postgresql_where=text("entry_type = 'TASK_BONUS'"),
        ),
        # One referral payout per (ancestor, purchase, level)
        Index(
            "uq_wallet_ledger_referral_payout",
            "user_id",
            "source_purchase_id",
            "referral_level",
            unique=True,
            postgresql_where=text("entry_type = 'REFERRAL_BONUS'"),
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    entry_type: Mapped[str] = mapped_column(String(30), nullable=False)
    adjustment_kind: Mapped[str | None] = mapped_column(
        String(20), nullable=True
    )

    amount_bs: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    referral_level: Mapped[int | None] = mapped_column(Integer, nullable=True)
    source_purchase_id: Mapped[int | None] = mapped_column(
        ForeignKey("purchases.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    source_user_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    withdrawal_id: Mapped[int | None] = mapped_column(
        ForeignKey("withdrawal_requests.id", ondelete="SET NULL"),
        nullable=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
        index=True,
    )

    # Relationships
    user: Mapped["User"] = relationship(
        "User",
        back_populates="ledger_entries",
        foreign_keys=[user_id],
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<WalletLedgerEntry(id={self.id}, user_id={self.user_id}, "
            f"type={self.entry_type}, amount_bs={self.amount_bs})>"
        )
