"""
User model.

Represents a registered SmartHogar user. Rows are owned by the auth
subsystem; the earnings core only reads them and locks them to serialize
per-user money operations.
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base

if TYPE_CHECKING:
    from app.models.purchase import Purchase
    from app.models.wallet_ledger import WalletLedgerEntry


class User(Base):
    """User model - platform members forming the sponsor forest."""

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(
            "sponsor_id IS NULL OR sponsor_id <> id",
            name="user_not_own_sponsor",
        ),
    )

    # Primary key
    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )

    username: Mapped[str] = mapped_column(
        String(100), unique=True, index=True, nullable=False
    )
    full_name: Mapped[str | None] = mapped_column(
        String(255), nullable=True
    )

    # Referral: who invited this user
    sponsor_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    # Relationships
    sponsor: Mapped["User | None"] = relationship(
        "User",
        remote_side="User.id",
        foreign_keys=[sponsor_id],
    )
    purchases: Mapped[list["Purchase"]] = relationship(
        "Purchase",
        back_populates="user",
    )
    ledger_entries: Mapped[list["WalletLedgerEntry"]] = relationship(
        "WalletLedgerEntry",
        back_populates="user",
        foreign_keys="WalletLedgerEntry.user_id",
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<User(id={self.id}, username={self.username!r}, "
            f"sponsor_id={self.sponsor_id})>"
        )
