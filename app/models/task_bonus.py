"""
Task bonus record model.

One row per completed pre-VIP social task. Rows only live until the
user's first purchase is activated, when they are converted into a single
TASK_BONUS ledger entry and deleted.
"""

from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base
from app.models.types import MoneyType


class TaskBonusRecord(Base):
    """Completed task waiting for conversion."""

    __tablename__ = "task_bonus_records"
    __table_args__ = (
        UniqueConstraint("user_id", "task_type", name="uq_task_bonus_user_task"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    task_type: Mapped[str] = mapped_column(String(20), nullable=False)
    amount_bs: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)
    screenshot_url: Mapped[str] = mapped_column(
        String(500), nullable=False, default=""
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<TaskBonusRecord(user_id={self.user_id}, "
            f"task_type={self.task_type}, amount_bs={self.amount_bs})>"
        )
