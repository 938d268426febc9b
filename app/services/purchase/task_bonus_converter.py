"""
Task bonus converter.

Turns recorded pre-VIP task submissions into a single TASK_BONUS ledger
entry. Runs inside the activation transaction and never commits.
"""

from decimal import Decimal

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums import LedgerEntryType
from app.repositories.task_bonus_repository import TaskBonusRepository
from app.repositories.wallet_ledger_repository import WalletLedgerRepository


class TaskBonusConverter:
    """Credits accumulated task bonus on the first VIP activation."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize task bonus converter."""
        self.session = session
        self.task_repo = TaskBonusRepository(session)
        self.ledger_repo = WalletLedgerRepository(session)

    async def convert(self, user_id: int, purchase_id: int) -> Decimal:
        """
        Credit the sum of recorded tasks once and clear the records.

        Records are deleted whenever any exist, even when the user was
        already credited, so they can never be converted twice.

        Args:
            user_id: Owner of the tasks
            purchase_id: Purchase whose activation triggers the credit

        Returns:
            Amount credited (0 when nothing was credited)
        """
        records = await self.task_repo.get_by_user(user_id)
        if not records:
            return Decimal("0")

        total = sum((record.amount_bs for record in records), Decimal("0"))
        credited = Decimal("0")

        already_credited = await self.ledger_repo.has_entry_of_type(
            user_id, LedgerEntryType.TASK_BONUS
        )
        if total > 0 and not already_credited:
            await self.ledger_repo.append(
                user_id=user_id,
                entry_type=LedgerEntryType.TASK_BONUS,
                amount_bs=total,
                description=f"Bono TikTok - {len(records)} tareas completadas",
                source_purchase_id=purchase_id,
            )
            credited = total

        deleted = await self.task_repo.delete_by_user(user_id)

        logger.info(
            "Task bonus converted",
            extra={
                "user_id": user_id,
                "purchase_id": purchase_id,
                "tasks": deleted,
                "credited": str(credited),
                "already_credited": already_credited,
            },
        )

        return credited
