"""
Task bonus repository.

Data access layer for TaskBonusRecord model.
"""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.task_bonus import TaskBonusRecord
from app.repositories.base import BaseRepository


class TaskBonusRepository(BaseRepository[TaskBonusRecord]):
    """Pre-VIP task records."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize task bonus repository."""
        super().__init__(TaskBonusRecord, session)

    async def get_by_user(self, user_id: int) -> list[TaskBonusRecord]:
        """
        Get a user's completed tasks in completion order.

        Args:
            user_id: User ID

        Returns:
            List of records
        """
        stmt = (
            select(TaskBonusRecord)
            .where(TaskBonusRecord.user_id == user_id)
            .order_by(TaskBonusRecord.created_at, TaskBonusRecord.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def delete_by_user(self, user_id: int) -> int:
        """
        Delete all of a user's records.

        Args:
            user_id: User ID

        Returns:
            Number of deleted rows
        """
        stmt = delete(TaskBonusRecord).where(TaskBonusRecord.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.rowcount or 0
