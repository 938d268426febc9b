"""
Task bonus service.

Pre-VIP users complete a fixed sequence of social media tasks; each one
is recorded with its bonus. Nothing reaches the ledger until the user's
first purchase is approved.
"""

from dataclasses import dataclass, field
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from app.config.business_constants import TASK_ORDER
from app.config.settings import settings
from app.models.enums import PurchaseStatus, TaskType
from app.models.task_bonus import TaskBonusRecord
from app.repositories.purchase_repository import PurchaseRepository
from app.repositories.task_bonus_repository import TaskBonusRepository
from app.repositories.user_repository import UserRepository
from app.services.base_service import BaseService, transaction
from app.utils.exceptions import NotFoundError, TaskRejectedError


@dataclass
class TaskStatus:
    """Progress of a user through the task sequence."""

    has_vip: bool
    tasks_completed: int
    total_earned: Decimal
    next_task: TaskType | None
    is_complete: bool
    completed_tasks: list[TaskType] = field(default_factory=list)


class TaskBonusService(BaseService):
    """Records task submissions and reports progress."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize task bonus service."""
        super().__init__(session)
        self.task_repo = TaskBonusRepository(session)
        self.purchase_repo = PurchaseRepository(session)
        self.user_repo = UserRepository(session)
        self.per_task = settings.task_bonus_per_task
        self.max_total = settings.task_bonus_max

    def _build_status(
        self, records: list[TaskBonusRecord], has_vip: bool
    ) -> TaskStatus:
        completed = [TaskType(record.task_type) for record in records]
        total = sum((record.amount_bs for record in records), Decimal("0"))
        is_complete = len(completed) >= len(TASK_ORDER) or total >= self.max_total
        next_task = None if is_complete else TASK_ORDER[len(completed)]

        return TaskStatus(
            has_vip=has_vip,
            tasks_completed=len(completed),
            total_earned=total,
            next_task=next_task,
            is_complete=is_complete,
            completed_tasks=completed,
        )

    async def _has_vip(self, user_id: int) -> bool:
        active = await self.purchase_repo.count(
            user_id=user_id, status=PurchaseStatus.ACTIVE.value
        )
        return active > 0

    async def get_status(self, user_id: int) -> TaskStatus:
        """
        Get task progress of a user.

        Args:
            user_id: User ID

        Returns:
            TaskStatus

        Raises:
            NotFoundError: Unknown user
        """
        if not await self.user_repo.exists(id=user_id):
            raise NotFoundError("User", user_id)

        records = await self.task_repo.get_by_user(user_id)
        return self._build_status(records, await self._has_vip(user_id))

    @transaction
    async def submit(
        self, user_id: int, task_type: TaskType, screenshot_url: str
    ) -> TaskStatus:
        """
        Record a completed task.

        Tasks must follow FOLLOW -> LIKE -> COMMENT -> SHARE and are
        refused once the user owns an ACTIVE package.

        Args:
            user_id: User ID
            task_type: Task being submitted
            screenshot_url: Proof uploaded by the user

        Returns:
            TaskStatus after the submission

        Raises:
            NotFoundError: Unknown user
            TaskRejectedError: Submission breaks the task rules
        """
        if not await self.user_repo.lock_user(user_id):
            raise NotFoundError("User", user_id)

        if await self._has_vip(user_id):
            raise TaskRejectedError(
                "Las tareas solo están disponibles antes de activar un VIP"
            )

        records = await self.task_repo.get_by_user(user_id)
        status = self._build_status(records, has_vip=False)

        if status.is_complete:
            raise TaskRejectedError("Ya completaste todas las tareas")
        if task_type in status.completed_tasks:
            raise TaskRejectedError("Esta tarea ya fue completada")
        if task_type != status.next_task:
            raise TaskRejectedError(
                f"Debes completar primero la tarea {status.next_task.value}"
            )

        amount = min(self.per_task, self.max_total - status.total_earned)
        record = await self.task_repo.create(
            user_id=user_id,
            task_type=task_type.value,
            amount_bs=amount,
            screenshot_url=screenshot_url,
        )

        self.logger.info(
            "Task bonus recorded",
            extra={
                "user_id": user_id,
                "task_type": task_type.value,
                "amount": str(amount),
            },
        )

        return self._build_status([*records, record], has_vip=False)
