"""
Core operations.

Entry points called by the HTTP layer. Each call opens its own session,
runs one service operation and returns a pydantic schema. Domain errors
propagate unchanged; they carry their own HTTP status.
"""

from decimal import Decimal
from typing import Literal

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.models.enums import AdjustmentKind, LedgerEntryType, TaskType
from app.schemas.earnings import EarningsBreakdownResponse
from app.schemas.ledger import LedgerEntrySchema, ledger_entry_from_model
from app.schemas.operations import (
    ActivateDailyProfitResponse,
    ActivationStatusResponse,
    ApprovePurchaseResponse,
    PendingPurchaseResponse,
    PurchaseResponse,
    RejectPurchaseResponse,
    TaskStatusResponse,
    VipPackageResponse,
    WithdrawalResponse,
)
from app.services.daily_profit.gate import DailyProfitGate
from app.services.earnings.aggregator import EarningsAggregator
from app.services.purchase.activation import PurchaseActivationService
from app.services.purchase.creator import PurchaseCreator
from app.services.task_bonus_service import TaskBonusService, TaskStatus
from app.services.wallet.adjustment_service import AdjustmentService
from app.services.wallet.ledger_service import LedgerService
from app.services.withdrawal_service import WithdrawalService
from app.utils.formatters import format_money


def _task_status_response(status: TaskStatus) -> TaskStatusResponse:
    return TaskStatusResponse(
        has_vip=status.has_vip,
        tasks_completed=status.tasks_completed,
        total_earned=status.total_earned,
        next_task=status.next_task,
        is_complete=status.is_complete,
        completed_tasks=status.completed_tasks,
    )


class CoreOperations:
    """
    Facade over the earnings services.

    The session factory is created at process start
    (app.config.database.create_session_maker) and passed in.
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]) -> None:
        self.session_maker = session_maker

    # ========================================================================
    # PURCHASES
    # ========================================================================

    async def create_purchase(
        self,
        user_id: int,
        package_level: int,
        receipt_url: str | None = None,
    ) -> PurchaseResponse:
        async with self.session_maker() as session:
            purchase = await PurchaseCreator(session).create_purchase(
                user_id, package_level, receipt_url
            )
            return PurchaseResponse.model_validate(purchase)

    async def list_vip_packages(self) -> list[VipPackageResponse]:
        async with self.session_maker() as session:
            packages = await PurchaseCreator(session).list_packages()
            return [VipPackageResponse.model_validate(p) for p in packages]

    async def list_pending_purchases(
        self, limit: int = 100
    ) -> list[PendingPurchaseResponse]:
        async with self.session_maker() as session:
            purchases = await PurchaseActivationService(session).list_pending(
                limit
            )
            return [PendingPurchaseResponse.model_validate(p) for p in purchases]

    async def approve_purchase(self, purchase_id: int) -> ApprovePurchaseResponse:
        """
        Approve a purchase (admin).

        Raises:
            NotFoundError, InvalidTransitionError, TransactionFailedError
        """
        async with self.session_maker() as session:
            result = await PurchaseActivationService(session).approve(purchase_id)

        return ApprovePurchaseResponse(
            message=result.message,
            task_bonus_credited=result.task_bonus_credited,
        )

    async def reject_purchase(
        self, purchase_id: int, reason: str | None = None
    ) -> RejectPurchaseResponse:
        async with self.session_maker() as session:
            result = await PurchaseActivationService(session).reject(
                purchase_id, reason
            )
        return RejectPurchaseResponse(message=result.message)

    # ========================================================================
    # DAILY PROFIT
    # ========================================================================

    async def get_activation_status(
        self, user_id: int
    ) -> ActivationStatusResponse:
        async with self.session_maker() as session:
            status = await DailyProfitGate(session).can_activate(user_id)

        return ActivationStatusResponse(
            can_activate=status.eligible,
            unlocks_at=None if status.eligible else status.next_eligible_at,
        )

    async def activate_daily_profit(
        self, user_id: int
    ) -> ActivateDailyProfitResponse:
        """
        Claim daily profit for a user.

        Raises:
            LockedError: Already claimed; payload carries unlocks_at
            NoActivePurchasesError: No ACTIVE purchase
        """
        async with self.session_maker() as session:
            result = await DailyProfitGate(session).activate(user_id)

        return ActivateDailyProfitResponse(
            message=(
                f"¡Ganancias activadas! +{format_money(result.total_credited)}"
            ),
            total_profit=result.total_credited,
            unlocks_at=result.next_eligible_at,
        )

    # ========================================================================
    # EARNINGS AND LEDGER
    # ========================================================================

    async def get_earnings_breakdown(
        self, user_id: int
    ) -> EarningsBreakdownResponse:
        async with self.session_maker() as session:
            breakdown = await EarningsAggregator(session).get_breakdown(user_id)
        return EarningsBreakdownResponse.from_breakdown(breakdown)

    async def get_balance(self, user_id: int) -> Decimal:
        async with self.session_maker() as session:
            return await EarningsAggregator(session).get_balance(user_id)

    async def list_ledger(
        self,
        user_id: int,
        entry_type: LedgerEntryType | None = None,
        limit: int | None = None,
    ) -> list[LedgerEntrySchema]:
        async with self.session_maker() as session:
            entries = await LedgerService(session).list_entries(
                user_id, entry_type=entry_type, limit=limit
            )
        return [ledger_entry_from_model(entry) for entry in entries]

    async def adjust_balance(
        self,
        user_id: int,
        kind: AdjustmentKind,
        amount: Decimal,
        description: str,
        admin_id: int | None = None,
    ) -> LedgerEntrySchema:
        async with self.session_maker() as session:
            entry = await AdjustmentService(session).adjust(
                user_id, kind, amount, description, admin_id
            )
        return ledger_entry_from_model(entry)

    # ========================================================================
    # TASKS
    # ========================================================================

    async def get_task_status(self, user_id: int) -> TaskStatusResponse:
        async with self.session_maker() as session:
            status = await TaskBonusService(session).get_status(user_id)
        return _task_status_response(status)

    async def submit_task(
        self, user_id: int, task_type: TaskType, screenshot_url: str
    ) -> TaskStatusResponse:
        async with self.session_maker() as session:
            status = await TaskBonusService(session).submit(
                user_id, task_type, screenshot_url
            )
        return _task_status_response(status)

    # ========================================================================
    # WITHDRAWALS
    # ========================================================================

    async def request_withdrawal(
        self, user_id: int, amount: Decimal, payout_details: str
    ) -> WithdrawalResponse:
        async with self.session_maker() as session:
            withdrawal = await WithdrawalService(session).request(
                user_id, amount, payout_details
            )
            return WithdrawalResponse.model_validate(withdrawal)

    async def process_withdrawal(
        self,
        withdrawal_id: int,
        action: Literal["pay", "reject"],
        note: str | None = None,
    ) -> WithdrawalResponse:
        """Mark a withdrawal as paid or reject it with a refund (admin)."""
        async with self.session_maker() as session:
            service = WithdrawalService(session)
            if action == "pay":
                withdrawal = await service.mark_paid(withdrawal_id, note)
            else:
                withdrawal = await service.reject(withdrawal_id, note)
            return WithdrawalResponse.model_validate(withdrawal)

    async def list_pending_withdrawals(
        self, limit: int = 100
    ) -> list[WithdrawalResponse]:
        async with self.session_maker() as session:
            withdrawals = await WithdrawalService(session).list_pending(limit)
            return [WithdrawalResponse.model_validate(w) for w in withdrawals]
