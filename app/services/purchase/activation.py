"""
Purchase activation state machine.

PENDING -> ACTIVE | REJECTED. Both targets are terminal. Approval pays
the referral upline and, on a user's first activation, converts the task
bonus; all of it commits together or not at all.
"""

from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums import PurchaseStatus
from app.models.purchase import Purchase
from app.repositories.purchase_repository import PurchaseRepository
from app.repositories.user_repository import UserRepository
from app.services.base_service import BaseService, transaction
from app.services.purchase.task_bonus_converter import TaskBonusConverter
from app.services.referral.payout_processor import ReferralPayoutProcessor
from app.utils.datetime_utils import utc_now
from app.utils.exceptions import InvalidTransitionError, NotFoundError
from app.utils.formatters import format_money


@dataclass
class ApprovalResult:
    """Result of approving a purchase."""

    message: str
    task_bonus_credited: Decimal = Decimal("0")
    referral_bonus_total: Decimal = Decimal("0")
    already_active: bool = False


@dataclass
class RejectionResult:
    """Result of rejecting a purchase."""

    message: str
    already_rejected: bool = False


class PurchaseActivationService(BaseService):
    """Approves and rejects purchases."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize purchase activation service."""
        super().__init__(session)
        self.purchase_repo = PurchaseRepository(session)
        self.user_repo = UserRepository(session)
        self.payout_processor = ReferralPayoutProcessor(session)
        self.task_converter = TaskBonusConverter(session)

    @transaction
    async def approve(self, purchase_id: int) -> ApprovalResult:
        """
        Approve a purchase.

        Idempotent: approving an ACTIVE purchase is a no-op success.
        Lock order is user row, then purchase row; status is re-read
        after locking so a concurrent approval is observed.

        Args:
            purchase_id: Purchase ID

        Returns:
            ApprovalResult

        Raises:
            NotFoundError: Purchase does not exist
            InvalidTransitionError: Purchase was rejected
        """
        purchase = await self.purchase_repo.get_by_id(purchase_id)
        if not purchase:
            raise NotFoundError("Purchase", purchase_id)

        if purchase.is_active:
            return ApprovalResult(message="Compra ya activa", already_active=True)
        if purchase.status == PurchaseStatus.REJECTED.value:
            raise InvalidTransitionError(
                "Purchase", purchase.status, PurchaseStatus.ACTIVE.value
            )

        await self.user_repo.lock_user(purchase.user_id)
        purchase = await self.purchase_repo.get_for_update(purchase_id)
        if not purchase:
            raise NotFoundError("Purchase", purchase_id)

        if purchase.is_active:
            return ApprovalResult(message="Compra ya activa", already_active=True)
        if purchase.status == PurchaseStatus.REJECTED.value:
            raise InvalidTransitionError(
                "Purchase", purchase.status, PurchaseStatus.ACTIVE.value
            )

        is_first_activation = not await self.purchase_repo.has_other_active(
            purchase.user_id, purchase.id
        )

        now = utc_now()
        purchase.status = PurchaseStatus.ACTIVE.value
        purchase.activated_at = now
        purchase.last_profit_at = now
        await self.session.flush()

        payout = await self.payout_processor.pay_upline(purchase)

        task_bonus = Decimal("0")
        if is_first_activation:
            task_bonus = await self.task_converter.convert(
                purchase.user_id, purchase.id
            )

        self.logger.info(
            "Purchase approved",
            extra={
                "purchase_id": purchase.id,
                "user_id": purchase.user_id,
                "investment_bs": str(purchase.investment_bs),
                "referral_bonus_total": str(payout.total),
                "task_bonus": str(task_bonus),
                "first_activation": is_first_activation,
            },
        )

        message = "Compra activada y bonos pagados"
        if task_bonus > 0:
            message = (
                "Compra activada, bonos pagados y "
                f"+{format_money(task_bonus)} de TikTok bonificados"
            )

        return ApprovalResult(
            message=message,
            task_bonus_credited=task_bonus,
            referral_bonus_total=payout.total,
        )

    @transaction
    async def reject(
        self, purchase_id: int, reason: str | None = None
    ) -> RejectionResult:
        """
        Reject a purchase.

        Rejecting a REJECTED purchase is a no-op success. No ledger effect.

        Args:
            purchase_id: Purchase ID
            reason: Optional admin note, only logged

        Returns:
            RejectionResult

        Raises:
            NotFoundError: Purchase does not exist
            InvalidTransitionError: Purchase is already ACTIVE
        """
        purchase = await self.purchase_repo.get_for_update(purchase_id)
        if not purchase:
            raise NotFoundError("Purchase", purchase_id)

        if purchase.status == PurchaseStatus.REJECTED.value:
            return RejectionResult(
                message="Compra ya rechazada", already_rejected=True
            )
        if purchase.is_active:
            raise InvalidTransitionError(
                "Purchase", purchase.status, PurchaseStatus.REJECTED.value
            )

        purchase.status = PurchaseStatus.REJECTED.value
        await self.session.flush()

        self.logger.info(
            "Purchase rejected",
            extra={
                "purchase_id": purchase.id,
                "user_id": purchase.user_id,
                "reason": reason,
            },
        )

        return RejectionResult(message="Compra rechazada")

    async def list_pending(self, limit: int = 100) -> list[Purchase]:
        """Purchases waiting for review, oldest first, packages loaded."""
        return await self.purchase_repo.get_pending(limit)
