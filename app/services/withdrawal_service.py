"""
Withdrawal service.

Balance leaves the ledger when a withdrawal is requested (negative
WITHDRAWAL entry) and comes back as a refund entry if the admin rejects
it. Payout itself happens outside the system; the admin only marks the
request as paid.
"""

from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from app.config.settings import settings
from app.models.enums import LedgerEntryType, WithdrawalStatus
from app.models.withdrawal import WithdrawalRequest
from app.repositories.user_repository import UserRepository
from app.repositories.wallet_ledger_repository import WalletLedgerRepository
from app.repositories.withdrawal_repository import WithdrawalRepository
from app.services.base_service import BaseService, transaction
from app.utils.datetime_utils import utc_now
from app.utils.exceptions import (
    InsufficientBalanceError,
    InvalidAmountError,
    InvalidTransitionError,
    NotFoundError,
    WithdrawalPendingError,
)
from app.utils.formatters import format_money, quantize_money


class WithdrawalService(BaseService):
    """Withdrawal requests and their admin review."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize withdrawal service."""
        super().__init__(session)
        self.withdrawal_repo = WithdrawalRepository(session)
        self.user_repo = UserRepository(session)
        self.ledger_repo = WalletLedgerRepository(session)
        self.min_amount = settings.min_withdrawal_amount

    @transaction
    async def request(
        self, user_id: int, amount: Decimal, payout_details: str
    ) -> WithdrawalRequest:
        """
        Create a withdrawal request and debit the ledger.

        Runs under the user row lock so two requests cannot both pass
        the balance check.

        Args:
            user_id: User ID
            amount: Amount to withdraw
            payout_details: Where the admin should send the money

        Returns:
            PENDING withdrawal request

        Raises:
            InvalidAmountError: Below the configured minimum
            NotFoundError: Unknown user
            WithdrawalPendingError: Another request is still pending
            InsufficientBalanceError: Balance does not cover the amount
        """
        amount = quantize_money(amount)
        if amount < self.min_amount:
            raise InvalidAmountError(
                f"Minimum withdrawal is {format_money(self.min_amount)}"
            )

        if not await self.user_repo.lock_user(user_id):
            raise NotFoundError("User", user_id)

        if await self.withdrawal_repo.has_pending(user_id):
            raise WithdrawalPendingError(user_id)

        balance = await self.ledger_repo.get_balance(user_id)
        if balance < amount:
            raise InsufficientBalanceError(balance, amount)

        withdrawal = await self.withdrawal_repo.create(
            user_id=user_id,
            amount_bs=amount,
            status=WithdrawalStatus.PENDING.value,
            payout_details=payout_details,
        )
        await self.ledger_repo.append(
            user_id=user_id,
            entry_type=LedgerEntryType.WITHDRAWAL,
            amount_bs=-amount,
            description=f"Retiro solicitado #{withdrawal.id}",
            withdrawal_id=withdrawal.id,
        )

        self.logger.info(
            "Withdrawal requested",
            extra={
                "withdrawal_id": withdrawal.id,
                "user_id": user_id,
                "amount": str(amount),
                "balance_before": str(balance),
            },
        )

        return withdrawal

    async def _lock_for_review(
        self, withdrawal_id: int, target: WithdrawalStatus
    ) -> tuple[WithdrawalRequest, bool]:
        """
        Lock a request and check the transition.

        Returns:
            Tuple of (request, already_in_target)
        """
        withdrawal = await self.withdrawal_repo.get_for_update(withdrawal_id)
        if not withdrawal:
            raise NotFoundError("WithdrawalRequest", withdrawal_id)

        if withdrawal.status == target.value:
            return withdrawal, True
        if withdrawal.status != WithdrawalStatus.PENDING.value:
            raise InvalidTransitionError(
                "WithdrawalRequest", withdrawal.status, target.value
            )
        return withdrawal, False

    @transaction
    async def mark_paid(
        self, withdrawal_id: int, note: str | None = None
    ) -> WithdrawalRequest:
        """
        Mark a PENDING request as paid. Idempotent on PAID.

        Raises:
            NotFoundError: Unknown request
            InvalidTransitionError: Request was rejected
        """
        withdrawal, done = await self._lock_for_review(
            withdrawal_id, WithdrawalStatus.PAID
        )
        if done:
            return withdrawal

        withdrawal.status = WithdrawalStatus.PAID.value
        withdrawal.admin_note = note
        withdrawal.processed_at = utc_now()
        await self.session.flush()

        self.logger.info(
            "Withdrawal paid",
            extra={
                "withdrawal_id": withdrawal.id,
                "user_id": withdrawal.user_id,
                "amount": str(withdrawal.amount_bs),
            },
        )

        return withdrawal

    @transaction
    async def reject(
        self, withdrawal_id: int, note: str | None = None
    ) -> WithdrawalRequest:
        """
        Reject a PENDING request and refund the debit.

        Idempotent on REJECTED: the refund is written exactly once.

        Args:
            withdrawal_id: Request ID
            note: Reason shown to the user

        Returns:
            Rejected request

        Raises:
            NotFoundError: Unknown request
            InvalidTransitionError: Request was already paid
        """
        withdrawal, done = await self._lock_for_review(
            withdrawal_id, WithdrawalStatus.REJECTED
        )
        if done:
            return withdrawal

        withdrawal.status = WithdrawalStatus.REJECTED.value
        withdrawal.admin_note = note
        withdrawal.processed_at = utc_now()

        await self.ledger_repo.append(
            user_id=withdrawal.user_id,
            entry_type=LedgerEntryType.WITHDRAWAL,
            amount_bs=withdrawal.amount_bs,
            description=f"Reembolso retiro rechazado #{withdrawal.id}",
            withdrawal_id=withdrawal.id,
        )

        self.logger.info(
            "Withdrawal rejected and refunded",
            extra={
                "withdrawal_id": withdrawal.id,
                "user_id": withdrawal.user_id,
                "amount": str(withdrawal.amount_bs),
                "note": note,
            },
        )

        return withdrawal

    async def list_pending(self, limit: int = 100) -> list[WithdrawalRequest]:
        """Requests waiting for payout, oldest first."""
        return await self.withdrawal_repo.get_pending(limit)
