"""
Manual adjustment service.

Admin credits (ABONADO) and debits (DESCUENTO) recorded as signed
MANUAL_ADJUSTMENT ledger entries.
"""

from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums import AdjustmentKind, LedgerEntryType
from app.models.wallet_ledger import WalletLedgerEntry
from app.repositories.user_repository import UserRepository
from app.repositories.wallet_ledger_repository import WalletLedgerRepository
from app.services.base_service import BaseService, transaction
from app.utils.exceptions import InvalidAmountError, NotFoundError
from app.utils.formatters import quantize_money


class AdjustmentService(BaseService):
    """Applies admin balance adjustments."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize adjustment service."""
        super().__init__(session)
        self.user_repo = UserRepository(session)
        self.ledger_repo = WalletLedgerRepository(session)

    @transaction
    async def adjust(
        self,
        user_id: int,
        kind: AdjustmentKind,
        amount: Decimal,
        description: str,
        admin_id: int | None = None,
    ) -> WalletLedgerEntry:
        """
        Append a manual adjustment.

        A DESCUENTO may take the balance below zero; it is an admin
        correction, not a withdrawal.

        Args:
            user_id: Target user
            kind: ABONADO (credit) or DESCUENTO (debit)
            amount: Positive amount
            description: Reason shown to the user
            admin_id: Admin who made the change, only logged

        Returns:
            Created ledger entry

        Raises:
            InvalidAmountError: Amount is not positive
            NotFoundError: Unknown user
        """
        amount = quantize_money(amount)
        if amount <= 0:
            raise InvalidAmountError(
                f"Adjustment amount must be at least 0.01, got {amount}"
            )
        if not await self.user_repo.exists(id=user_id):
            raise NotFoundError("User", user_id)

        signed = amount if kind == AdjustmentKind.ABONADO else -amount

        entry = await self.ledger_repo.append(
            user_id=user_id,
            entry_type=LedgerEntryType.MANUAL_ADJUSTMENT,
            amount_bs=signed,
            description=description.strip() or kind.value,
            adjustment_kind=kind,
        )

        self.logger.info(
            "Manual adjustment applied",
            extra={
                "user_id": user_id,
                "admin_id": admin_id,
                "kind": kind.value,
                "amount": str(signed),
            },
        )

        return entry
