"""
Daily profit activation gate.

A user presses "activate" at most once per rolling window and receives
the daily profit of every ACTIVE purchase.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from app.config.settings import settings
from app.models.enums import LedgerEntryType
from app.repositories.purchase_repository import PurchaseRepository
from app.repositories.user_repository import UserRepository
from app.repositories.wallet_ledger_repository import WalletLedgerRepository
from app.services.base_service import BaseService, transaction
from app.services.daily_profit.eligibility import (
    claim_anchor,
    is_eligible,
    next_eligible_at,
    pending_profit,
)
from app.utils.datetime_utils import utc_now
from app.utils.exceptions import (
    LockedError,
    NoActivePurchasesError,
    NotFoundError,
)


@dataclass
class GateStatus:
    """Read-only view of the gate for one user."""

    eligible: bool
    next_eligible_at: datetime | None
    active_purchases: int
    pending_total: Decimal


@dataclass
class ActivationResult:
    """Result of a successful claim."""

    total_credited: Decimal
    next_eligible_at: datetime
    purchases_credited: int


class DailyProfitGate(BaseService):
    """Guards and performs daily profit claims."""

    def __init__(
        self, session: AsyncSession, window_hours: int | None = None
    ) -> None:
        """
        Initialize daily profit gate.

        Args:
            session: Async database session
            window_hours: Window override (defaults to settings)
        """
        super().__init__(session)
        self.window_hours = window_hours or settings.daily_profit_window_hours
        self.purchase_repo = PurchaseRepository(session)
        self.user_repo = UserRepository(session)
        self.ledger_repo = WalletLedgerRepository(session)

    async def can_activate(self, user_id: int) -> GateStatus:
        """
        Check whether the user may claim now. Read-only.

        Args:
            user_id: User ID

        Returns:
            GateStatus
        """
        if not await self.user_repo.exists(id=user_id):
            raise NotFoundError("User", user_id)

        purchases = await self.purchase_repo.get_active_by_user(user_id)
        anchor = claim_anchor(purchases)

        return GateStatus(
            eligible=bool(purchases)
            and is_eligible(anchor, utc_now(), self.window_hours),
            next_eligible_at=next_eligible_at(anchor, self.window_hours),
            active_purchases=len(purchases),
            pending_total=pending_profit(purchases),
        )

    @transaction
    async def activate(self, user_id: int) -> ActivationResult:
        """
        Credit one day of profit for every ACTIVE purchase.

        The user row is locked first, then the purchases, so concurrent
        claims for one user run one after the other and the second one
        sees the first claim. last_profit_at is moved with a conditional
        update as a second guard.

        Args:
            user_id: User ID

        Returns:
            ActivationResult

        Raises:
            NotFoundError: Unknown user
            NoActivePurchasesError: Nothing accrues profit
            LockedError: Already claimed in the current window
        """
        user = await self.user_repo.lock_user(user_id)
        if not user:
            raise NotFoundError("User", user_id)

        purchases = await self.purchase_repo.get_active_by_user(
            user_id, for_update=True
        )
        if not purchases:
            raise NoActivePurchasesError(user_id)

        now = utc_now()
        anchor = claim_anchor(purchases)
        if not is_eligible(anchor, now, self.window_hours):
            raise LockedError(next_eligible_at(anchor, self.window_hours))

        total = Decimal("0")
        for purchase in purchases:
            swapped = await self.purchase_repo.compare_and_set_last_profit(
                purchase.id, purchase.last_profit_at, now
            )
            if not swapped:
                raise LockedError(await self._winner_unlock_time(purchase.id))

            await self.ledger_repo.append(
                user_id=user_id,
                entry_type=LedgerEntryType.DAILY_PROFIT,
                amount_bs=purchase.daily_profit_bs,
                description=f"Ganancia diaria - compra #{purchase.id}",
                source_purchase_id=purchase.id,
            )
            total += purchase.daily_profit_bs

        unlocks_at = now + timedelta(hours=self.window_hours)

        self.logger.info(
            "Daily profit activated",
            extra={
                "user_id": user_id,
                "purchases": len(purchases),
                "total": str(total),
                "unlocks_at": unlocks_at.isoformat(),
            },
        )

        return ActivationResult(
            total_credited=total,
            next_eligible_at=unlocks_at,
            purchases_credited=len(purchases),
        )

    async def _winner_unlock_time(self, purchase_id: int) -> datetime | None:
        """
        Unlock time after another claim moved a purchase's stamp first.

        Re-reads the row so the caller gets the same time can_activate
        will report.
        """
        current = await self.purchase_repo.get_for_update(purchase_id)
        anchor = claim_anchor([current]) if current else None

        self.logger.warning(
            "Daily profit stamp moved concurrently",
            extra={
                "purchase_id": purchase_id,
                "winner_stamp": anchor.isoformat() if anchor else None,
            },
        )

        return next_eligible_at(anchor, self.window_hours)
