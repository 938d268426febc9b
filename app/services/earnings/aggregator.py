"""
Earnings aggregator.

Read-only views over the wallet ledger.
"""

from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.user_repository import UserRepository
from app.repositories.wallet_ledger_repository import WalletLedgerRepository
from app.services.base_service import BaseService
from app.services.earnings.breakdown import EarningsBreakdown, build_breakdown
from app.utils.exceptions import NotFoundError


class EarningsAggregator(BaseService):
    """Builds earnings breakdowns and balances."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize earnings aggregator."""
        super().__init__(session)
        self.user_repo = UserRepository(session)
        self.ledger_repo = WalletLedgerRepository(session)

    async def _ensure_user(self, user_id: int) -> None:
        if not await self.user_repo.exists(id=user_id):
            raise NotFoundError("User", user_id)

    async def get_breakdown(self, user_id: int) -> EarningsBreakdown:
        """
        Get per-category earnings of a user.

        Args:
            user_id: User ID

        Returns:
            EarningsBreakdown whose categories add up to total_earnings

        Raises:
            NotFoundError: Unknown user
        """
        await self._ensure_user(user_id)

        entries = await self.ledger_repo.get_by_user(user_id)
        total = await self.ledger_repo.get_balance(user_id)
        breakdown = build_breakdown(entries, total)

        if breakdown.categories_total != total:
            # Entries appended between the two reads
            self.logger.warning(
                "Earnings categories do not match ledger sum",
                extra={
                    "user_id": user_id,
                    "categories_total": str(breakdown.categories_total),
                    "ledger_total": str(total),
                },
            )

        return breakdown

    async def get_balance(self, user_id: int) -> Decimal:
        """Authoritative balance (SUM of all entries)."""
        await self._ensure_user(user_id)
        return await self.ledger_repo.get_balance(user_id)
