"""
Wallet ledger service.

Read access to a user's append-only ledger.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums import LedgerEntryType
from app.models.wallet_ledger import WalletLedgerEntry
from app.repositories.user_repository import UserRepository
from app.repositories.wallet_ledger_repository import WalletLedgerRepository
from app.services.base_service import BaseService
from app.utils.exceptions import NotFoundError


class LedgerService(BaseService):
    """Lists ledger entries and balances."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize ledger service."""
        super().__init__(session)
        self.user_repo = UserRepository(session)
        self.ledger_repo = WalletLedgerRepository(session)

    async def list_entries(
        self,
        user_id: int,
        entry_type: LedgerEntryType | None = None,
        limit: int | None = None,
    ) -> list[WalletLedgerEntry]:
        """
        Get a user's entries, oldest first.

        Args:
            user_id: User ID
            entry_type: Optional type filter
            limit: Optional number of newest entries

        Returns:
            Ledger entries

        Raises:
            NotFoundError: Unknown user
        """
        if not await self.user_repo.exists(id=user_id):
            raise NotFoundError("User", user_id)
        return await self.ledger_repo.get_by_user(
            user_id, entry_type=entry_type, limit=limit
        )
