"""
Wallet ledger repository.

Data access layer for the append-only WalletLedgerEntry table. There is
deliberately no update or delete here.
"""

from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums import AdjustmentKind, LedgerEntryType
from app.models.wallet_ledger import WalletLedgerEntry
from app.repositories.base import BaseRepository


class WalletLedgerRepository(BaseRepository[WalletLedgerEntry]):
    """Ledger queries and appends."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize wallet ledger repository."""
        super().__init__(WalletLedgerEntry, session)

    async def append(
        self,
        user_id: int,
        entry_type: LedgerEntryType,
        amount_bs: Decimal,
        description: str,
        *,
        adjustment_kind: AdjustmentKind | None = None,
        referral_level: int | None = None,
        source_purchase_id: int | None = None,
        source_user_id: int | None = None,
        withdrawal_id: int | None = None,
    ) -> WalletLedgerEntry:
        """
        Append a signed entry to a user's ledger.

        Args:
            user_id: Owner of the entry
            entry_type: Entry source
            amount_bs: Signed amount
            description: Human readable description
            adjustment_kind: ABONADO/DESCUENTO for manual adjustments
            referral_level: Upline level for referral bonuses
            source_purchase_id: Purchase that produced the entry
            source_user_id: Downline user for referral bonuses
            withdrawal_id: Related withdrawal request

        Returns:
            Created entry
        """
        return await self.create(
            user_id=user_id,
            entry_type=entry_type.value,
            amount_bs=amount_bs,
            description=description,
            adjustment_kind=adjustment_kind.value if adjustment_kind else None,
            referral_level=referral_level,
            source_purchase_id=source_purchase_id,
            source_user_id=source_user_id,
            withdrawal_id=withdrawal_id,
        )

    async def get_by_user(
        self,
        user_id: int,
        entry_type: LedgerEntryType | None = None,
        limit: int | None = None,
    ) -> list[WalletLedgerEntry]:
        """
        Get a user's entries in append order.

        Args:
            user_id: User ID
            entry_type: Optional type filter
            limit: Optional max number of newest entries

        Returns:
            List of entries, oldest first
        """
        stmt = select(WalletLedgerEntry).where(
            WalletLedgerEntry.user_id == user_id
        )
        if entry_type:
            stmt = stmt.where(WalletLedgerEntry.entry_type == entry_type.value)

        if limit:
            stmt = stmt.order_by(WalletLedgerEntry.id.desc()).limit(limit)
            result = await self.session.execute(stmt)
            return list(reversed(result.scalars().all()))

        stmt = stmt.order_by(WalletLedgerEntry.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def has_entry_of_type(
        self, user_id: int, entry_type: LedgerEntryType
    ) -> bool:
        """
        Check whether a user already has an entry of a type.

        Args:
            user_id: User ID
            entry_type: Entry type

        Returns:
            True if at least one entry exists
        """
        stmt = (
            select(WalletLedgerEntry.id)
            .where(WalletLedgerEntry.user_id == user_id)
            .where(WalletLedgerEntry.entry_type == entry_type.value)
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def get_balance(self, user_id: int) -> Decimal:
        """
        Sum of all entries of a user.

        Args:
            user_id: User ID

        Returns:
            Authoritative balance
        """
        stmt = select(
            func.coalesce(func.sum(WalletLedgerEntry.amount_bs), 0)
        ).where(WalletLedgerEntry.user_id == user_id)
        result = await self.session.execute(stmt)
        return Decimal(str(result.scalar_one()))

