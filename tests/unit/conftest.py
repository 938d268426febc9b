"""
Shared fixtures for unit tests.

This module provides common fixtures used across multiple test modules:
- Fixed clock
- Purchase and ledger entry factories (transient ORM objects)
"""

from datetime import UTC, datetime, timedelta
from decimal import Decimal

import pytest

from app.models.enums import LedgerEntryType, PurchaseStatus
from app.models.purchase import Purchase
from app.models.wallet_ledger import WalletLedgerEntry


NOW = datetime(2025, 6, 15, 12, 0, tzinfo=UTC)


@pytest.fixture
def now():
    """Fixed current time used by patched clocks."""
    return NOW


@pytest.fixture
def make_purchase():
    """
    Factory for transient Purchase objects.

    Defaults: user 100, VIP 3 snapshot (1000 Bs, 44 Bs/day), PENDING.
    """

    def _make(
        id: int = 1,
        user_id: int = 100,
        status: PurchaseStatus = PurchaseStatus.PENDING,
        investment_bs: Decimal = Decimal("1000"),
        daily_profit_bs: Decimal = Decimal("44"),
        activated_at: datetime | None = None,
        last_profit_at: datetime | None = None,
    ) -> Purchase:
        if status == PurchaseStatus.ACTIVE and activated_at is None:
            activated_at = NOW - timedelta(days=2)
            last_profit_at = last_profit_at or activated_at
        return Purchase(
            id=id,
            user_id=user_id,
            vip_package_id=3,
            investment_bs=investment_bs,
            daily_profit_bs=daily_profit_bs,
            status=status.value,
            created_at=NOW - timedelta(days=3),
            activated_at=activated_at,
            last_profit_at=last_profit_at,
        )

    return _make


@pytest.fixture
def make_entry():
    """Factory for transient WalletLedgerEntry objects."""
    counter = {"id": 0}

    def _make(
        entry_type: LedgerEntryType,
        amount: str,
        created_at: datetime = NOW,
        user_id: int = 100,
        **fields,
    ) -> WalletLedgerEntry:
        counter["id"] += 1
        return WalletLedgerEntry(
            id=counter["id"],
            user_id=user_id,
            entry_type=entry_type.value,
            amount_bs=Decimal(amount),
            description=fields.pop("description", entry_type.value),
            created_at=created_at,
            **fields,
        )

    return _make
