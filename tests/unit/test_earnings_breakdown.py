"""
Unit tests for earnings breakdown.

Tests cover:
- Category grouping and distinct profit days
- Categories reconcile with the ledger sum
- camelCase serialization of the response
- Ledger entry tagged union
"""

from datetime import timedelta
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from app.models.enums import AdjustmentKind, LedgerEntryType
from app.schemas.earnings import EarningsBreakdownResponse
from app.schemas.ledger import (
    ManualAdjustmentEntry,
    ReferralBonusEntry,
    ledger_entry_from_model,
)
from app.services.earnings.aggregator import EarningsAggregator
from app.services.earnings.breakdown import build_breakdown
from app.utils.exceptions import NotFoundError


@pytest.fixture
def entries(make_entry, now):
    """A user with every kind of ledger entry."""
    return [
        make_entry(LedgerEntryType.DAILY_PROFIT, "44", created_at=now - timedelta(days=1)),
        make_entry(LedgerEntryType.DAILY_PROFIT, "44", created_at=now),
        make_entry(LedgerEntryType.DAILY_PROFIT, "8", created_at=now),
        make_entry(LedgerEntryType.REFERRAL_BONUS, "100", referral_level=1),
        make_entry(LedgerEntryType.REFERRAL_BONUS, "30", referral_level=2),
        make_entry(LedgerEntryType.REFERRAL_BONUS, "15", referral_level=1),
        make_entry(
            LedgerEntryType.MANUAL_ADJUSTMENT, "20",
            adjustment_kind=AdjustmentKind.ABONADO.value,
            description="Premio",
        ),
        make_entry(
            LedgerEntryType.MANUAL_ADJUSTMENT, "-5",
            adjustment_kind=AdjustmentKind.DESCUENTO.value,
            description="Corrección",
        ),
        make_entry(LedgerEntryType.TASK_BONUS, "10"),
        make_entry(LedgerEntryType.WITHDRAWAL, "-50", withdrawal_id=3),
    ]


class TestBuildBreakdown:
    """Test grouping of ledger entries."""

    def test_categories(self, entries):
        breakdown = build_breakdown(entries, Decimal("216"))

        assert breakdown.daily_profit.total == Decimal("96")
        assert breakdown.daily_profit.days == 2
        assert [(r.level, r.amount) for r in breakdown.referral_bonus.by_level] == [
            (1, Decimal("115")),
            (2, Decimal("30")),
        ]
        assert breakdown.referral_bonus.total == Decimal("145")
        assert breakdown.adjustments.total == Decimal("15")
        assert breakdown.adjustments.items[1].kind == AdjustmentKind.DESCUENTO
        assert breakdown.adjustments.items[1].amount == Decimal("-5")
        assert breakdown.task_bonus == Decimal("10")
        assert breakdown.withdrawals == Decimal("-50")

    def test_categories_reconcile_with_total(self, entries):
        total = sum((e.amount_bs for e in entries), Decimal("0"))

        breakdown = build_breakdown(entries, total)

        assert breakdown.categories_total == breakdown.total_earnings

    def test_empty_ledger(self):
        breakdown = build_breakdown([], Decimal("0"))

        assert breakdown.daily_profit.days == 0
        assert breakdown.referral_bonus.by_level == []
        assert breakdown.categories_total == 0


class TestEarningsResponse:
    """Test dashboard payload shape."""

    def test_camel_case_keys(self, entries):
        breakdown = build_breakdown(entries, Decimal("216"))

        payload = EarningsBreakdownResponse.from_breakdown(breakdown).model_dump(
            mode="json", by_alias=True
        )

        assert payload["dailyProfit"] == {"total": 96.0, "days": 2}
        assert payload["referralBonus"]["byLevel"][0] == {"level": 1, "amount": 115.0}
        assert payload["adjustments"]["items"][0]["type"] == "ABONADO"
        assert payload["totalEarnings"] == 216.0


class TestLedgerEntrySchema:
    """Test tagged union on type."""

    def test_referral_variant(self, make_entry):
        entry = make_entry(
            LedgerEntryType.REFERRAL_BONUS, "100",
            referral_level=1, source_user_id=7, source_purchase_id=9,
        )

        schema = ledger_entry_from_model(entry)

        assert isinstance(schema, ReferralBonusEntry)
        assert schema.level == 1
        assert schema.source_purchase_id == 9

    def test_adjustment_variant(self, make_entry):
        entry = make_entry(
            LedgerEntryType.MANUAL_ADJUSTMENT, "-5",
            adjustment_kind=AdjustmentKind.DESCUENTO.value,
        )

        schema = ledger_entry_from_model(entry)

        assert isinstance(schema, ManualAdjustmentEntry)
        assert schema.kind == AdjustmentKind.DESCUENTO
        assert schema.model_dump(mode="json")["type"] == "MANUAL_ADJUSTMENT"


class TestEarningsAggregator:
    """Test aggregator reads."""

    @pytest.mark.asyncio
    async def test_breakdown_uses_sql_total(self, mock_session, entries):
        aggregator = EarningsAggregator(mock_session)
        aggregator.user_repo = AsyncMock()
        aggregator.user_repo.exists.return_value = True
        aggregator.ledger_repo = AsyncMock()
        aggregator.ledger_repo.get_by_user.return_value = entries
        aggregator.ledger_repo.get_balance.return_value = Decimal("216")

        breakdown = await aggregator.get_breakdown(100)

        assert breakdown.total_earnings == Decimal("216")
        assert breakdown.categories_total == Decimal("216")

    @pytest.mark.asyncio
    async def test_unknown_user(self, mock_session):
        aggregator = EarningsAggregator(mock_session)
        aggregator.user_repo = AsyncMock()
        aggregator.user_repo.exists.return_value = False

        with pytest.raises(NotFoundError):
            await aggregator.get_breakdown(1)
