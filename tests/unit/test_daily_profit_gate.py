"""
Unit tests for the daily profit activation gate.

Tests cover:
- Claim anchor and rolling window rules
- Successful claim credits every ACTIVE purchase
- Second claim inside the window is locked
- Concurrent claims for one user credit exactly once
"""

import asyncio
from datetime import timedelta
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from app.models.enums import LedgerEntryType, PurchaseStatus
from app.services.daily_profit.eligibility import (
    claim_anchor,
    is_eligible,
    next_eligible_at,
)
from app.services.daily_profit.gate import ActivationResult, DailyProfitGate
from app.utils.exceptions import LockedError, NoActivePurchasesError, NotFoundError


WINDOW = 24


class TestEligibility:
    """Test rolling window rules."""

    def test_fresh_activation_is_not_a_claim(self, make_purchase):
        """last_profit_at == activated_at means never claimed."""
        purchase = make_purchase(status=PurchaseStatus.ACTIVE)
        assert claim_anchor([purchase]) is None

    def test_anchor_is_latest_claim(self, make_purchase, now):
        older = make_purchase(
            id=1, status=PurchaseStatus.ACTIVE,
            last_profit_at=now - timedelta(hours=30),
        )
        newer = make_purchase(
            id=2, status=PurchaseStatus.ACTIVE,
            last_profit_at=now - timedelta(hours=5),
        )
        assert claim_anchor([older, newer]) == now - timedelta(hours=5)

    def test_never_claimed_is_eligible(self, now):
        assert is_eligible(None, now, WINDOW) is True
        assert next_eligible_at(None, WINDOW) is None

    def test_inside_window_locked(self, now):
        anchor = now - timedelta(hours=23, minutes=59)
        assert is_eligible(anchor, now, WINDOW) is False

    def test_window_boundary_is_eligible(self, now):
        anchor = now - timedelta(hours=WINDOW)
        assert is_eligible(anchor, now, WINDOW) is True


@pytest.fixture
def gate(mock_session):
    g = DailyProfitGate(mock_session, window_hours=WINDOW)
    g.user_repo = AsyncMock()
    g.user_repo.lock_user.return_value = MagicMock(id=100)
    g.user_repo.exists.return_value = True
    g.purchase_repo = AsyncMock()
    g.purchase_repo.compare_and_set_last_profit.return_value = True
    g.ledger_repo = AsyncMock()
    return g


class TestDailyProfitGate:
    """Test claims through the gate."""

    @pytest.mark.asyncio
    async def test_activate_credits_each_purchase(self, gate, make_purchase, now):
        gate.purchase_repo.get_active_by_user.return_value = [
            make_purchase(id=1, status=PurchaseStatus.ACTIVE),
            make_purchase(
                id=2, status=PurchaseStatus.ACTIVE,
                daily_profit_bs=Decimal("8"),
            ),
        ]

        with patch("app.services.daily_profit.gate.utc_now", return_value=now):
            result = await gate.activate(100)

        assert result.total_credited == Decimal("52")
        assert result.purchases_credited == 2
        assert result.next_eligible_at == now + timedelta(hours=WINDOW)
        assert gate.ledger_repo.append.await_count == 2
        kwargs = gate.ledger_repo.append.await_args_list[0].kwargs
        assert kwargs["entry_type"] == LedgerEntryType.DAILY_PROFIT
        assert kwargs["source_purchase_id"] == 1
        gate.purchase_repo.get_active_by_user.assert_awaited_once_with(
            100, for_update=True
        )

    @pytest.mark.asyncio
    async def test_claim_inside_window_locked(
        self, gate, mock_session, make_purchase, now
    ):
        claimed_at = now - timedelta(hours=3)
        gate.purchase_repo.get_active_by_user.return_value = [
            make_purchase(status=PurchaseStatus.ACTIVE, last_profit_at=claimed_at),
        ]

        with patch("app.services.daily_profit.gate.utc_now", return_value=now):
            with pytest.raises(LockedError) as exc_info:
                await gate.activate(100)

        assert exc_info.value.next_eligible_at == claimed_at + timedelta(hours=24)
        assert exc_info.value.http_status == 423
        assert "unlocks_at" in exc_info.value.to_payload()
        gate.ledger_repo.append.assert_not_awaited()
        mock_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_no_active_purchases(self, gate):
        gate.purchase_repo.get_active_by_user.return_value = []

        with pytest.raises(NoActivePurchasesError):
            await gate.activate(100)

    @pytest.mark.asyncio
    async def test_unknown_user(self, gate):
        gate.user_repo.lock_user.return_value = None

        with pytest.raises(NotFoundError):
            await gate.activate(100)

    @pytest.mark.asyncio
    async def test_stamp_moved_concurrently(
        self, gate, mock_session, make_purchase, now
    ):
        """A lost conditional update aborts the claim with the winner's unlock time."""
        gate.purchase_repo.get_active_by_user.return_value = [
            make_purchase(status=PurchaseStatus.ACTIVE),
        ]
        gate.purchase_repo.compare_and_set_last_profit.return_value = False
        winner_stamp = now - timedelta(minutes=5)
        gate.purchase_repo.get_for_update.return_value = make_purchase(
            status=PurchaseStatus.ACTIVE, last_profit_at=winner_stamp
        )

        with patch("app.services.daily_profit.gate.utc_now", return_value=now):
            with pytest.raises(LockedError) as exc_info:
                await gate.activate(100)

        assert exc_info.value.next_eligible_at == winner_stamp + timedelta(
            hours=WINDOW
        )
        gate.purchase_repo.get_for_update.assert_awaited_once_with(1)
        gate.ledger_repo.append.assert_not_awaited()
        mock_session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_can_activate_status(self, gate, make_purchase, now):
        gate.purchase_repo.get_active_by_user.return_value = [
            make_purchase(
                status=PurchaseStatus.ACTIVE,
                last_profit_at=now - timedelta(hours=2),
            ),
        ]

        with patch("app.services.daily_profit.gate.utc_now", return_value=now):
            status = await gate.can_activate(100)

        assert status.eligible is False
        assert status.next_eligible_at == now + timedelta(hours=22)
        assert status.active_purchases == 1
        assert status.pending_total == Decimal("44")

    @pytest.mark.asyncio
    async def test_can_activate_without_purchases(self, gate):
        gate.purchase_repo.get_active_by_user.return_value = []

        status = await gate.can_activate(100)

        assert status.eligible is False
        assert status.next_eligible_at is None


class FakeStore:
    """In-memory rows with per-user row locks."""

    def __init__(self, purchases):
        self.purchases = purchases
        self.ledger = []
        self.user_locks: dict[int, asyncio.Lock] = {}

    def lock_for(self, user_id: int) -> asyncio.Lock:
        return self.user_locks.setdefault(user_id, asyncio.Lock())


class FakeSession:
    """Releases row locks when the transaction ends."""

    def __init__(self, store: FakeStore):
        self.store = store
        self.held: list[asyncio.Lock] = []

    async def _release(self):
        while self.held:
            self.held.pop().release()

    async def commit(self):
        await self._release()

    async def rollback(self):
        await self._release()

    async def flush(self):
        pass


def _wire_fake(gate: DailyProfitGate, session: FakeSession) -> None:
    store = session.store

    async def lock_user(user_id):
        lock = store.lock_for(user_id)
        await lock.acquire()
        session.held.append(lock)
        return SimpleNamespace(id=user_id)

    async def get_active_by_user(user_id, for_update=False):
        await asyncio.sleep(0)
        return [p for p in store.purchases if p.user_id == user_id]

    async def compare_and_set_last_profit(purchase_id, expected, new_value):
        await asyncio.sleep(0)
        purchase = next(p for p in store.purchases if p.id == purchase_id)
        if purchase.last_profit_at != expected:
            return False
        purchase.last_profit_at = new_value
        return True

    async def append(**entry):
        store.ledger.append(entry)

    gate.user_repo = SimpleNamespace(lock_user=lock_user)
    gate.purchase_repo = SimpleNamespace(
        get_active_by_user=get_active_by_user,
        compare_and_set_last_profit=compare_and_set_last_profit,
    )
    gate.ledger_repo = SimpleNamespace(append=append)


class TestConcurrentClaims:
    """Two simultaneous claims for one user."""

    @pytest.mark.asyncio
    async def test_exactly_one_claim_succeeds(self, make_purchase, now):
        store = FakeStore([
            make_purchase(id=1, status=PurchaseStatus.ACTIVE),
            make_purchase(
                id=2, status=PurchaseStatus.ACTIVE,
                daily_profit_bs=Decimal("8"),
            ),
        ])
        gates = []
        for _ in range(2):
            session = FakeSession(store)
            gate = DailyProfitGate(session, window_hours=WINDOW)
            _wire_fake(gate, session)
            gates.append(gate)

        with patch("app.services.daily_profit.gate.utc_now", return_value=now):
            results = await asyncio.gather(
                *(gate.activate(100) for gate in gates),
                return_exceptions=True,
            )

        successes = [r for r in results if isinstance(r, ActivationResult)]
        locked = [r for r in results if isinstance(r, LockedError)]
        assert len(successes) == 1
        assert len(locked) == 1
        assert len(store.ledger) == 2
        assert sum(e["amount_bs"] for e in store.ledger) == Decimal("52")
        assert not any(lock.locked() for lock in store.user_locks.values())
