"""
Unit tests for referral bonus calculation and payout.

Tests cover:
- Bonus math and rounding
- Upline payout per configured level
- Levels without a rule are skipped
- Upline SQL is a bounded recursive query, also run on a real database
"""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from sqlalchemy.dialects import postgresql
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.models import Base, User
from app.models.enums import LedgerEntryType, PurchaseStatus
from app.services.referral.bonus_calculator import calculate_referral_bonus
from app.services.referral.bonus_rules_service import BonusRulesService
from app.services.referral.payout_processor import ReferralPayoutProcessor
from app.services.referral.upline_resolver import UplineMember, UplineResolver
from app.utils.exceptions import InvalidAmountError, NotFoundError


class TestCalculateReferralBonus:
    """Test referral bonus math."""

    def test_level_one_ten_percent(self):
        """1000 Bs at 10% pays 100 Bs."""
        assert calculate_referral_bonus(
            Decimal("1000"), Decimal("10")
        ) == Decimal("100.00")

    def test_rounds_half_up_to_cents(self):
        """Fractions of a cent round half up."""
        # 333 * 1.5 / 100 = 4.995
        assert calculate_referral_bonus(
            Decimal("333"), Decimal("1.5")
        ) == Decimal("5.00")

    def test_zero_percentage(self):
        assert calculate_referral_bonus(Decimal("1000"), Decimal("0")) == 0

    def test_zero_investment(self):
        assert calculate_referral_bonus(Decimal("0"), Decimal("10")) == 0


@pytest.fixture
def processor(mock_session):
    """Payout processor with mocked repositories."""
    proc = ReferralPayoutProcessor(mock_session)
    proc.rule_repo = AsyncMock()
    proc.resolver = AsyncMock()
    proc.ledger_repo = AsyncMock()
    return proc


class TestReferralPayoutProcessor:
    """Test REFERRAL_BONUS entries written for an activation."""

    @pytest.mark.asyncio
    async def test_pays_each_level(self, processor, make_purchase):
        """Every ancestor with a rule is credited from the snapshot."""
        processor.rule_repo.get_rates.return_value = {
            1: Decimal("10"),
            2: Decimal("3"),
        }
        processor.resolver.resolve_upline.return_value = [
            UplineMember(user_id=10, level=1),
            UplineMember(user_id=20, level=2),
        ]
        purchase = make_purchase(id=7, status=PurchaseStatus.ACTIVE)

        result = await processor.pay_upline(purchase)

        processor.resolver.resolve_upline.assert_awaited_once_with(100, 2)
        assert result.total == Decimal("130.00")
        assert [(p.user_id, p.level, p.amount) for p in result.payouts] == [
            (10, 1, Decimal("100.00")),
            (20, 2, Decimal("30.00")),
        ]

        first_call = processor.ledger_repo.append.await_args_list[0].kwargs
        assert first_call["user_id"] == 10
        assert first_call["entry_type"] == LedgerEntryType.REFERRAL_BONUS
        assert first_call["amount_bs"] == Decimal("100.00")
        assert first_call["referral_level"] == 1
        assert first_call["source_purchase_id"] == 7
        assert first_call["source_user_id"] == 100

    @pytest.mark.asyncio
    async def test_skips_level_without_rule(self, processor, make_purchase):
        """A gap in the rules table skips that level only."""
        processor.rule_repo.get_rates.return_value = {
            1: Decimal("10"),
            3: Decimal("1"),
        }
        processor.resolver.resolve_upline.return_value = [
            UplineMember(user_id=10, level=1),
            UplineMember(user_id=20, level=2),
            UplineMember(user_id=30, level=3),
        ]

        result = await processor.pay_upline(make_purchase())

        paid_to = [p.user_id for p in result.payouts]
        assert paid_to == [10, 30]
        assert processor.ledger_repo.append.await_count == 2

    @pytest.mark.asyncio
    async def test_short_chain_pays_available_levels(
        self, processor, make_purchase
    ):
        """A user with only a direct sponsor pays one bonus."""
        processor.rule_repo.get_rates.return_value = {
            1: Decimal("10"),
            2: Decimal("3"),
            3: Decimal("1"),
        }
        processor.resolver.resolve_upline.return_value = [
            UplineMember(user_id=10, level=1),
        ]

        result = await processor.pay_upline(make_purchase())

        assert result.total == Decimal("100.00")

    @pytest.mark.asyncio
    async def test_no_rules_pays_nothing(self, processor, make_purchase):
        processor.rule_repo.get_rates.return_value = {}

        result = await processor.pay_upline(make_purchase())

        assert result.total == 0
        processor.resolver.resolve_upline.assert_not_awaited()
        processor.ledger_repo.append.assert_not_awaited()


class TestUplineResolver:
    """Test sponsor chain resolution."""

    @pytest.fixture
    def resolver(self, mock_session):
        res = UplineResolver(mock_session)
        res.user_repo = AsyncMock()
        res.user_repo.exists.return_value = True
        return res

    @pytest.mark.asyncio
    async def test_unknown_user(self, resolver):
        resolver.user_repo.exists.return_value = False

        with pytest.raises(NotFoundError):
            await resolver.resolve_upline(999, 3)

    @pytest.mark.asyncio
    async def test_non_positive_max_level(self, resolver, mock_session):
        assert await resolver.resolve_upline(1, 0) == []
        mock_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_maps_rows_in_level_order(self, resolver, mock_session):
        result = MagicMock()
        result.all.return_value = [
            MagicMock(user_id=10, level=1),
            MagicMock(user_id=20, level=2),
        ]
        mock_session.execute.return_value = result

        upline = await resolver.resolve_upline(1, 2)

        assert upline == [
            UplineMember(user_id=10, level=1),
            UplineMember(user_id=20, level=2),
        ]

    @pytest.mark.asyncio
    async def test_query_is_bounded_recursive_cte(self, resolver, mock_session):
        """The chain is walked in one recursive query capped by max_level."""
        mock_session.execute.return_value = MagicMock(
            all=MagicMock(return_value=[])
        )

        await resolver.resolve_upline(1, 2)

        stmt = mock_session.execute.await_args.args[0]
        sql = str(stmt.compile(dialect=postgresql.dialect()))
        assert "WITH RECURSIVE upline" in sql
        assert "upline.level <" in sql


class TestBonusRulesService:
    """Test admin edits of bonus rules."""

    @pytest.fixture
    def rules(self, mock_session):
        svc = BonusRulesService(mock_session)
        svc.rule_repo = AsyncMock()
        return svc

    @pytest.mark.asyncio
    async def test_upsert(self, rules, mock_session):
        await rules.upsert_rule(2, Decimal("3.5"))

        rules.rule_repo.upsert.assert_awaited_once_with(2, Decimal("3.5"))
        mock_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "level,percentage",
        [(0, Decimal("5")), (1, Decimal("-1")), (1, Decimal("100.01"))],
    )
    async def test_upsert_out_of_range(self, rules, level, percentage):
        with pytest.raises(InvalidAmountError):
            await rules.upsert_rule(level, percentage)
        rules.rule_repo.upsert.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_missing(self, rules):
        rules.rule_repo.delete_by_level.return_value = False

        with pytest.raises(NotFoundError):
            await rules.delete_rule(4)

    @pytest.mark.asyncio
    async def test_max_level(self, rules):
        rules.rule_repo.get_max_level.return_value = 3

        assert await rules.max_level() == 3


@pytest_asyncio.fixture
async def sponsor_chain():
    """
    In-memory database with the chain 4 -> 3 -> 2 -> 1.

    User 1 is a root; user 5 is sponsored directly by the root.
    """
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(
            lambda sync_conn: Base.metadata.create_all(
                sync_conn, tables=[User.__table__]
            )
        )

    session_maker = async_sessionmaker(engine, expire_on_commit=False)
    async with session_maker() as session:
        for user_id, sponsor_id in [(1, None), (2, 1), (3, 2), (4, 3), (5, 1)]:
            session.add(
                User(id=user_id, username=f"user{user_id}", sponsor_id=sponsor_id)
            )
            await session.flush()
        await session.commit()

        yield session

    await engine.dispose()


class TestUplineResolverQuery:
    """Run the recursive upline query against a real database."""

    @pytest.mark.asyncio
    async def test_depth_three_chain_capped_at_two_levels(self, sponsor_chain):
        upline = await UplineResolver(sponsor_chain).resolve_upline(4, 2)

        assert upline == [
            UplineMember(user_id=3, level=1),
            UplineMember(user_id=2, level=2),
        ]

    @pytest.mark.asyncio
    async def test_root_user_has_no_upline(self, sponsor_chain):
        assert await UplineResolver(sponsor_chain).resolve_upline(1, 3) == []

    @pytest.mark.asyncio
    async def test_chain_shorter_than_max_level(self, sponsor_chain):
        upline = await UplineResolver(sponsor_chain).resolve_upline(5, 3)

        assert upline == [UplineMember(user_id=1, level=1)]

    @pytest.mark.asyncio
    async def test_full_chain(self, sponsor_chain):
        upline = await UplineResolver(sponsor_chain).resolve_upline(4, 5)

        assert [m.user_id for m in upline] == [3, 2, 1]
        assert [m.level for m in upline] == [1, 2, 3]
