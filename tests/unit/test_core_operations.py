"""
Unit tests for CoreOperations response mapping.

Services are patched; these tests only check what the HTTP layer gets.
"""

import os
import subprocess
import sys
from datetime import timedelta
from decimal import Decimal
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pydantic import ValidationError

from app.models.enums import AdjustmentKind, PurchaseStatus, TaskType
from app.models.vip_package import VipPackage
from app.schemas.operations import (
    AdjustBalanceRequest,
    CreatePurchaseRequest,
    ProcessWithdrawalRequest,
    SubmitTaskRequest,
    WithdrawalCreateRequest,
)
from app.services.core_operations import CoreOperations
from app.services.daily_profit.gate import ActivationResult, GateStatus
from app.services.purchase.activation import ApprovalResult


@pytest.fixture
def operations():
    session_maker = MagicMock()
    session_maker.return_value.__aenter__.return_value = AsyncMock()
    return CoreOperations(session_maker)


class TestCoreOperations:
    """Test schema mapping of core operations."""

    @pytest.mark.asyncio
    async def test_approve_purchase(self, operations):
        with patch(
            "app.services.core_operations.PurchaseActivationService"
        ) as service_cls:
            service_cls.return_value.approve = AsyncMock(
                return_value=ApprovalResult(
                    message="Compra activada y bonos pagados",
                    task_bonus_credited=Decimal("10.00"),
                )
            )

            response = await operations.approve_purchase(1)

        assert response.message == "Compra activada y bonos pagados"
        assert response.model_dump(mode="json")["task_bonus_credited"] == 10.0

    @pytest.mark.asyncio
    async def test_activate_daily_profit(self, operations, now):
        unlocks_at = now + timedelta(hours=24)
        with patch("app.services.core_operations.DailyProfitGate") as gate_cls:
            gate_cls.return_value.activate = AsyncMock(
                return_value=ActivationResult(
                    total_credited=Decimal("52"),
                    next_eligible_at=unlocks_at,
                    purchases_credited=2,
                )
            )

            response = await operations.activate_daily_profit(100)

        assert response.total_profit == Decimal("52")
        assert response.unlocks_at == unlocks_at
        assert "+Bs 52.00" in response.message

    @pytest.mark.asyncio
    async def test_activation_status_hides_unlock_when_eligible(self, operations):
        with patch("app.services.core_operations.DailyProfitGate") as gate_cls:
            gate_cls.return_value.can_activate = AsyncMock(
                return_value=GateStatus(
                    eligible=True,
                    next_eligible_at=None,
                    active_purchases=1,
                    pending_total=Decimal("44"),
                )
            )

            response = await operations.get_activation_status(100)

        assert response.can_activate is True
        assert response.unlocks_at is None

    @pytest.mark.asyncio
    async def test_pending_purchases_include_package(self, operations, make_purchase):
        purchase = make_purchase(id=9)
        purchase.vip_package = VipPackage(
            level=3,
            name="VIP 3",
            investment_bs=Decimal("1000"),
            daily_profit_bs=Decimal("44"),
        )
        with patch(
            "app.services.core_operations.PurchaseActivationService"
        ) as service_cls:
            service_cls.return_value.list_pending = AsyncMock(
                return_value=[purchase]
            )

            response = await operations.list_pending_purchases()

        assert response[0].id == 9
        assert response[0].status == PurchaseStatus.PENDING
        assert response[0].vip_package.name == "VIP 3"


class TestRequestSchemas:
    """Test validation of incoming payloads."""

    def test_adjustment_amount_must_be_positive(self):
        with pytest.raises(ValidationError):
            AdjustBalanceRequest(
                user_id=1, kind=AdjustmentKind.ABONADO, amount=Decimal("0")
            )

    def test_task_type_parsed(self):
        request = SubmitTaskRequest(
            user_id=1, task_type="LIKE", screenshot_url="https://cdn.example/s.png"
        )
        assert request.task_type == TaskType.LIKE

    def test_process_withdrawal_action(self):
        with pytest.raises(ValidationError):
            ProcessWithdrawalRequest(withdrawal_id=1, action="cancel")

    def test_purchase_level_positive(self):
        with pytest.raises(ValidationError):
            CreatePurchaseRequest(user_id=1, package_level=0)

    def test_withdrawal_payout_details_required(self):
        with pytest.raises(ValidationError):
            WithdrawalCreateRequest(user_id=1, amount=Decimal("60"), payout_details="")


class TestPackageImports:
    """Schemas and services load in either order."""

    @pytest.mark.parametrize(
        "first,second",
        [("app.schemas", "app.services"), ("app.services", "app.schemas")],
    )
    def test_fresh_interpreter_import_order(self, first, second):
        project_root = Path(__file__).resolve().parents[2]
        completed = subprocess.run(
            [sys.executable, "-c", f"import {first}; import {second}"],
            cwd=project_root,
            env={**os.environ, "PYTHONPATH": str(project_root)},
            capture_output=True,
            text=True,
        )
        assert completed.returncode == 0, completed.stderr
