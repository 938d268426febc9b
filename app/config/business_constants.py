"""
Business logic constants for SmartHogar.

Central location for business rules shared by services, scripts and
tests. Values here are seeds and fixed rules; tunable amounts live in
settings.
"""

from decimal import Decimal

from app.models.enums import TaskType


# Order in which pre-VIP tasks must be completed
TASK_ORDER: tuple[TaskType, ...] = (
    TaskType.FOLLOW,
    TaskType.LIKE,
    TaskType.COMMENT,
    TaskType.SHARE,
)

# Default referral bonus rules: level -> percentage of investment
DEFAULT_REFERRAL_RULES: dict[int, Decimal] = {
    1: Decimal("10.00"),
    2: Decimal("3.00"),
    3: Decimal("1.00"),
}

# Default VIP catalog: level -> (name, investment Bs, daily profit Bs)
DEFAULT_VIP_PACKAGES: dict[int, tuple[str, Decimal, Decimal]] = {
    1: ("VIP 1", Decimal("200"), Decimal("8")),
    2: ("VIP 2", Decimal("500"), Decimal("21")),
    3: ("VIP 3", Decimal("1000"), Decimal("44")),
    4: ("VIP 4", Decimal("2500"), Decimal("115")),
    5: ("VIP 5", Decimal("5000"), Decimal("240")),
}

# Ledger amounts are stored with 8 decimals, displayed with 2
MONEY_QUANTUM = Decimal("0.01")
