"""
Domain exceptions.

Every error the earnings core raises to its callers derives from
DomainError and carries the HTTP status the boundary should answer with.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any


class DomainError(Exception):
    """Base class for errors surfaced to callers."""

    http_status: int = 400
    code: str = "domain_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_payload(self) -> dict[str, Any]:
        """Serializable error body for the HTTP layer."""
        return {"error": self.message, "code": self.code}


class NotFoundError(DomainError):
    """Purchase, user, package or withdrawal does not exist."""

    http_status = 404
    code = "not_found"

    def __init__(self, entity: str, entity_id: int | str) -> None:
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class LockedError(DomainError):
    """Daily profit already claimed for the current window."""

    http_status = 423
    code = "locked"

    def __init__(self, next_eligible_at: datetime | None) -> None:
        super().__init__("Ya activaste tus ganancias hoy")
        self.next_eligible_at = next_eligible_at

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        payload["unlocks_at"] = (
            self.next_eligible_at.isoformat() if self.next_eligible_at else None
        )
        return payload


class TransactionFailedError(DomainError):
    """Store failure during a multi-step write; nothing was committed."""

    http_status = 500
    code = "transaction_failed"

    def __init__(self, operation: str, cause: Exception | None = None) -> None:
        super().__init__(f"Transaction failed during {operation}")
        self.operation = operation
        self.cause = cause


class InvalidTransitionError(DomainError):
    """State machine transition not allowed from the current state."""

    http_status = 409
    code = "invalid_transition"

    def __init__(self, entity: str, current: str, target: str) -> None:
        super().__init__(f"{entity} cannot move from {current} to {target}")
        self.current = current
        self.target = target


class NoActivePurchasesError(DomainError):
    """User has nothing that accrues daily profit."""

    http_status = 422
    code = "no_active_purchases"

    def __init__(self, user_id: int) -> None:
        super().__init__(f"User {user_id} has no active VIP package")
        self.user_id = user_id


class PackageDisabledError(DomainError):
    """VIP package exists but is not on sale."""

    http_status = 422
    code = "package_disabled"

    def __init__(self, level: int) -> None:
        super().__init__(f"VIP level {level} is not available")
        self.level = level


class TaskRejectedError(DomainError):
    """Task submission breaks the task rules."""

    http_status = 422
    code = "task_rejected"


class InvalidAmountError(DomainError):
    """Amount is not positive or below the configured minimum."""

    http_status = 422
    code = "invalid_amount"


class InsufficientBalanceError(DomainError):
    """Ledger balance does not cover the requested debit."""

    http_status = 422
    code = "insufficient_balance"

    def __init__(self, balance: Decimal, requested: Decimal) -> None:
        super().__init__(
            f"Insufficient balance: available {balance}, requested {requested}"
        )
        self.balance = balance
        self.requested = requested


class WithdrawalPendingError(DomainError):
    """User already has a withdrawal waiting for review."""

    http_status = 409
    code = "withdrawal_pending"

    def __init__(self, user_id: int) -> None:
        super().__init__(f"User {user_id} already has a pending withdrawal")
        self.user_id = user_id
