"""
Application settings.

Loads configuration from environment variables using pydantic-settings.
"""

from decimal import Decimal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str
    database_echo: bool = False
    database_pool_size: int = Field(default=5, ge=1)

    # Application
    environment: str = "production"
    debug: bool = False
    log_level: str = "INFO"
    log_file: str | None = Field(
        default=None,
        description="Optional rotating log file path (e.g. logs/smarthogar.log)",
    )

    # Daily profit gate
    daily_profit_window_hours: int = Field(
        default=24,
        ge=1,
        le=168,
        description="Hours between two daily profit activations",
    )

    # Pre-VIP task bonus
    task_bonus_per_task: Decimal = Field(
        default=Decimal("2.50"),
        gt=0,
        description="Bonus accrued for each completed task (Bs)",
    )
    task_bonus_max: Decimal = Field(
        default=Decimal("10.00"),
        gt=0,
        description="Maximum task bonus per user (Bs)",
    )

    # Withdrawals
    min_withdrawal_amount: Decimal = Field(
        default=Decimal("50"),
        gt=0,
        description="Minimum withdrawal amount (Bs)",
    )

    currency_label: str = "Bs"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("database_url")
    @classmethod
    def use_async_driver(cls, value: str) -> str:
        """Accept plain postgres URLs and switch them to asyncpg."""
        if value.startswith("postgres://"):
            return "postgresql+asyncpg://" + value[len("postgres://"):]
        if value.startswith("postgresql://"):
            return "postgresql+asyncpg://" + value[len("postgresql://"):]
        return value

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        """Log level names are upper case for loguru."""
        return value.strip().upper()


settings = Settings()
