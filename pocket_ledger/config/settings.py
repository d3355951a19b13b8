"""
Configuration Management for Pocket Ledger

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Defaults reproduce the behaviour of the mobile app (5000 monthly budget,
weekly budget = monthly / 4), so an empty environment is a valid one.
"""

from decimal import Decimal
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LedgerSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from POCKET_LEDGER_* environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="POCKET_LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage
    data_path: Path = Field(
        default=Path.home() / ".pocket_ledger" / "store.json",
        description="JSON file backing the key-value store",
    )

    # Budget
    default_monthly_budget: Decimal = Field(
        default=Decimal("5000"),
        gt=0,
        description="Budget used when none was ever saved (or the saved one is 0)",
    )
    weekly_budget_divisor: int = Field(
        default=4,
        gt=0,
        description="Weekly budget = monthly budget / this value",
    )

    # Calendar
    first_weekday: int = Field(
        default=0,
        ge=0,
        le=6,
        description="First day of a week (0=Monday ... 6=Sunday)",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Minimum log level",
    )
    log_json: bool = Field(
        default=True,
        description="Render logs as JSON (False = console renderer)",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Only accept the standard logging level names."""
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache()
def get_settings() -> LedgerSettings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return LedgerSettings()
