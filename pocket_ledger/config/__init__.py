"""Configuration package."""

from pocket_ledger.config.settings import (
    LedgerSettings,
    get_settings,
)

__all__ = [
    "LedgerSettings",
    "get_settings",
]
