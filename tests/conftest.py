"""
Shared fixtures.

Every test builds its own store around in-memory storage and explicit
settings, so nothing touches the user's real data file or environment.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

import pytest

from pocket_ledger.aggregation import ExpenseAggregator
from pocket_ledger.config import LedgerSettings
from pocket_ledger.models import Expense
from pocket_ledger.orchestrator import LedgerApp
from pocket_ledger.services.storage import InMemoryStorage, StorageError
from pocket_ledger.statistics import StatisticsEngine
from pocket_ledger.store import ExpenseStore


class FlakyStorage(InMemoryStorage):
    """In-memory storage that can be told to fail, and records every write."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        super().__init__(initial)
        self.fail_writes = False
        self.fail_reads = False
        self.writes: list[str] = []

    def get(self, key: str) -> Optional[str]:
        if self.fail_reads:
            raise StorageError("storage unavailable")
        return super().get(key)

    def set(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise StorageError("disk full")
        self.writes.append(key)
        super().set(key, value)


def _make_expense(
    amount,
    when: datetime,
    description: str = "午饭",
    category: str = "food",
) -> Expense:
    return Expense(
        amount=Decimal(str(amount)),
        description=description,
        category=category,
        date=when,
    )


@pytest.fixture
def make_expense():
    """Factory for expenses: make_expense(amount, when, description, category)."""
    return _make_expense


@pytest.fixture
def settings(tmp_path) -> LedgerSettings:
    return LedgerSettings(
        _env_file=None,
        data_path=tmp_path / "store.json",
        log_json=False,
    )


@pytest.fixture
def storage() -> FlakyStorage:
    return FlakyStorage()


@pytest.fixture
def store(storage, settings) -> ExpenseStore:
    return ExpenseStore(storage, settings)


@pytest.fixture
def aggregator(store) -> ExpenseAggregator:
    return ExpenseAggregator(store)


@pytest.fixture
def statistics(store, aggregator) -> StatisticsEngine:
    return StatisticsEngine(store, aggregator)


@pytest.fixture
def app(store) -> LedgerApp:
    return LedgerApp(store)
