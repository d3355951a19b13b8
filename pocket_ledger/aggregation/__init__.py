"""Aggregation package: day grouping and period navigation."""

from pocket_ledger.aggregation.aggregator import ExpenseAggregator
from pocket_ledger.aggregation.navigation import (
    EARLIEST_MONTH_MESSAGE,
    EARLIEST_WEEK_MESSAGE,
    LATEST_MONTH_MESSAGE,
    LATEST_WEEK_MESSAGE,
    NO_DATA_MESSAGE,
    PeriodNavigator,
)

__all__ = [
    "EARLIEST_MONTH_MESSAGE",
    "EARLIEST_WEEK_MESSAGE",
    "LATEST_MONTH_MESSAGE",
    "LATEST_WEEK_MESSAGE",
    "NO_DATA_MESSAGE",
    "ExpenseAggregator",
    "PeriodNavigator",
]
