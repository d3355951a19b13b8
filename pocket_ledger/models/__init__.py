"""
Data Models Package

This package contains all Pydantic models used in Pocket Ledger.
Persisted records live in expense.py, calendar windows in period.py and
derived results in reports.py.
"""

from pocket_ledger.models.expense import (
    BUILTIN_CATEGORY_NAMES,
    CATEGORY_NAME_TO_ID,
    DEFAULT_CATEGORIES,
    FALLBACK_CATEGORY_ID,
    MAX_AMOUNT,
    Category,
    Expense,
    default_categories,
    fallback_category,
    find_category,
    new_category,
    parse_amount,
)
from pocket_ledger.models.period import (
    MonthPeriod,
    Period,
    PeriodOutOfRange,
    WeekPeriod,
    day_label,
    local_day,
    shift_years,
)
from pocket_ledger.models.reports import (
    CategoryStat,
    DayGroup,
    ImportResult,
    NavigationResult,
    PeriodChange,
    StoreChange,
    SummaryStats,
    TrendComparison,
    ValidationIssue,
    ValidationResult,
    round_half_up,
)

__all__ = [
    # Records
    "BUILTIN_CATEGORY_NAMES",
    "CATEGORY_NAME_TO_ID",
    "DEFAULT_CATEGORIES",
    "FALLBACK_CATEGORY_ID",
    "MAX_AMOUNT",
    "Category",
    "Expense",
    "default_categories",
    "fallback_category",
    "find_category",
    "new_category",
    "parse_amount",
    # Periods
    "MonthPeriod",
    "Period",
    "PeriodOutOfRange",
    "WeekPeriod",
    "day_label",
    "local_day",
    "shift_years",
    # Results
    "CategoryStat",
    "DayGroup",
    "ImportResult",
    "NavigationResult",
    "PeriodChange",
    "StoreChange",
    "SummaryStats",
    "TrendComparison",
    "ValidationIssue",
    "ValidationResult",
    "round_half_up",
]
