"""
Expense Aggregator

Groups the store's flat expense list into day groups for a month or week.

Algorithm:
1. Keep expenses whose LOCAL calendar day falls in [period start, period end]
2. Group them by that day
3. Sum each group
4. Order groups most recent day first (expenses inside a day: latest first)

DESIGN DECISION: Results are cached per period and tagged with the store's
generation counter. Any mutation bumps the generation, so an add followed by
a delete (same count, different data) still invalidates the cache, which a
count-based check would miss.
"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Optional

from pocket_ledger.log import get_logger
from pocket_ledger.models import (
    DayGroup,
    Expense,
    MonthPeriod,
    Period,
    WeekPeriod,
    day_label,
)
from pocket_ledger.store import ExpenseStore


logger = get_logger(__name__)


class ExpenseAggregator:
    """
    Derives per-day views from an ExpenseStore.

    Holds no state of its own beyond the cache.
    """

    def __init__(self, store: ExpenseStore):
        self._store = store
        self._cache: dict[Period, tuple[int, list[DayGroup]]] = {}
        self._hits = 0
        self._misses = 0

    # -------------------------------------------------------------------------
    # Period helpers
    # -------------------------------------------------------------------------

    def month_period(self, year: int, month: int) -> MonthPeriod:
        return MonthPeriod(year=year, month=month)

    def week_containing(self, day: date) -> WeekPeriod:
        """Week containing a day, using the configured first weekday."""
        return WeekPeriod.containing(day, self._store.settings.first_weekday)

    def current_month(self, today: Optional[date] = None) -> MonthPeriod:
        return MonthPeriod.containing(today or date.today())

    def current_week(self, today: Optional[date] = None) -> WeekPeriod:
        return self.week_containing(today or date.today())

    # -------------------------------------------------------------------------
    # Aggregation
    # -------------------------------------------------------------------------

    def aggregate(self, period: Period) -> list[DayGroup]:
        """
        Day groups for a period, most recent day first.

        Served from cache when neither the period nor the store's
        generation changed since the last computation.
        """
        generation = self._store.generation
        cached = self._cache.get(period)
        if cached is not None and cached[0] == generation:
            self._hits += 1
            return list(cached[1])

        self._misses += 1
        groups = self._group(period)

        # Entries from older generations can never be served again
        self._cache = {
            key: entry for key, entry in self._cache.items() if entry[0] == generation
        }
        self._cache[period] = (generation, groups)

        logger.debug(
            "period_aggregated",
            period=period.label,
            generation=generation,
            day_count=len(groups),
        )
        return list(groups)

    def _group(self, period: Period) -> list[DayGroup]:
        by_day: dict[date, list[Expense]] = defaultdict(list)
        for expense in self._store.expenses:
            day = expense.day
            if period.contains(day):
                by_day[day].append(expense)

        groups = []
        for day in sorted(by_day, reverse=True):
            items = sorted(by_day[day], key=lambda e: e.date.timestamp(), reverse=True)
            groups.append(DayGroup(
                label=day_label(day),
                day=day,
                expenses=items,
                amount=sum((e.amount for e in items), Decimal("0")),
            ))
        return groups

    def expenses_in(self, period: Period) -> list[Expense]:
        """All expenses of a period, flattened from the day groups."""
        return [expense for group in self.aggregate(period) for expense in group.expenses]

    def period_total(self, period: Period) -> Decimal:
        return sum((group.amount for group in self.aggregate(period)), Decimal("0"))

    def cache_info(self) -> dict[str, int]:
        """Cache counters, mainly for tests."""
        return {"hits": self._hits, "misses": self._misses, "size": len(self._cache)}

    def clear_cache(self) -> None:
        self._cache.clear()
