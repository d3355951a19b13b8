"""
Statistics Engine

Computes the numbers behind the statistics screen for a month or a week:
- Summary card: total, record count, daily average, average per record,
  budget usage
- Category breakdown: amount and share per category, largest first
- Trend comparison: against the previous period and the same period one
  year earlier

All inputs come from ExpenseAggregator, so statistics and the day-grouped
records view always agree on which expenses belong to a period.

DEGENERATE CASES (deliberate, never NaN or infinity):
- Budget of zero -> budget used is 0%
- No records -> average per record is 0
- Period total of zero -> every category share is 0%
- Comparison base of zero -> change is 0%
- Comparison period before year 1 -> base is 0, so change is 0%
"""

from decimal import Decimal
from typing import Callable, Optional

from pocket_ledger.aggregation import ExpenseAggregator
from pocket_ledger.models import (
    CategoryStat,
    Expense,
    MonthPeriod,
    Period,
    PeriodChange,
    PeriodOutOfRange,
    SummaryStats,
    TrendComparison,
    round_half_up,
)
from pocket_ledger.store import ExpenseStore


ZERO = Decimal("0")
HUNDRED = Decimal("100")


def _sum(expenses: list[Expense]) -> Decimal:
    return sum((expense.amount for expense in expenses), ZERO)


def _neighbour(step: Callable[[], Period]) -> Optional[Period]:
    """Result of previous()/year_ago(), or None at the edge of the calendar."""
    try:
        return step()
    except PeriodOutOfRange:
        return None


def percent_change(current: Decimal, base: Decimal) -> float:
    """Signed percent change from `base` to `current`; 0 for a non-positive base."""
    if base <= 0:
        return 0.0
    return float((current - base) / base * HUNDRED)


class StatisticsEngine:
    """Summary numbers, category breakdowns and trends for a period."""

    def __init__(self, store: ExpenseStore, aggregator: ExpenseAggregator):
        self._store = store
        self._aggregator = aggregator

    def budget_for(self, period: Period) -> Decimal:
        """Monthly budget for months; monthly / divisor for weeks."""
        monthly = self._store.monthly_budget
        if isinstance(period, MonthPeriod):
            return monthly
        return monthly / Decimal(self._store.settings.weekly_budget_divisor)

    def summary(self, period: Period) -> SummaryStats:
        expenses = self._aggregator.expenses_in(period)
        total = _sum(expenses)
        count = len(expenses)
        budget = self.budget_for(period)

        return SummaryStats(
            period=period,
            total=total,
            record_count=count,
            daily_average=total / Decimal(period.days),
            average_per_record=total / Decimal(count) if count else ZERO,
            budget=budget,
            budget_used=float(total / budget * HUNDRED) if budget > 0 else 0.0,
        )

    def category_breakdown(self, period: Period) -> list[CategoryStat]:
        """
        Per-category totals for a period, largest amount first.

        Expenses whose category was deleted keep their own row but are shown
        with the fallback category's name and icon.
        """
        expenses = self._aggregator.expenses_in(period)
        total = _sum(expenses)

        groups: dict[str, list[Expense]] = {}
        for expense in expenses:
            groups.setdefault(expense.category, []).append(expense)

        stats = []
        for category_id, items in groups.items():
            amount = _sum(items)
            percentage = round_half_up(amount / total * HUNDRED) if total > 0 else 0
            display = self._store.display_category(category_id)
            stats.append(CategoryStat(
                category_id=category_id,
                name=display.name,
                icon=display.icon,
                amount=amount,
                record_count=len(items),
                percentage=min(max(percentage, 0), 100),
                is_fallback=self._store.find_category(category_id) is None,
            ))

        stats.sort(key=lambda stat: stat.amount, reverse=True)
        return stats

    def top_categories(self, period: Period, limit: int = 6) -> list[CategoryStat]:
        """Largest categories, as plotted by the bar/line charts."""
        return self.category_breakdown(period)[:max(0, limit)]

    def _total(self, period: Optional[Period]) -> Decimal:
        if period is None:
            return ZERO
        return self._aggregator.period_total(period)

    def compare(self, period: Period) -> TrendComparison:
        """Compare a period with the one before it and the one a year earlier."""
        current = self._aggregator.period_total(period)
        previous_period = _neighbour(period.previous)
        year_ago_period = _neighbour(period.year_ago)
        previous = self._total(previous_period)
        year_ago = self._total(year_ago_period)

        return TrendComparison(
            period=period,
            previous_period=previous_period,
            year_ago_period=year_ago_period,
            period_over_period=PeriodChange(
                current=current,
                previous=previous,
                change_percent=percent_change(current, previous),
            ),
            year_over_year=PeriodChange(
                current=current,
                previous=year_ago,
                change_percent=percent_change(current, year_ago),
            ),
        )
