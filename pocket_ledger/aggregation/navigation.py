"""
Period Navigation

Moves the selected month/week backwards and forwards, clamped to the range
of periods that actually contain expenses. A move outside that range is
rejected: the selection stays put and a boundary message is raised through
the `on_boundary` callback (the UI shows it as a transient toast).
"""

from typing import Callable, Optional

from pocket_ledger.log import get_logger
from pocket_ledger.models import (
    MonthPeriod,
    NavigationResult,
    Period,
    PeriodOutOfRange,
    WeekPeriod,
)
from pocket_ledger.store import ExpenseStore


logger = get_logger(__name__)

NO_DATA_MESSAGE = "暂无记录"
EARLIEST_MONTH_MESSAGE = "已经是最早的月份了"
LATEST_MONTH_MESSAGE = "已经是最新的月份了"
EARLIEST_WEEK_MESSAGE = "已经是最早的一周了"
LATEST_WEEK_MESSAGE = "已经是最新的一周了"


class PeriodNavigator:
    """Holds the selected period and enforces the navigation bounds."""

    def __init__(
        self,
        store: ExpenseStore,
        period: Period,
        on_boundary: Optional[Callable[[str], None]] = None,
    ):
        """
        Args:
            store: Store whose expenses define the bounds
            period: Initially selected period (not bound-checked)
            on_boundary: Called with the message whenever a move is rejected
        """
        self._store = store
        self._period = period
        self._on_boundary = on_boundary

    @property
    def period(self) -> Period:
        return self._period

    def bounds(self) -> Optional[tuple[Period, Period]]:
        """
        Earliest and latest expense-bearing period of the selected kind.

        Returns None when there are no expenses at all.
        """
        days = [expense.day for expense in self._store.expenses]
        if not days:
            return None
        earliest, latest = min(days), max(days)
        if isinstance(self._period, WeekPeriod):
            first_weekday = self._store.settings.first_weekday
            return (
                WeekPeriod.containing(earliest, first_weekday),
                WeekPeriod.containing(latest, first_weekday),
            )
        return MonthPeriod.containing(earliest), MonthPeriod.containing(latest)

    def previous(self) -> NavigationResult:
        try:
            target = self._period.previous()
        except PeriodOutOfRange:
            return self._reject(self._edge_message(earliest=True), "calendar_start")
        return self.go_to(target)

    def next(self) -> NavigationResult:
        try:
            target = self._period.next()
        except PeriodOutOfRange:
            return self._reject(self._edge_message(earliest=False), "calendar_end")
        return self.go_to(target)

    def go_to(self, target: Period) -> NavigationResult:
        """Select `target` if it lies within the bounds."""
        message = self._rejection(target)
        if message is not None:
            return self._reject(message, target.label)

        self._period = target
        return NavigationResult(moved=True, period=target)

    def _reject(self, message: str, target: str) -> NavigationResult:
        logger.info("navigation_rejected", target=target, reason=message)
        if self._on_boundary is not None:
            self._on_boundary(message)
        return NavigationResult(moved=False, period=self._period, message=message)

    def _edge_message(self, earliest: bool) -> str:
        """Message for a move off the end of the calendar itself."""
        if not self._store.expenses:
            return NO_DATA_MESSAGE
        if isinstance(self._period, WeekPeriod):
            return EARLIEST_WEEK_MESSAGE if earliest else LATEST_WEEK_MESSAGE
        return EARLIEST_MONTH_MESSAGE if earliest else LATEST_MONTH_MESSAGE

    def _rejection(self, target: Period) -> Optional[str]:
        bounds = self.bounds()
        if bounds is None:
            return NO_DATA_MESSAGE

        lower, upper = bounds
        is_week = isinstance(target, WeekPeriod)
        if target.start_date < lower.start_date:
            return EARLIEST_WEEK_MESSAGE if is_week else EARLIEST_MONTH_MESSAGE
        if target.start_date > upper.start_date:
            return LATEST_WEEK_MESSAGE if is_week else LATEST_MONTH_MESSAGE
        return None
