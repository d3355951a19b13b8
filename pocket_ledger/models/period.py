"""
Calendar periods

A period is the query window for aggregation and statistics: either a
calendar month or a 7-day week. Periods are frozen (hashable) so they can
key the aggregation cache directly.

DESIGN DECISION: Day boundaries follow the user's LOCAL calendar, not UTC.
An expense logged at 23:30 local time belongs to that local day even if it
is already the next day in UTC.

Periods live inside the range of `datetime.date` (years 1 to 9999). Asking
for a neighbour beyond that range raises PeriodOutOfRange; callers treat it
as "no such period".
"""

import calendar
from datetime import MAXYEAR, MINYEAR, date, datetime, timedelta
from typing import Union

from pydantic import BaseModel, ConfigDict, Field


WEEKDAY_NAMES = ("星期一", "星期二", "星期三", "星期四", "星期五", "星期六", "星期日")


class PeriodOutOfRange(ValueError):
    """A neighbouring period falls outside the supported calendar."""
    pass


def local_day(moment: datetime) -> date:
    """Calendar day of a timestamp in the local timezone."""
    if moment.tzinfo is not None:
        moment = moment.astimezone()
    return moment.date()


def shift_years(day: date, years: int) -> date:
    """
    Same month/day in another year; 29 Feb falls back to 28 Feb.

    Raises:
        PeriodOutOfRange: If the target year is not representable
    """
    year = day.year + years
    if not MINYEAR <= year <= MAXYEAR:
        raise PeriodOutOfRange(f"year {year} is out of range")
    try:
        return day.replace(year=year)
    except ValueError:
        return day.replace(year=year, day=28)


def _shift_days(day: date, days: int) -> date:
    try:
        return day + timedelta(days=days)
    except OverflowError:
        raise PeriodOutOfRange(f"{day} + {days} days is out of range")


def day_label(day: date) -> str:
    """Display label for a day, e.g. '6月15日 星期日'."""
    return f"{day.month}月{day.day}日 {WEEKDAY_NAMES[day.weekday()]}"


def _month(year: int, month: int) -> "MonthPeriod":
    if not MINYEAR <= year <= MAXYEAR:
        raise PeriodOutOfRange(f"year {year} is out of range")
    return MonthPeriod(year=year, month=month)


class MonthPeriod(BaseModel):
    """A calendar month."""
    model_config = ConfigDict(frozen=True)

    year: int = Field(..., ge=MINYEAR, le=MAXYEAR)
    month: int = Field(..., ge=1, le=12)

    @classmethod
    def containing(cls, day: date) -> "MonthPeriod":
        return cls(year=day.year, month=day.month)

    @property
    def start_date(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def end_date(self) -> date:
        return date(self.year, self.month, self.days)

    @property
    def days(self) -> int:
        """Number of calendar days in the month."""
        return calendar.monthrange(self.year, self.month)[1]

    @property
    def label(self) -> str:
        return f"{self.year}年{self.month:02d}月"

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def previous(self) -> "MonthPeriod":
        if self.month == 1:
            return _month(self.year - 1, 12)
        return _month(self.year, self.month - 1)

    def next(self) -> "MonthPeriod":
        if self.month == 12:
            return _month(self.year + 1, 1)
        return _month(self.year, self.month + 1)

    def year_ago(self) -> "MonthPeriod":
        return _month(self.year - 1, self.month)


class WeekPeriod(BaseModel):
    """
    Seven consecutive days starting at `start` (both ends inclusive).

    The first and last weeks of the calendar are cut short at
    `date.min` / `date.max`.
    """
    model_config = ConfigDict(frozen=True)

    start: date

    @classmethod
    def containing(cls, day: date, first_weekday: int = 0) -> "WeekPeriod":
        """
        Week that contains `day`.

        Args:
            day: Any day in the wanted week
            first_weekday: 0=Monday ... 6=Sunday
        """
        offset = (day.weekday() - first_weekday) % 7
        try:
            return cls(start=_shift_days(day, -offset))
        except PeriodOutOfRange:
            return cls(start=date.min)

    @property
    def start_date(self) -> date:
        return self.start

    @property
    def end_date(self) -> date:
        try:
            return _shift_days(self.start, 6)
        except PeriodOutOfRange:
            return date.max

    @property
    def days(self) -> int:
        return 7

    @property
    def label(self) -> str:
        end = self.end_date
        return f"{self.start.month}月{self.start.day}日 - {end.month}月{end.day}日"

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def previous(self) -> "WeekPeriod":
        return WeekPeriod(start=_shift_days(self.start, -7))

    def next(self) -> "WeekPeriod":
        return WeekPeriod(start=_shift_days(self.start, 7))

    def year_ago(self) -> "WeekPeriod":
        return WeekPeriod(start=shift_years(self.start, -1))


Period = Union[MonthPeriod, WeekPeriod]
