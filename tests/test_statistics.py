"""Tests for StatisticsEngine: summary, category breakdown and trends."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from pocket_ledger.models import MonthPeriod, WeekPeriod
from pocket_ledger.statistics import percent_change


JUNE = MonthPeriod(year=2025, month=6)


class TestSummary:
    """Tests for the summary card."""

    def test_budget_usage(self, store, statistics, make_expense):
        """Test 1500 spent of a 5000 budget is 30% used, 3500 left."""
        store.add_expense(make_expense("1000", datetime(2025, 6, 2)))
        store.add_expense(make_expense("500", datetime(2025, 6, 20)))

        summary = statistics.summary(JUNE)

        assert summary.total == Decimal("1500")
        assert summary.budget == Decimal("5000")
        assert summary.budget_used == pytest.approx(30.0)
        assert summary.remaining == Decimal("3500")
        assert summary.over_budget is False

    def test_averages(self, store, statistics, make_expense):
        """Test daily average divides by days in period, not days with data."""
        store.add_expense(make_expense("1000", datetime(2025, 6, 2)))
        store.add_expense(make_expense("500", datetime(2025, 6, 20)))

        summary = statistics.summary(JUNE)

        assert summary.record_count == 2
        assert summary.daily_average == Decimal("50")
        assert summary.average_per_record == Decimal("750")

    def test_empty_period(self, statistics):
        """Test an empty period yields zeros everywhere."""
        summary = statistics.summary(JUNE)

        assert summary.total == Decimal("0")
        assert summary.record_count == 0
        assert summary.average_per_record == Decimal("0")
        assert summary.budget_used == 0.0

    def test_zero_budget_is_safe(self, store, statistics, make_expense):
        """Test budget usage is 0 (never NaN or infinity) with a zero budget."""
        store.update_budget(0)
        store.add_expense(make_expense("100", datetime(2025, 6, 2)))

        summary = statistics.summary(JUNE)

        assert summary.budget == Decimal("0")
        assert summary.budget_used == 0.0

    def test_over_budget(self, store, statistics, make_expense):
        """Test spending more than the budget."""
        store.update_budget(100)
        store.add_expense(make_expense("150", datetime(2025, 6, 2)))

        summary = statistics.summary(JUNE)

        assert summary.budget_used == pytest.approx(150.0)
        assert summary.remaining == Decimal("-50")
        assert summary.over_budget is True

    def test_week_budget_is_quarter_of_month(self, store, statistics, make_expense):
        """Test a week's budget is the monthly budget divided by four."""
        store.add_expense(make_expense("125", datetime(2025, 6, 10)))
        week = WeekPeriod(start=date(2025, 6, 9))

        summary = statistics.summary(week)

        assert summary.budget == Decimal("1250")
        assert summary.budget_used == pytest.approx(10.0)
        assert summary.daily_average == Decimal("125") / Decimal("7")


class TestCategoryBreakdown:
    """Tests for per-category totals and shares."""

    def test_sorted_by_amount(self, store, statistics, make_expense):
        """Test rows are ordered largest first with their shares."""
        store.add_expense(make_expense("25", datetime(2025, 6, 2), "地铁", "transport"))
        store.add_expense(make_expense("50", datetime(2025, 6, 3), "午饭", "food"))
        store.add_expense(make_expense("25", datetime(2025, 6, 4), "晚饭", "food"))

        rows = statistics.category_breakdown(JUNE)

        assert [row.category_id for row in rows] == ["food", "transport"]
        assert rows[0].amount == Decimal("75")
        assert rows[0].record_count == 2
        assert rows[0].percentage == 75
        assert rows[0].name == "餐饮"
        assert rows[1].percentage == 25

    def test_thirds_do_not_sum_to_hundred(self, store, statistics, make_expense):
        """Test shares are rounded independently per row."""
        for category in ("food", "transport", "shopping"):
            store.add_expense(make_expense("1", datetime(2025, 6, 2), "x", category))

        rows = statistics.category_breakdown(JUNE)

        assert [row.percentage for row in rows] == [33, 33, 33]

    def test_halves_round_up(self, store, statistics, make_expense):
        """Test 12.5% and 87.5% round to 13 and 88."""
        store.add_expense(make_expense("7", datetime(2025, 6, 2), "x", "food"))
        store.add_expense(make_expense("1", datetime(2025, 6, 2), "x", "gift"))

        rows = statistics.category_breakdown(JUNE)

        assert [row.percentage for row in rows] == [88, 13]

    def test_percentages_are_bounded(self, store, statistics, make_expense):
        """Test every share lies within 0 to 100."""
        amounts = ["0.01", "999.99", "12.34", "5", "77.7"]
        categories = ["food", "transport", "shopping", "medical", "bills"]
        for amount, category in zip(amounts, categories):
            store.add_expense(make_expense(amount, datetime(2025, 6, 2), "x", category))

        for row in statistics.category_breakdown(JUNE):
            assert 0 <= row.percentage <= 100

    def test_zero_total_gives_zero_shares(self, store, statistics, make_expense):
        """Test a zero period total does not divide by zero."""
        store.add_expense(make_expense("0", datetime(2025, 6, 2), "x", "food"))

        rows = statistics.category_breakdown(JUNE)

        assert len(rows) == 1
        assert rows[0].percentage == 0

    def test_empty_period(self, statistics):
        """Test a period without expenses has no rows."""
        assert statistics.category_breakdown(JUNE) == []

    def test_deleted_category_uses_fallback(self, store, statistics, aggregator, make_expense):
        """Test expenses of a deleted category are shown under 'other'."""
        store.add_expense(make_expense("14", datetime(2025, 6, 15), "午饭", "food"))
        store.delete_category("food")

        groups = aggregator.aggregate(JUNE)
        rows = statistics.category_breakdown(JUNE)

        assert groups[0].total == 14
        assert len(rows) == 1
        assert rows[0].category_id == "food"
        assert rows[0].name == "其他"
        assert rows[0].icon == "shippingbox"
        assert rows[0].is_fallback is True
        assert rows[0].percentage == 100

    def test_top_categories_limit(self, store, statistics, make_expense):
        """Test the chart helper keeps only the largest categories."""
        categories = ["food", "transport", "entertainment", "shopping",
                      "medical", "gift", "bills", "other"]
        for index, category in enumerate(categories, start=1):
            store.add_expense(make_expense(index, datetime(2025, 6, 2), "x", category))

        top = statistics.top_categories(JUNE)

        assert len(top) == 6
        assert top[0].category_id == "other"
        assert [row.category_id for row in statistics.top_categories(JUNE, limit=2)] == [
            "other", "bills",
        ]


class TestTrends:
    """Tests for period-over-period and year-over-year comparison."""

    def test_percent_change(self):
        """Test the signed change helper."""
        assert percent_change(Decimal("150"), Decimal("100")) == pytest.approx(50.0)
        assert percent_change(Decimal("50"), Decimal("100")) == pytest.approx(-50.0)
        assert percent_change(Decimal("50"), Decimal("0")) == 0.0

    def test_month_comparison(self, store, statistics, make_expense):
        """Test June against May and against June of the previous year."""
        store.add_expense(make_expense("1500", datetime(2025, 6, 10)))
        store.add_expense(make_expense("1000", datetime(2025, 5, 10)))
        store.add_expense(make_expense("3000", datetime(2024, 6, 10)))

        trend = statistics.compare(JUNE)

        assert trend.previous_period == MonthPeriod(year=2025, month=5)
        assert trend.year_ago_period == MonthPeriod(year=2024, month=6)
        assert trend.period_over_period.change_percent == pytest.approx(50.0)
        assert trend.period_over_period.is_increase is True
        assert trend.year_over_year.previous == Decimal("3000")
        assert trend.year_over_year.change_percent == pytest.approx(-50.0)
        assert trend.year_over_year.is_increase is False

    def test_zero_base_is_zero_change(self, store, statistics, make_expense):
        """Test comparing against an empty period reports no change."""
        store.add_expense(make_expense("1500", datetime(2025, 6, 10)))

        trend = statistics.compare(JUNE)

        assert trend.period_over_period.previous == Decimal("0")
        assert trend.period_over_period.change_percent == 0.0
        assert trend.year_over_year.change_percent == 0.0

    def test_week_comparison(self, store, statistics, make_expense):
        """Test a week is compared with the week before it."""
        store.add_expense(make_expense("200", datetime(2025, 6, 10)))
        store.add_expense(make_expense("100", datetime(2025, 6, 3)))
        week = WeekPeriod(start=date(2025, 6, 9))

        trend = statistics.compare(week)

        assert trend.previous_period == WeekPeriod(start=date(2025, 6, 2))
        assert trend.period_over_period.change_percent == pytest.approx(100.0)
