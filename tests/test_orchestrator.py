"""Tests for LedgerApp and the component factory."""

from datetime import date, datetime
from decimal import Decimal

from pocket_ledger.models import MonthPeriod
from pocket_ledger.orchestrator import LedgerApp, create_app_components
from pocket_ledger.services.storage import InMemoryStorage, JsonFileStorage


JUNE = MonthPeriod(year=2025, month=6)


class TestRecordExpense:
    """Tests for the add-expense flow."""

    def test_valid_entry_is_stored(self, app, storage):
        """Test valid input creates and persists an expense."""
        expense, validation = app.record_expense(
            "14", "午饭", category="food", when=datetime(2025, 6, 15, 12)
        )

        assert validation.is_valid
        assert expense is not None
        assert app.store.expenses == [expense]
        assert expense.amount == Decimal("14")
        assert storage.writes == ["SavedExpenses"]

    def test_invalid_entry_touches_nothing(self, app, storage):
        """Test rejected input creates no record and no write."""
        expense, validation = app.record_expense("", "午饭")

        assert expense is None
        assert validation.has_errors
        assert app.store.expenses == []
        assert app.store.generation == 0
        assert storage.writes == []

    def test_default_category_and_time(self, app):
        """Test omitted category and time fall back to 'other' and now."""
        before = datetime.now()
        expense, _ = app.record_expense("5", "纸巾")

        assert expense.category == "other"
        assert expense.date >= before

    def test_recorded_expense_is_visible_in_views(self, app):
        """Test the aggregator and statistics see new records at once."""
        app.record_expense("14", "午饭", category="food", when=datetime(2025, 6, 15))

        assert app.aggregator.aggregate(JUNE)[0].total == 14
        assert app.statistics.summary(JUNE).total == Decimal("14")


class TestNavigator:
    """Tests for the navigator factory."""

    def test_explicit_start_period(self, app):
        """Test a navigator starts at the requested period."""
        assert app.navigator(JUNE).period == JUNE

    def test_defaults_to_current_month(self, app):
        """Test the default start is the current month."""
        assert app.navigator().period == MonthPeriod.containing(date.today())


class TestImportExport:
    """Tests for file import and text export."""

    def test_import_file(self, app, tmp_path):
        """Test importing a UTF-8 file."""
        path = tmp_path / "history.txt"
        path.write_text("2025,6,15,14,午饭,餐饮\nbad\n", encoding="utf-8")

        result = app.import_historical_file(path)

        assert result.imported_count == 1
        assert result.skipped_line_numbers == [2]
        assert len(app.store.expenses) == 1

    def test_missing_file_imports_nothing(self, app, tmp_path):
        """Test an unreadable file is reported as an empty import."""
        result = app.import_historical_file(tmp_path / "missing.txt")

        assert result.imported_count == 0
        assert app.store.generation == 0

    def test_export(self, app):
        """Test exporting the store's expenses."""
        app.record_expense("14", "午饭", category="food", when=datetime(2025, 6, 15))
        assert app.export_historical_text() == "2025,6,15,14,午饭,餐饮\n"


class TestCreateAppComponents:
    """Tests for the component factory."""

    def test_with_injected_storage(self, settings):
        """Test the factory wires every component around one store."""
        app = create_app_components(settings=settings, storage=InMemoryStorage())

        assert isinstance(app, LedgerApp)
        assert app.store.monthly_budget == Decimal("5000")
        assert app.aggregator is not None
        assert app.statistics is not None

    def test_default_storage_is_json_file(self, settings):
        """Test the default backend writes to settings.data_path."""
        app = create_app_components(settings=settings)
        app.record_expense("14", "午饭", when=datetime(2025, 6, 15))

        assert settings.data_path.exists()
        reopened = create_app_components(
            settings=settings, storage=JsonFileStorage(settings.data_path)
        )
        assert len(reopened.store.expenses) == 1
