"""
Main Orchestrator for Pocket Ledger

Ties the components together for a presentation layer:
1. Record (form input -> validate -> store)
2. Browse (period -> day groups, navigation with bounds)
3. Analyse (period -> summary, breakdown, trends)
4. Import / export flat text

DESIGN DECISION: The store is created exactly once here and handed to every
component by reference. Nothing reaches for a global instance, so a test can
build a complete app around an in-memory backend.
"""

from datetime import date, datetime
from pathlib import Path
from typing import Callable, Optional, Union

from pocket_ledger.aggregation import ExpenseAggregator, PeriodNavigator
from pocket_ledger.config import LedgerSettings, get_settings
from pocket_ledger.importer import export_historical_text
from pocket_ledger.log import configure_logging, get_logger
from pocket_ledger.models import (
    FALLBACK_CATEGORY_ID,
    Expense,
    ImportResult,
    Period,
    ValidationResult,
)
from pocket_ledger.services.storage import JsonFileStorage, KeyValueStorage
from pocket_ledger.statistics import StatisticsEngine
from pocket_ledger.store import ExpenseStore
from pocket_ledger.validation import ExpenseInputValidator


logger = get_logger(__name__)


class LedgerApp:
    """Composition root holding one store and the components built on it."""

    def __init__(
        self,
        store: ExpenseStore,
        validator: Optional[ExpenseInputValidator] = None,
    ):
        self.store = store
        self.aggregator = ExpenseAggregator(store)
        self.statistics = StatisticsEngine(store, self.aggregator)
        self.validator = validator or ExpenseInputValidator()

    def record_expense(
        self,
        amount_text: str,
        description: str,
        category: str = FALLBACK_CATEGORY_ID,
        when: Optional[datetime] = None,
    ) -> tuple[Optional[Expense], ValidationResult]:
        """
        Validate form input and, if it passes, add the expense.

        Returns:
            (expense, validation). expense is None when validation failed;
            in that case the store was not touched.
        """
        validation = self.validator.validate(amount_text, description)
        if not validation.is_valid:
            logger.info(
                "expense_rejected",
                fields=[issue.field for issue in validation.issues if issue.severity == "error"],
            )
            return None, validation

        expense = Expense(
            amount=validation.amount,
            description=description,
            category=category,
            date=when or datetime.now(),
        )
        self.store.add_expense(expense)
        return expense, validation

    def navigator(
        self,
        period: Optional[Period] = None,
        on_boundary: Optional[Callable[[str], None]] = None,
    ) -> PeriodNavigator:
        """Navigator starting at `period` (default: the current month)."""
        return PeriodNavigator(
            self.store,
            period or self.aggregator.current_month(date.today()),
            on_boundary=on_boundary,
        )

    def import_historical_file(self, path: Union[str, Path]) -> ImportResult:
        """
        Import a UTF-8 text file.

        An unreadable file is logged and imports nothing.
        """
        try:
            text = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error("import_file_unreadable", path=str(path), error=str(e))
            return ImportResult()
        return self.store.import_historical_data(text)

    def export_historical_text(self) -> str:
        return export_historical_text(self.store.expenses)


def create_app_components(
    settings: Optional[LedgerSettings] = None,
    storage: Optional[KeyValueStorage] = None,
) -> LedgerApp:
    """
    Build a ready-to-use LedgerApp.

    Args:
        settings: Defaults to get_settings()
        storage: Defaults to a JSON file at settings.data_path
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.log_json)

    if storage is None:
        storage = JsonFileStorage(settings.data_path)

    store = ExpenseStore(storage, settings)
    logger.info(
        "app_started",
        expense_count=len(store.expenses),
        category_count=len(store.categories),
    )
    return LedgerApp(store)
