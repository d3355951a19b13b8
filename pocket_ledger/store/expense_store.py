"""
Expense Store

The single source of truth for expenses, categories and the monthly budget.

DESIGN DECISION: Every mutation rewrites the affected collection in full
(no deltas), then notifies subscribers. Persistence is best-effort:
- A failed write is logged and remembered in `unsaved_keys`
- The in-memory mutation is NOT rolled back
- The next successful write of that key clears it again

So in-memory and durable state can diverge until a later save succeeds.
That is acceptable for a single-user local ledger and is now observable.

Each mutation also bumps `generation`, a monotonic counter that derived
views (the aggregator cache) use to know their data is stale.
"""

from decimal import Decimal
from typing import Callable, Optional, Union
from uuid import UUID

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from pocket_ledger.config import LedgerSettings, get_settings
from pocket_ledger.importer import HistoricalImportParser
from pocket_ledger.log import get_logger
from pocket_ledger.models import (
    Category,
    Expense,
    ImportResult,
    StoreChange,
    default_categories,
    fallback_category,
    find_category,
    parse_amount,
)
from pocket_ledger.services.storage import KeyValueStorage, StorageError


logger = get_logger(__name__)

EXPENSES_KEY = "SavedExpenses"
CATEGORIES_KEY = "SavedCategories"
BUDGET_KEY = "MonthlyBudget"

_expense_list = TypeAdapter(list[Expense])
_category_list = TypeAdapter(list[Category])

StoreListener = Callable[[StoreChange], None]

# Smallest positive budget; keeps total / budget inside Decimal's range
MIN_BUDGET = Decimal("0.01")


def parse_budget(value: Union[Decimal, int, str]) -> Optional[Decimal]:
    """A valid monthly budget parsed from `value`, or None."""
    budget = parse_amount(value)
    if budget is None or budget < 0 or 0 < budget < MIN_BUDGET:
        return None
    return budget


class ExpenseStore:
    """
    Owns the canonical in-memory collections and mediates all storage I/O.

    Construct it once and pass it to whatever needs it; there is no global
    instance. Reads return copies, so callers cannot mutate the canonical
    lists behind the store's back.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        settings: Optional[LedgerSettings] = None,
    ):
        """
        Initialize the store and load persisted state.

        Args:
            storage: Durable key-value backend
            settings: Settings to use; defaults to get_settings()
        """
        self._storage = storage
        self._settings = settings or get_settings()

        self._expenses: list[Expense] = []
        self._categories: list[Category] = default_categories()
        self._monthly_budget: Decimal = self._settings.default_monthly_budget

        self._generation = 0
        self._listeners: list[StoreListener] = []
        self._unsaved_keys: set[str] = set()

        self._load_expenses()
        self._load_categories()
        self._load_budget()

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def settings(self) -> LedgerSettings:
        return self._settings

    @property
    def expenses(self) -> list[Expense]:
        """All expenses in insertion order (a copy)."""
        return list(self._expenses)

    @property
    def categories(self) -> list[Category]:
        return list(self._categories)

    @property
    def monthly_budget(self) -> Decimal:
        return self._monthly_budget

    @property
    def generation(self) -> int:
        """Incremented by every mutating call."""
        return self._generation

    @property
    def unsaved_keys(self) -> frozenset[str]:
        """Storage keys whose most recent write failed."""
        return frozenset(self._unsaved_keys)

    def find_expense(self, expense_id: UUID) -> Optional[Expense]:
        for expense in self._expenses:
            if expense.id == expense_id:
                return expense
        return None

    def find_category(self, category_id: str) -> Optional[Category]:
        """Live category with this id, or None if it does not exist."""
        return find_category(self._categories, category_id)

    def display_category(self, category_id: str) -> Category:
        """Category to show for an id, falling back to "other" if it is gone."""
        category = self.find_category(category_id)
        if category is None:
            return fallback_category(self._categories, category_id)
        return category

    # -------------------------------------------------------------------------
    # Change notification
    # -------------------------------------------------------------------------

    def subscribe(self, listener: StoreListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: StoreListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, kind: str) -> None:
        change = StoreChange(kind=kind, generation=self._generation)
        for listener in list(self._listeners):
            try:
                listener(change)
            except Exception:
                # A broken subscriber must not undo or block the mutation
                logger.exception("store_listener_failed", kind=kind)

    def _commit(self, kind: str, *keys: str) -> None:
        """Bump the generation, persist the given keys, notify listeners."""
        self._generation += 1
        for key in keys:
            self._save(key)
        self._notify(kind)

    # -------------------------------------------------------------------------
    # Expenses
    # -------------------------------------------------------------------------

    def add_expense(self, expense: Expense) -> None:
        """Append an expense (insertion order, not date order) and persist."""
        self._expenses.append(expense)
        logger.info(
            "expense_added",
            expense_id=str(expense.id),
            amount=str(expense.amount),
            category=expense.category,
        )
        self._commit("expense_added", EXPENSES_KEY)

    def delete_expense(self, expense_id: UUID) -> bool:
        """
        Delete an expense by id.

        Returns:
            True if an expense was removed, False if the id is unknown
        """
        for index, expense in enumerate(self._expenses):
            if expense.id == expense_id:
                return self.delete_expense_at(index)
        logger.warning("expense_not_found", expense_id=str(expense_id))
        return False

    def delete_expense_at(self, index: int) -> bool:
        """
        Delete by position in the current insertion ordering.

        An out-of-range (or negative) index is a logged no-op.
        """
        if not 0 <= index < len(self._expenses):
            logger.warning("expense_index_invalid", index=index, count=len(self._expenses))
            return False
        removed = self._expenses.pop(index)
        logger.info("expense_deleted", expense_id=str(removed.id))
        self._commit("expense_deleted", EXPENSES_KEY)
        return True

    def clear_all_data(self) -> None:
        """Remove every expense. Categories and budget are kept."""
        count = len(self._expenses)
        self._expenses.clear()
        logger.info("expenses_cleared", count=count)
        self._commit("expenses_cleared", EXPENSES_KEY)

    def import_historical_data(self, source_text: str) -> ImportResult:
        """
        Parse historical text and append every valid record.

        The whole batch is persisted with a single write.
        """
        result = HistoricalImportParser().parse(source_text)
        self._expenses.extend(result.imported)
        logger.info(
            "historical_data_imported",
            imported=result.imported_count,
            skipped=result.skipped_count,
        )
        self._commit("expenses_imported", EXPENSES_KEY)
        return result

    # -------------------------------------------------------------------------
    # Categories
    # -------------------------------------------------------------------------

    def add_category(self, category: Category) -> bool:
        """
        Add a category.

        Returns:
            False (and changes nothing) if the id is already taken
        """
        if self.find_category(category.id) is not None:
            logger.warning("category_id_taken", category_id=category.id)
            return False
        self._categories.append(category)
        logger.info("category_added", category_id=category.id, name=category.name)
        self._commit("category_added", CATEGORIES_KEY)
        return True

    def delete_category(self, category: Union[Category, str]) -> bool:
        """
        Delete a category by id.

        Expenses pointing at it are left untouched; they display under the
        fallback category from then on.
        """
        category_id = category.id if isinstance(category, Category) else category
        remaining = [cat for cat in self._categories if cat.id != category_id]
        if len(remaining) == len(self._categories):
            return False
        self._categories = remaining
        logger.info("category_deleted", category_id=category_id)
        self._commit("category_deleted", CATEGORIES_KEY)
        return True

    def update_category(self, category: Category) -> bool:
        """Replace the category with the same id. No-op if the id is unknown."""
        for index, existing in enumerate(self._categories):
            if existing.id == category.id:
                self._categories[index] = category
                logger.info("category_updated", category_id=category.id, name=category.name)
                self._commit("category_updated", CATEGORIES_KEY)
                return True
        return False

    # -------------------------------------------------------------------------
    # Budget
    # -------------------------------------------------------------------------

    def update_budget(self, value: Union[Decimal, int, str]) -> bool:
        """
        Replace the monthly budget and persist it.

        Returns:
            False (and changes nothing) if the value is not a valid budget:
            non-numeric, not finite, negative, above MAX_AMOUNT, or a positive
            amount below MIN_BUDGET
        """
        budget = parse_budget(value)
        if budget is None:
            logger.warning("budget_rejected", value=str(value)[:64])
            return False
        self._monthly_budget = budget
        logger.info("budget_updated", monthly_budget=str(budget))
        self._commit("budget_updated", BUDGET_KEY)
        return True

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def _serialize(self, key: str) -> str:
        if key == EXPENSES_KEY:
            return _expense_list.dump_json(self._expenses).decode("utf-8")
        if key == CATEGORIES_KEY:
            return _category_list.dump_json(self._categories).decode("utf-8")
        if key == BUDGET_KEY:
            return str(self._monthly_budget)
        raise KeyError(key)

    def _save(self, key: str) -> bool:
        """Write one collection in full. Failures are logged, never raised."""
        try:
            self._storage.set(key, self._serialize(key))
        except (StorageError, PydanticSerializationError) as e:
            self._unsaved_keys.add(key)
            logger.error("persist_failed", key=key, error=str(e))
            return False
        self._unsaved_keys.discard(key)
        return True

    def save_all(self) -> bool:
        """Rewrite every collection; True if all writes succeeded."""
        results = [self._save(key) for key in (EXPENSES_KEY, CATEGORIES_KEY, BUDGET_KEY)]
        return all(results)

    def _read(self, key: str) -> Optional[str]:
        try:
            return self._storage.get(key)
        except StorageError as e:
            logger.error("load_failed", key=key, error=str(e))
            return None

    def _load_expenses(self) -> None:
        raw = self._read(EXPENSES_KEY)
        if raw is None:
            return
        try:
            self._expenses = _expense_list.validate_json(raw)
        except ValidationError as e:
            logger.error("load_corrupt", key=EXPENSES_KEY, error_count=e.error_count())

    def _load_categories(self) -> None:
        raw = self._read(CATEGORIES_KEY)
        if raw is None:
            return
        try:
            self._categories = _category_list.validate_json(raw)
        except ValidationError as e:
            logger.error("load_corrupt", key=CATEGORIES_KEY, error_count=e.error_count())
            self._categories = default_categories()

    def _load_budget(self) -> None:
        raw = self._read(BUDGET_KEY)
        if raw is None:
            return
        value = parse_budget(raw)
        if value is None:
            logger.error("load_corrupt", key=BUDGET_KEY, value=raw[:64])
            return
        if value == 0:
            return
        self._monthly_budget = value
