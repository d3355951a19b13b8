"""Expense store package."""

from pocket_ledger.store.expense_store import (
    BUDGET_KEY,
    CATEGORIES_KEY,
    EXPENSES_KEY,
    MIN_BUDGET,
    ExpenseStore,
    StoreListener,
    parse_budget,
)

__all__ = [
    "BUDGET_KEY",
    "CATEGORIES_KEY",
    "EXPENSES_KEY",
    "MIN_BUDGET",
    "ExpenseStore",
    "StoreListener",
    "parse_budget",
]
