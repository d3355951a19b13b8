"""Input validation package."""

from pocket_ledger.validation.validator import ExpenseInputValidator

__all__ = ["ExpenseInputValidator"]
