"""
Flat-text export

Writes expenses in exactly the line format HistoricalImportParser reads,
so an export can be imported again. There is no spreadsheet/binary format.
"""

from pocket_ledger.models import (
    BUILTIN_CATEGORY_NAMES,
    FALLBACK_CATEGORY_ID,
    Expense,
)


def _clean_description(text: str) -> str:
    # The format has no quoting, so field separators cannot appear inside a field
    return text.replace(",", "，").replace("\r", " ").replace("\n", " ")


def export_line(expense: Expense) -> str:
    day = expense.day
    category_name = BUILTIN_CATEGORY_NAMES.get(
        expense.category, BUILTIN_CATEGORY_NAMES[FALLBACK_CATEGORY_ID]
    )
    return ",".join([
        str(day.year),
        str(day.month),
        str(day.day),
        format(expense.amount, "f"),
        _clean_description(expense.description),
        category_name,
    ])


def export_historical_text(expenses: list[Expense]) -> str:
    """
    Export expenses oldest first, one line each.

    User-defined categories have no stable name in this format and are
    written as "其他".
    """
    ordered = sorted(expenses, key=lambda e: e.date.timestamp())
    lines = [export_line(expense) for expense in ordered]
    return "\n".join(lines) + ("\n" if lines else "")
