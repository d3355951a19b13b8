"""
Historical Import Parser

Turns a flat text blob into Expense records. One record per line:

    year,month,day,amount,description,categoryName

e.g. "2025,6,15,14,午饭,餐饮". Whitespace around every field is trimmed.

DESIGN DECISION: The parser is LENIENT.
- A malformed line is skipped, never raised; the rest of the batch proceeds
- Skipped lines are reported by number so callers can tell "empty file"
  apart from "every line was bad"
- An amount that is not finite or exceeds MAX_AMOUNT is a malformed line,
  and so is a date field wider than a 64-bit integer
- An unknown category name maps to "other"
- A date that does not exist on the calendar (e.g. 2025-02-30) becomes
  "now" instead of rejecting the line. This keeps parity with the app's
  historical behaviour even though it silently re-dates such records.
"""

import re
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

from pocket_ledger.log import get_logger
from pocket_ledger.models import (
    CATEGORY_NAME_TO_ID,
    FALLBACK_CATEGORY_ID,
    Expense,
    ImportResult,
    parse_amount,
)


logger = get_logger(__name__)

FIELD_COUNT = 6

_MAX_INT_WIDTH = 19
_INTEGER = re.compile(r"[+-]?[0-9]+")
_NUMBER = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def category_id_from_name(name: str) -> str:
    """Map a localized category name to its id; unknown names become "other"."""
    return CATEGORY_NAME_TO_ID.get(name, FALLBACK_CATEGORY_ID)


def _parse_int(text: str) -> Optional[int]:
    # Fields wider than a 64-bit integer are malformed, not out-of-range dates
    if len(text) > _MAX_INT_WIDTH or not _INTEGER.fullmatch(text):
        return None
    return int(text)


def _parse_amount(text: str) -> Optional[Decimal]:
    if not _NUMBER.fullmatch(text):
        return None
    return parse_amount(text)


class HistoricalImportParser:
    """
    Parses historical expense text.

    Stateless apart from the clock used for the invalid-date fallback,
    which tests can replace.
    """

    def __init__(self, now: Optional[Callable[[], datetime]] = None):
        self._now = now or datetime.now

    def parse_line(self, line: str) -> Optional[Expense]:
        """
        Parse a single line.

        Returns:
            The expense, or None if the line must be skipped
        """
        parts = [part.strip() for part in line.split(",")]
        if len(parts) != FIELD_COUNT:
            return None

        year = _parse_int(parts[0])
        month = _parse_int(parts[1])
        day = _parse_int(parts[2])
        amount = _parse_amount(parts[3])
        if year is None or month is None or day is None or amount is None:
            return None

        description, category_name = parts[4], parts[5]

        try:
            when = datetime(year, month, day)
        except (ValueError, OverflowError):
            when = self._now()
            logger.debug("import_date_replaced", year=year, month=month, day=day)

        return Expense(
            amount=amount,
            description=description,
            category=category_id_from_name(category_name),
            date=when,
        )

    def parse(self, text: str) -> ImportResult:
        """Parse a whole blob. Blank lines are ignored, bad lines skipped."""
        result = ImportResult()

        for line_number, line in enumerate(text.splitlines(), start=1):
            if not line.strip():
                continue
            expense = self.parse_line(line)
            if expense is None:
                logger.debug("import_line_skipped", line_number=line_number)
                result.skipped_line_numbers.append(line_number)
                continue
            result.imported.append(expense)

        return result
