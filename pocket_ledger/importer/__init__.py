"""Historical data import/export package."""

from pocket_ledger.importer.exporter import export_historical_text, export_line
from pocket_ledger.importer.parser import (
    FIELD_COUNT,
    HistoricalImportParser,
    category_id_from_name,
)

__all__ = [
    "FIELD_COUNT",
    "HistoricalImportParser",
    "category_id_from_name",
    "export_historical_text",
    "export_line",
]
