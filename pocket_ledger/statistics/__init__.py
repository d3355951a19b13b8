"""Statistics package."""

from pocket_ledger.statistics.engine import StatisticsEngine, percent_change

__all__ = ["StatisticsEngine", "percent_change"]
