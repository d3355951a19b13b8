"""
Pocket Ledger - Source Package

A personal expense tracker core: records expenses, groups them by
day/week/month, derives statistics and budget usage, and imports
historical data from flat text.

DESIGN PRINCIPLES:
1. The store is the single source of truth
2. Derived views are recomputed, never stored
3. Bad input is skipped or rejected at the boundary, never fatal
4. Persistence is best-effort and its failures are visible
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Pocket Ledger Team"
