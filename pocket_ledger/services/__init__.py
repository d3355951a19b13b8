"""External services used by Pocket Ledger (currently: storage)."""
