"""PocketLedger - local personal finance ledger (transactions, balances, statistics)."""

__version__ = "0.1.0"
