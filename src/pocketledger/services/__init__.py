"""
Service layer for PocketLedger.

Functional core business logic, separated from the imperative shell (CLI).
Services take their stores through constructors and return data
structures; they never print.

Principles:
- No UI framework imports (Rich, Typer)
- All dependencies injected through constructors
- Failures are raised as pocketledger.errors.LedgerError subclasses
"""

from pocketledger.services.bookkeeping_service import BookkeepingService, SeedResult
from pocketledger.services.export_service import ExportService
from pocketledger.services.ledger_service import LedgerService, validate_amount
from pocketledger.services.statistics_service import (
    StatisticsService,
    compute_statistics,
)

__all__ = [
    "BookkeepingService",
    "SeedResult",
    "ExportService",
    "LedgerService",
    "validate_amount",
    "StatisticsService",
    "compute_statistics",
]
