"""
Export service - writes the ledger as a CSV file for spreadsheets.

Format is defined in pocketledger.model.ledger_io; this service only reads
transactions from the store and places the file.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date
from pathlib import Path
from typing import Optional

from pocketledger.errors import StorageError
from pocketledger.model.ledger_io import dump_export_csv
from pocketledger.storage.transaction_store import TransactionStore

logger = logging.getLogger(__name__)

EXPORT_FILE_PREFIX = "PocketLedger_Export_"


def export_file_name(today: date) -> str:
    return f"{EXPORT_FILE_PREFIX}{today.isoformat()}.csv"


class ExportService:
    """Renders and writes transaction exports."""

    def __init__(self, transactions: TransactionStore):
        self._transactions = transactions

    async def render(self) -> str:
        """All transactions as export CSV text, most recent first."""
        return dump_export_csv(await self._transactions.fetch_all())

    async def export_to(self, directory: Path, today: Optional[date] = None) -> Optional[Path]:
        """
        Write the export file into `directory`.

        Returns:
            Path of the written file, or None when there are no transactions

        Raises:
            StorageError: If the file cannot be written
        """
        transactions = await self._transactions.fetch_all()
        if not transactions:
            return None

        path = directory / export_file_name(today or date.today())
        text = dump_export_csv(transactions)
        try:
            await asyncio.to_thread(_write_text, path, text)
        except OSError as e:
            raise StorageError(f"Cannot write export {path}: {e}") from e

        logger.info("Exported %d transactions to %s", len(transactions), path)
        return path


def _write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


__all__ = ["ExportService", "export_file_name"]
