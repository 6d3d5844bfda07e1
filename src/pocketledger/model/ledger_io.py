from __future__ import annotations

"""
Ledger CSV export (pure text, no disk I/O).

Flat, line-oriented representation of transactions for spreadsheets:

    Date,Amount,Type,Note
    2026-01-07 09:30:00,12.50,Expense,Coffee; pastry

- Dates use a fixed format (EXPORT_DATE_FORMAT).
- Type is rendered as Income/Expense; the amount is always positive.
- Notes are flattened so rows are never quoted: commas become semicolons,
  double quotes become single quotes, and line breaks become spaces.
"""

import csv
import io
from collections.abc import Iterable

from pocketledger.config import EXPORT_DATE_FORMAT
from pocketledger.model.transaction import Transaction

EXPORT_COLUMNS: list[str] = ["Date", "Amount", "Type", "Note"]


def _clean_note(note: str) -> str:
    return (
        note.replace(",", ";")
        .replace('"', "'")
        .replace("\r", " ")
        .replace("\n", " ")
    )


def _fields(txn: Transaction) -> list[str]:
    return [
        txn.date.strftime(EXPORT_DATE_FORMAT),
        str(txn.amount),
        txn.type.display_name,
        _clean_note(txn.note),
    ]


def _writer(output: io.StringIO):
    return csv.writer(output, quoting=csv.QUOTE_NONE, lineterminator="\n")


def export_row(txn: Transaction) -> str:
    output = io.StringIO()
    _writer(output).writerow(_fields(txn))
    return output.getvalue().rstrip("\n")


def dump_export_csv(transactions: Iterable[Transaction]) -> str:
    """Render transactions (in the given order) as export CSV text."""
    output = io.StringIO()
    writer = _writer(output)
    writer.writerow(EXPORT_COLUMNS)
    for txn in transactions:
        writer.writerow(_fields(txn))
    return output.getvalue()


__all__ = ["EXPORT_COLUMNS", "dump_export_csv", "export_row"]
