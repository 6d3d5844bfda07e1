"""
Transaction store - sole writer of transaction records.

Transactions are immutable, so the store offers no partial updates; the
generic update() exists for completeness of the store contract. Results
are ordered most recent first.
"""

from __future__ import annotations

import sqlite3

from pocketledger.model.statistics import DateInterval
from pocketledger.model.transaction import Transaction
from pocketledger.storage.queries import TransactionQuery
from pocketledger.storage.record_store import RecordStore


class TransactionStore(RecordStore[Transaction]):
    """Async, serialized CRUD over the transactions table.

    Usage:
        store = TransactionStore(LedgerDatabase(path))
        await store.add(txn)
        recent = await store.fetch(TransactionQuery(period=interval))
    """

    table = "transactions"
    columns = (
        "id",
        "amount",
        "type",
        "category_id",
        "account_id",
        "date",
        "note",
        "created_at",
    )
    order_by = "date DESC, created_at DESC"

    def _from_row(self, row: sqlite3.Row) -> Transaction:
        return Transaction.from_row(dict(row))

    async def fetch_in_period(self, period: DateInterval) -> list[Transaction]:
        """Transactions whose date falls within [period.start, period.end]."""
        return await self.fetch(TransactionQuery(period=period))


__all__ = ["TransactionStore"]
