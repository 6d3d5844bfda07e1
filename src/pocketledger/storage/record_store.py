"""
Generic asynchronous CRUD store over one ledger table.

Subclasses bind a table, a record model (with to_row/from_row), and a sort
order. Every public operation is submitted to the store's SerialExecutor, so
operations against one store never interleave. The synchronous `_do_*`
helpers run in a worker thread with their own connection.

Errors:
- sqlite3 failures surface as StorageError (see LedgerDatabase.connect)
- fetch_by_id returns None when the record is absent
- update/delete of an absent id are no-ops and return False
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterable
from typing import ClassVar, Generic, Optional, Protocol, TypeVar
from uuid import UUID

from pocketledger.storage.database import LedgerDatabase
from pocketledger.storage.serial import SerialExecutor

logger = logging.getLogger(__name__)


class _Record(Protocol):
    id: UUID

    def to_row(self) -> dict: ...


class _Query(Protocol):
    limit: Optional[int]

    def to_sql(self) -> tuple[str, list]: ...


TRecord = TypeVar("TRecord", bound=_Record)


class RecordStore(Generic[TRecord]):
    """Single-writer CRUD surface for one record type."""

    table: ClassVar[str]
    columns: ClassVar[tuple[str, ...]]
    order_by: ClassVar[str]

    def __init__(self, database: LedgerDatabase):
        self._db = database
        self._serial = SerialExecutor(name=self.table)

    # -- conversion hooks -------------------------------------------------

    def _from_row(self, row: sqlite3.Row) -> TRecord:
        raise NotImplementedError

    # -- read operations --------------------------------------------------

    async def fetch_all(self) -> list[TRecord]:
        return await self._serial.run(self._do_select, "", [], None)

    async def fetch(self, query: _Query) -> list[TRecord]:
        where, params = query.to_sql()
        return await self._serial.run(self._do_select, where, params, query.limit)

    async def fetch_by_id(self, record_id: UUID) -> Optional[TRecord]:
        rows = await self._serial.run(self._do_select, "WHERE id = ?", [str(record_id)], 1)
        return rows[0] if rows else None

    async def count(self) -> int:
        return await self._serial.run(self._do_count)

    # -- write operations -------------------------------------------------

    async def add(self, record: TRecord) -> None:
        await self._serial.run(self._do_insert, [record])

    async def add_batch(self, records: Iterable[TRecord]) -> None:
        """Insert all records in one commit; nothing is stored if any insert fails."""
        await self._serial.run(self._do_insert, list(records))

    async def update(self, record: TRecord) -> bool:
        return await self._serial.run(self._do_update, record)

    async def delete(self, record_id: UUID) -> bool:
        return await self._serial.run(self._do_delete, record_id)

    async def delete_all(self) -> int:
        return await self._serial.run(self._do_delete_all)

    # -- blocking helpers (worker thread) ---------------------------------

    def _select_rows(
        self, conn: sqlite3.Connection, where: str, params: list, limit: Optional[int]
    ) -> list[TRecord]:
        sql = f"SELECT {', '.join(self.columns)} FROM {self.table} {where} ORDER BY {self.order_by}"
        if limit is not None:
            sql += " LIMIT ?"
            params = [*params, limit]
        return [self._from_row(row) for row in conn.execute(sql, params).fetchall()]

    def _do_select(self, where: str, params: list, limit: Optional[int]) -> list[TRecord]:
        with self._db.connect() as conn:
            return self._select_rows(conn, where, params, limit)

    def _do_count(self) -> int:
        with self._db.connect() as conn:
            (n,) = conn.execute(f"SELECT COUNT(*) FROM {self.table}").fetchone()
            return n

    def _insert_rows(self, conn: sqlite3.Connection, records: list[TRecord]) -> None:
        placeholders = ", ".join("?" for _ in self.columns)
        sql = f"INSERT INTO {self.table} ({', '.join(self.columns)}) VALUES ({placeholders})"
        conn.executemany(sql, [[r.to_row()[c] for c in self.columns] for r in records])

    def _do_insert(self, records: list[TRecord]) -> None:
        if not records:
            return
        with self._db.connect() as conn:
            self._insert_rows(conn, records)
        logger.debug("Inserted %d row(s) into %s", len(records), self.table)

    def _do_update(self, record: TRecord) -> bool:
        row = record.to_row()
        assignments = ", ".join(f"{c} = ?" for c in self.columns if c != "id")
        values = [row[c] for c in self.columns if c != "id"]
        with self._db.connect() as conn:
            cursor = conn.execute(
                f"UPDATE {self.table} SET {assignments} WHERE id = ?", [*values, row["id"]]
            )
            updated = cursor.rowcount > 0
        if not updated:
            logger.debug("Update skipped, %s has no id %s", self.table, record.id)
        return updated

    def _do_delete(self, record_id: UUID) -> bool:
        with self._db.connect() as conn:
            cursor = conn.execute(f"DELETE FROM {self.table} WHERE id = ?", (str(record_id),))
            deleted = cursor.rowcount > 0
        logger.debug("Delete %s from %s: %s", record_id, self.table, "done" if deleted else "absent")
        return deleted

    def _do_delete_all(self) -> int:
        with self._db.connect() as conn:
            cursor = conn.execute(f"DELETE FROM {self.table}")
            return cursor.rowcount


__all__ = ["RecordStore"]
