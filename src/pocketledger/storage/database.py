"""
SQLite database for ledger records.

One database file holds three independent tables (transactions, accounts,
categories). Each table has exactly one writer: its record store. Stores
open a short-lived connection per operation, as the event store did, so a
connection never crosses threads.

Privacy: the database is a local-only SQLite file. Never transmit it over
networks as it contains sensitive financial data.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from pocketledger.errors import StorageError

logger = logging.getLogger(__name__)

_SCHEMA = [
    """
    CREATE TABLE IF NOT EXISTS transactions (
        id TEXT PRIMARY KEY,
        amount TEXT NOT NULL,  -- Decimal as text, always positive
        type TEXT NOT NULL CHECK (type IN ('income', 'expense')),
        category_id TEXT NOT NULL,
        account_id TEXT NOT NULL,
        date TEXT NOT NULL,  -- fixed-width ISO timestamp
        note TEXT NOT NULL DEFAULT '',
        created_at TEXT NOT NULL
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_transactions_date ON transactions(date)",
    "CREATE INDEX IF NOT EXISTS idx_transactions_account ON transactions(account_id)",
    "CREATE INDEX IF NOT EXISTS idx_transactions_category ON transactions(category_id)",
    """
    CREATE TABLE IF NOT EXISTS accounts (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        type TEXT NOT NULL,
        balance TEXT NOT NULL,  -- Decimal as text
        currency_code TEXT NOT NULL,
        color_hex TEXT NOT NULL,
        sort_order INTEGER NOT NULL DEFAULT 0,
        is_default INTEGER NOT NULL DEFAULT 0,
        include_in_total INTEGER NOT NULL DEFAULT 1
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS categories (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        icon TEXT NOT NULL,
        color_hex TEXT NOT NULL,
        applicable_types TEXT NOT NULL,  -- comma-separated, e.g. 'expense,income'
        sort_order INTEGER NOT NULL DEFAULT 0,
        is_system INTEGER NOT NULL DEFAULT 0
    )
    """,
]


class LedgerDatabase:
    """Schema owner and connection factory for the ledger SQLite file.

    Usage:
        db = LedgerDatabase(workspace.ledger_db_path)
        with db.connect() as conn:
            conn.execute("SELECT COUNT(*) FROM transactions")
    """

    def __init__(self, db_path: Path | str, timeout: float = 5.0):
        """Initialize the database, creating the file and schema if needed.

        Args:
            db_path: Path to SQLite database file
            timeout: Seconds to wait on a locked database before failing

        Raises:
            StorageError: If the file cannot be created or the schema applied
        """
        self.db_path = Path(db_path)
        self.timeout = timeout
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create database directory {self.db_path.parent}: {e}") from e
        self._init_schema()

    def _init_schema(self) -> None:
        with self.connect() as conn:
            for statement in _SCHEMA:
                conn.execute(statement)
        logger.debug("Ledger schema ready at %s", self.db_path)

    @contextmanager
    def connect(self) -> Iterator[sqlite3.Connection]:
        """Open a connection; commit on success, roll back on any error.

        sqlite3 errors are re-raised as StorageError. Other exceptions
        (e.g. domain errors raised mid-operation) propagate unchanged after
        the rollback.
        """
        try:
            conn = sqlite3.connect(self.db_path, timeout=self.timeout)
        except sqlite3.Error as e:
            raise StorageError(f"Cannot open ledger database {self.db_path}: {e}") from e

        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise StorageError(f"Ledger database error: {e}") from e
        except BaseException:
            conn.rollback()
            raise
        finally:
            conn.close()


__all__ = ["LedgerDatabase"]
