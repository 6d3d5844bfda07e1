"""
Account store - sole writer of account records.

The balance column is only ever changed through apply_balance_delta(),
which reads the current balance, adds the delta and writes it back as ONE
serialized store operation inside a single SQLite write transaction. Callers
must never emulate it with fetch_by_id() + update(): a concurrent delta
between the two calls would be lost.
"""

from __future__ import annotations

import logging
import sqlite3
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pocketledger.errors import AccountNotFoundError
from pocketledger.model.account import Account
from pocketledger.storage.queries import AccountQuery
from pocketledger.storage.record_store import RecordStore

logger = logging.getLogger(__name__)


class AccountStore(RecordStore[Account]):
    """Async, serialized CRUD over the accounts table."""

    table = "accounts"
    columns = (
        "id",
        "name",
        "type",
        "balance",
        "currency_code",
        "color_hex",
        "sort_order",
        "is_default",
        "include_in_total",
    )
    order_by = "sort_order, name"

    def _from_row(self, row: sqlite3.Row) -> Account:
        return Account.from_row(dict(row))

    # -- reads ------------------------------------------------------------

    async def fetch_default(self) -> Optional[Account]:
        rows = await self.fetch(AccountQuery(is_default=True, limit=1))
        return rows[0] if rows else None

    async def total_balance(self) -> Decimal:
        """Sum of balances over accounts flagged include_in_total."""
        accounts = await self.fetch(AccountQuery(include_in_total=True))
        return sum((a.balance for a in accounts), Decimal("0"))

    # -- balance ----------------------------------------------------------

    async def apply_balance_delta(self, account_id: UUID, delta: Decimal) -> Account:
        """Atomically add delta (positive or negative) to an account's balance.

        Args:
            account_id: The account to update
            delta: Amount to add to the balance

        Returns:
            The account with its new balance

        Raises:
            AccountNotFoundError: If the account does not exist
            StorageError: If the database write fails
        """
        return await self._serial.run(self._do_apply_delta, account_id, delta)

    def _do_apply_delta(self, account_id: UUID, delta: Decimal) -> Account:
        with self._db.connect() as conn:
            # Take the write lock before reading so no other connection can interleave
            conn.execute("BEGIN IMMEDIATE")
            row = conn.execute(
                f"SELECT {', '.join(self.columns)} FROM accounts WHERE id = ?", (str(account_id),)
            ).fetchone()
            if row is None:
                raise AccountNotFoundError(account_id)

            account = self._from_row(row)
            new_balance = account.balance + delta
            conn.execute(
                "UPDATE accounts SET balance = ? WHERE id = ?", (str(new_balance), str(account_id))
            )

        logger.debug("Account %s balance %s -> %s", account_id, account.balance, new_balance)
        return account.model_copy(update={"balance": new_balance})

    # -- bookkeeping ------------------------------------------------------

    async def create_default_if_needed(self, template: Optional[Account] = None) -> bool:
        """Insert the default account when the store is empty.

        Returns:
            True if an account was created
        """
        return await self._serial.run(self._do_create_default, template or Account.default())

    def _do_create_default(self, template: Account) -> bool:
        with self._db.connect() as conn:
            conn.execute("BEGIN IMMEDIATE")
            (n,) = conn.execute("SELECT COUNT(*) FROM accounts").fetchone()
            if n:
                return False
            self._insert_rows(conn, [template])
        logger.info("Created default account '%s'", template.name)
        return True

    async def set_default(self, account_id: UUID) -> None:
        """Make account_id the only default account.

        Raises:
            AccountNotFoundError: If the account does not exist
        """
        await self._serial.run(self._do_set_default, account_id)

    def _do_set_default(self, account_id: UUID) -> None:
        with self._db.connect() as conn:
            conn.execute("BEGIN IMMEDIATE")
            found = conn.execute(
                "SELECT 1 FROM accounts WHERE id = ?", (str(account_id),)
            ).fetchone()
            if found is None:
                raise AccountNotFoundError(account_id)
            conn.execute(
                "UPDATE accounts SET is_default = CASE WHEN id = ? THEN 1 ELSE 0 END",
                (str(account_id),),
            )


__all__ = ["AccountStore"]
