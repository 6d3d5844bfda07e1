"""
Category store - sole writer of category records.

System categories (is_system) are protected: delete() refuses them with
ProtectedResourceError and leaves the table untouched.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Optional
from uuid import UUID

from pocketledger.errors import ProtectedResourceError
from pocketledger.model.category import Category, default_categories
from pocketledger.model.transaction import TransactionType
from pocketledger.storage.queries import CategoryQuery
from pocketledger.storage.record_store import RecordStore

logger = logging.getLogger(__name__)


class CategoryStore(RecordStore[Category]):
    """Async, serialized CRUD over the categories table."""

    table = "categories"
    columns = (
        "id",
        "name",
        "icon",
        "color_hex",
        "applicable_types",
        "sort_order",
        "is_system",
    )
    order_by = "sort_order, name"

    def _from_row(self, row: sqlite3.Row) -> Category:
        return Category.from_row(dict(row))

    async def fetch_for_type(self, transaction_type: TransactionType) -> list[Category]:
        """Categories that can be used for income (or expense) transactions."""
        return await self.fetch(CategoryQuery(applicable_type=transaction_type))

    def _do_update(self, category: Category) -> bool:
        # is_system never changes after creation
        with self._db.connect() as conn:
            cursor = conn.execute(
                """
                UPDATE categories
                SET name = ?, icon = ?, color_hex = ?, applicable_types = ?, sort_order = ?
                WHERE id = ?
                """,
                (
                    category.name,
                    category.icon,
                    category.color_hex,
                    category.to_row()["applicable_types"],
                    category.sort_order,
                    str(category.id),
                ),
            )
            return cursor.rowcount > 0

    def _do_delete(self, category_id: UUID) -> bool:
        with self._db.connect() as conn:
            row = conn.execute(
                "SELECT name, is_system FROM categories WHERE id = ?", (str(category_id),)
            ).fetchone()
            if row is None:
                return False
            if row["is_system"]:
                raise ProtectedResourceError(
                    f"System category '{row['name']}' cannot be deleted"
                )
            conn.execute("DELETE FROM categories WHERE id = ?", (str(category_id),))
        logger.debug("Deleted category %s", category_id)
        return True

    async def seed_defaults_if_needed(self, defaults: Optional[list[Category]] = None) -> bool:
        """Insert the default category set when the store is empty.

        Returns:
            True if categories were seeded
        """
        return await self._serial.run(self._do_seed, defaults or default_categories())

    def _do_seed(self, defaults: list[Category]) -> bool:
        with self._db.connect() as conn:
            conn.execute("BEGIN IMMEDIATE")
            (n,) = conn.execute("SELECT COUNT(*) FROM categories").fetchone()
            if n:
                return False
            self._insert_rows(conn, defaults)
        logger.info("Seeded %d default categories", len(defaults))
        return True


__all__ = ["CategoryStore"]
