"""
Bookkeeping service - functional core for account and category upkeep.

Keeps the ledger supplied with valid foreign keys:
- Seeding the default account and default categories on first run
- Adding categories with validation
- Protected deletion of system categories
- Adding, deleting and choosing the default account
- Resolving user input (id, id prefix, or name) to records

NO IMPORTS FROM:
- rich (console, table, prompt)
- typer

All dependencies are injected.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional, TypeVar
from uuid import UUID

from pocketledger.config import DEFAULT_CURRENCY_CODE
from pocketledger.errors import (
    AccountNotFoundError,
    CategoryNotFoundError,
    CategoryValidationError,
    ProtectedResourceError,
)
from pocketledger.model.account import Account, AccountType
from pocketledger.model.category import Category
from pocketledger.model.transaction import TransactionType
from pocketledger.storage.account_store import AccountStore
from pocketledger.storage.category_store import CategoryStore

logger = logging.getLogger(__name__)


@dataclass
class SeedResult:
    """What ensure_seeded() created."""

    account_created: bool
    categories_seeded: bool


TNamed = TypeVar("TNamed", Account, Category)


def match_record(records: Iterable[TNamed], key: str) -> list[TNamed]:
    """Find records by exact id, unique id prefix, or case-insensitive name.

    Exact matches (id or name) win over prefix matches.
    """
    records = list(records)
    needle = key.strip().lower()
    if not needle:
        return []

    exact = [r for r in records if str(r.id) == needle or r.name.lower() == needle]
    if exact:
        return exact
    return [r for r in records if str(r.id).startswith(needle)]


class BookkeepingService:
    """
    Service for account and category bookkeeping.

    Does NOT:
    - Display anything to console
    - Touch transactions or balances (see LedgerService)
    """

    def __init__(self, accounts: AccountStore, categories: CategoryStore):
        self._accounts = accounts
        self._categories = categories

    # -- seeding ----------------------------------------------------------

    async def ensure_seeded(self, currency_code: str = DEFAULT_CURRENCY_CODE) -> SeedResult:
        """Create the default account and categories when their stores are empty."""
        account_created = await self._accounts.create_default_if_needed(
            Account.default(currency_code=currency_code)
        )
        categories_seeded = await self._categories.seed_defaults_if_needed()
        return SeedResult(account_created=account_created, categories_seeded=categories_seeded)

    # -- categories -------------------------------------------------------

    async def add_category(
        self,
        name: str,
        applicable_types: Iterable[TransactionType] = (TransactionType.expense,),
        icon: str = "tag.fill",
        color_hex: str = "95A5A6",
        sort_order: Optional[int] = None,
    ) -> Category:
        """
        Add a user category.

        Raises:
            CategoryValidationError: blank name, no types, or a name already in use
        """
        name = name.strip()
        types = frozenset(applicable_types)
        if not name:
            raise CategoryValidationError("Category name cannot be blank")
        if not types:
            raise CategoryValidationError("A category must apply to income, expense, or both")

        existing = await self._categories.fetch_all()
        if any(c.name.lower() == name.lower() for c in existing):
            raise CategoryValidationError(f"Category '{name}' already exists")

        if sort_order is None:
            user_orders = [c.sort_order for c in existing if not c.is_system]
            sort_order = max(user_orders, default=99) + 1

        category = Category(
            name=name,
            icon=icon,
            color_hex=color_hex,
            applicable_types=types,
            sort_order=sort_order,
            is_system=False,
        )
        await self._categories.add(category)
        logger.info("Added category '%s' (%s)", category.name, category.id)
        return category

    async def delete_category(self, category_id: UUID) -> Category:
        """
        Delete a user category.

        Raises:
            CategoryNotFoundError: category_id does not resolve
            ProtectedResourceError: the category is a system category
        """
        category = await self._categories.fetch_by_id(category_id)
        if category is None:
            raise CategoryNotFoundError(category_id)
        if category.is_system:
            raise ProtectedResourceError(f"System category '{category.name}' cannot be deleted")

        await self._categories.delete(category_id)
        logger.info("Deleted category '%s' (%s)", category.name, category.id)
        return category

    async def find_category(
        self, key: str, transaction_type: Optional[TransactionType] = None
    ) -> Category:
        """
        Resolve an id, id prefix, or name to exactly one category.

        Raises:
            CategoryNotFoundError: nothing (or more than one category) matched
        """
        candidates = (
            await self._categories.fetch_for_type(transaction_type)
            if transaction_type is not None
            else await self._categories.fetch_all()
        )
        matches = match_record(candidates, key)
        if len(matches) != 1:
            raise CategoryNotFoundError(key)
        return matches[0]

    # -- accounts ---------------------------------------------------------

    async def add_account(
        self,
        name: str,
        type: AccountType = AccountType.checking,
        currency_code: str = DEFAULT_CURRENCY_CODE,
        include_in_total: bool = True,
    ) -> Account:
        """Add an account with a zero balance, placed after existing ones."""
        existing = await self._accounts.fetch_all()
        account = Account(
            name=name.strip(),
            type=type,
            currency_code=currency_code,
            sort_order=max((a.sort_order for a in existing), default=-1) + 1,
            is_default=not existing,
            include_in_total=include_in_total,
        )
        await self._accounts.add(account)
        logger.info("Added account '%s' (%s)", account.name, account.id)
        return account

    async def delete_account(self, account_id: UUID) -> Account:
        """
        Delete an account record.

        Transactions that reference it are left in place.

        Raises:
            AccountNotFoundError: account_id does not resolve
        """
        account = await self._accounts.fetch_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        await self._accounts.delete(account_id)
        logger.info("Deleted account '%s' (%s)", account.name, account.id)
        return account

    async def set_default_account(self, account_id: UUID) -> None:
        await self._accounts.set_default(account_id)

    async def find_account(self, key: Optional[str] = None) -> Account:
        """
        Resolve an id, id prefix, or name to one account; None means the default.

        Raises:
            AccountNotFoundError: nothing (or more than one account) matched
        """
        if key is None:
            account = await self._accounts.fetch_default()
            if account is None:
                raise AccountNotFoundError("default")
            return account

        matches = match_record(await self._accounts.fetch_all(), key)
        if len(matches) != 1:
            raise AccountNotFoundError(key)
        return matches[0]


__all__ = ["BookkeepingService", "SeedResult", "match_record"]
