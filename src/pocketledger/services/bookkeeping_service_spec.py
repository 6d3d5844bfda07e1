"""
Tests for BookkeepingService.
"""

from __future__ import annotations

from uuid import uuid4

import pytest

from pocketledger.errors import (
    AccountNotFoundError,
    CategoryNotFoundError,
    CategoryValidationError,
    ProtectedResourceError,
)
from pocketledger.model.account import Account, AccountType
from pocketledger.model.category import Category
from pocketledger.model.transaction import TransactionType
from pocketledger.services.bookkeeping_service import BookkeepingService, match_record
from pocketledger.storage.account_store import AccountStore
from pocketledger.storage.category_store import CategoryStore
from pocketledger.storage.database import LedgerDatabase


@pytest.fixture
def accounts(tmp_path):
    return AccountStore(LedgerDatabase(tmp_path / "ledger.db"))


@pytest.fixture
def categories(tmp_path):
    return CategoryStore(LedgerDatabase(tmp_path / "ledger.db"))


@pytest.fixture
def service(accounts, categories):
    return BookkeepingService(accounts, categories)


class DescribeMatchRecord:
    def it_should_prefer_exact_name_over_prefix(self):
        cash = Account(name="Cash")
        other = Account(name="Savings")

        assert match_record([cash, other], "cash") == [cash]

    def it_should_match_by_id_prefix(self):
        account = Account(name="Cash")

        assert match_record([account, Account(name="B")], str(account.id)[:8]) == [account]

    def it_should_return_nothing_for_blank_key(self):
        assert match_record([Account(name="Cash")], "  ") == []


class DescribeEnsureSeeded:
    @pytest.mark.asyncio
    async def it_should_create_default_account_and_categories_once(
        self, service, accounts, categories
    ):
        first = await service.ensure_seeded("EUR")
        second = await service.ensure_seeded("EUR")

        assert first.account_created and first.categories_seeded
        assert not second.account_created and not second.categories_seeded
        default = await accounts.fetch_default()
        assert default.currency_code == "EUR"
        assert await categories.count() == 12


class DescribeCategories:
    @pytest.mark.asyncio
    async def it_should_add_user_category(self, service, categories):
        category = await service.add_category(
            "  Pets ", [TransactionType.expense, TransactionType.income]
        )

        stored = await categories.fetch_by_id(category.id)
        assert stored.name == "Pets"
        assert stored.is_system is False
        assert stored.applicable_types == {TransactionType.expense, TransactionType.income}

    @pytest.mark.asyncio
    async def it_should_reject_blank_name(self, service):
        with pytest.raises(CategoryValidationError):
            await service.add_category("   ")

    @pytest.mark.asyncio
    async def it_should_reject_empty_types(self, service):
        with pytest.raises(CategoryValidationError):
            await service.add_category("Pets", [])

    @pytest.mark.asyncio
    async def it_should_reject_duplicate_name_ignoring_case(self, service):
        await service.ensure_seeded()

        with pytest.raises(CategoryValidationError):
            await service.add_category("health")

    @pytest.mark.asyncio
    async def it_should_delete_user_category(self, service, categories):
        category = await service.add_category("Pets")

        await service.delete_category(category.id)

        assert await categories.fetch_by_id(category.id) is None

    @pytest.mark.asyncio
    async def it_should_refuse_to_delete_system_category(self, service, categories):
        await service.ensure_seeded()
        salary = await service.find_category("Salary")

        with pytest.raises(ProtectedResourceError):
            await service.delete_category(salary.id)

        assert await categories.fetch_by_id(salary.id) is not None

    @pytest.mark.asyncio
    async def it_should_raise_not_found_for_unknown_category(self, service):
        with pytest.raises(CategoryNotFoundError):
            await service.delete_category(uuid4())

    @pytest.mark.asyncio
    async def it_should_find_category_for_type_only(self, service):
        await service.ensure_seeded()

        assert (await service.find_category("other", TransactionType.income)).name == "Other"
        with pytest.raises(CategoryNotFoundError):
            await service.find_category("Salary", TransactionType.expense)


class DescribeAccounts:
    @pytest.mark.asyncio
    async def it_should_make_first_account_the_default(self, service, accounts):
        first = await service.add_account("Checking")
        second = await service.add_account("Wallet", type=AccountType.cash)

        assert (await accounts.fetch_default()).id == first.id
        assert second.sort_order == first.sort_order + 1
        assert second.is_default is False

    @pytest.mark.asyncio
    async def it_should_switch_default_account(self, service, accounts):
        await service.add_account("Checking")
        wallet = await service.add_account("Wallet")

        await service.set_default_account(wallet.id)

        assert (await service.find_account()).id == wallet.id

    @pytest.mark.asyncio
    async def it_should_delete_account(self, service, accounts):
        wallet = await service.add_account("Wallet")

        await service.delete_account(wallet.id)

        assert await accounts.count() == 0
        with pytest.raises(AccountNotFoundError):
            await service.delete_account(wallet.id)

    @pytest.mark.asyncio
    async def it_should_raise_when_no_default_account_exists(self, service):
        with pytest.raises(AccountNotFoundError):
            await service.find_account()

    @pytest.mark.asyncio
    async def it_should_raise_for_unmatched_key(self, service, accounts):
        await accounts.add_batch([Account(name="A"), Account(name="B")])

        with pytest.raises(AccountNotFoundError):
            await service.find_account("Brokerage")
