"""
Tests for the account store.
"""

from __future__ import annotations

import asyncio
from decimal import Decimal
from uuid import uuid4

import pytest

from pocketledger.errors import AccountNotFoundError
from pocketledger.model.account import Account, AccountType
from pocketledger.storage.account_store import AccountStore
from pocketledger.storage.database import LedgerDatabase


class DescribeAccountStore:
    @pytest.fixture
    def store(self, tmp_path):
        return AccountStore(LedgerDatabase(tmp_path / "ledger.db"))

    @pytest.mark.asyncio
    async def it_should_round_trip_all_fields(self, store):
        account = Account(
            name="Visa",
            type=AccountType.credit_card,
            balance=Decimal("-120.45"),
            currency_code="EUR",
            color_hex="FF0000",
            sort_order=3,
            is_default=False,
            include_in_total=False,
        )
        await store.add(account)

        assert await store.fetch_by_id(account.id) == account

    @pytest.mark.asyncio
    async def it_should_update_existing_account(self, store):
        account = Account(name="Cash", type=AccountType.cash)
        await store.add(account)
        account.name = "Wallet"

        assert await store.update(account) is True
        assert (await store.fetch_by_id(account.id)).name == "Wallet"

    @pytest.mark.asyncio
    async def it_should_ignore_update_for_unknown_account(self, store):
        assert await store.update(Account(name="Ghost")) is False
        assert await store.count() == 0

    class DescribeApplyBalanceDelta:
        @pytest.fixture
        def store(self, tmp_path):
            return AccountStore(LedgerDatabase(tmp_path / "ledger.db"))

        @pytest.mark.asyncio
        async def it_should_add_positive_and_negative_deltas(self, store):
            account = Account(name="Main", balance=Decimal("100"))
            await store.add(account)

            await store.apply_balance_delta(account.id, Decimal("25.50"))
            updated = await store.apply_balance_delta(account.id, Decimal("-5.25"))

            assert updated.balance == Decimal("120.25")
            assert (await store.fetch_by_id(account.id)).balance == Decimal("120.25")

        @pytest.mark.asyncio
        async def it_should_raise_for_unknown_account(self, store):
            with pytest.raises(AccountNotFoundError):
                await store.apply_balance_delta(uuid4(), Decimal("1"))

        @pytest.mark.asyncio
        async def it_should_not_lose_concurrent_deltas(self, store):
            account = Account(name="Main")
            await store.add(account)

            await asyncio.gather(
                *(store.apply_balance_delta(account.id, Decimal("1.01")) for _ in range(20))
            )

            assert (await store.fetch_by_id(account.id)).balance == Decimal("20.20")

    class DescribeDefaults:
        @pytest.fixture
        def store(self, tmp_path):
            return AccountStore(LedgerDatabase(tmp_path / "ledger.db"))

        @pytest.mark.asyncio
        async def it_should_create_exactly_one_default_account(self, store):
            assert await store.create_default_if_needed() is True
            assert await store.create_default_if_needed() is False

            accounts = await store.fetch_all()
            assert len(accounts) == 1
            assert accounts[0].is_default
            assert accounts[0].balance == Decimal("0")

        @pytest.mark.asyncio
        async def it_should_not_seed_when_accounts_exist(self, store):
            await store.add(Account(name="Existing"))

            assert await store.create_default_if_needed() is False
            assert await store.fetch_default() is None

        @pytest.mark.asyncio
        async def it_should_move_the_default_flag(self, store):
            first = Account(name="First", is_default=True)
            second = Account(name="Second", sort_order=1)
            await store.add_batch([first, second])

            await store.set_default(second.id)

            assert (await store.fetch_default()).id == second.id
            assert not (await store.fetch_by_id(first.id)).is_default

        @pytest.mark.asyncio
        async def it_should_total_only_included_accounts(self, store):
            await store.add_batch(
                [
                    Account(name="Checking", balance=Decimal("1000.10")),
                    Account(name="Savings", balance=Decimal("500"), sort_order=1),
                    Account(name="Hidden", balance=Decimal("999"), include_in_total=False),
                ]
            )

            assert await store.total_balance() == Decimal("1500.10")
