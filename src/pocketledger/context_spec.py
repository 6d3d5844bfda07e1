"""
Tests for AppContext wiring.
"""

from __future__ import annotations

from decimal import Decimal
from datetime import datetime

import pytest

from pocketledger.context import AppContext
from pocketledger.model.events import TransactionsChanged
from pocketledger.model.settings import LedgerSettings
from pocketledger.model.settings_io import save_settings
from pocketledger.model.statistics import StatisticsPeriod
from pocketledger.model.transaction import TransactionType
from pocketledger.workspace import Workspace


class DescribeAppContext:
    def it_should_create_database_under_workspace(self, tmp_path):
        workspace = Workspace(root=tmp_path)

        AppContext.open(workspace)

        assert workspace.ledger_db_path.exists()

    def it_should_apply_settings_from_workspace(self, tmp_path):
        workspace = Workspace(root=tmp_path)
        save_settings(
            workspace.settings_path,
            LedgerSettings(first_weekday=6, debounce_delay=0.3, throttle_interval=1.5),
        )

        ctx = AppContext.open(workspace)

        assert ctx.statistics.first_weekday == 6
        assert ctx.debouncer().delay == 0.3
        assert ctx.throttler().interval == 1.5

    @pytest.mark.asyncio
    async def it_should_share_stores_and_notifier_between_services(self, tmp_path):
        ctx = AppContext.open(Workspace(root=tmp_path))
        changes = []
        ctx.notifier.subscribe(TransactionsChanged, changes.append)
        await ctx.bookkeeping.ensure_seeded()
        account = await ctx.bookkeeping.find_account()
        salary = await ctx.bookkeeping.find_category("Salary")

        await ctx.ledger.add_transaction(
            "120", TransactionType.income, salary.id, account.id, datetime.now()
        )

        stats = await ctx.statistics.get_statistics(StatisticsPeriod.all_time)
        assert stats.total_income == Decimal("120")
        assert await ctx.accounts.total_balance() == Decimal("120")
        assert len(changes) == 1
