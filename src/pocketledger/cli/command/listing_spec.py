from __future__ import annotations

"""
Tests for the read-only listing commands: accounts, categories, transactions.
"""

import pytest

from pocketledger.cli.command import accounts, add, categories, init, transactions
from pocketledger.workspace import Workspace


@pytest.fixture
def workspace(tmp_path):
    ws = Workspace(root=tmp_path)
    init.run(workspace=ws)
    return ws


class DescribeAccountsCommand:
    def it_should_list_accounts_with_total(self, workspace, capsys):
        add.run(workspace=workspace, amount="1234.5", type="income", category="Gifts", write=True)
        capsys.readouterr()

        rc = accounts.run(workspace=workspace)

        out = capsys.readouterr().out
        assert rc == 0
        assert "Main Account" in out
        assert "Total balance" in out
        assert "1,234.50" in out

    def it_should_fail_without_ledger(self, tmp_path):
        assert accounts.run(workspace=Workspace(root=tmp_path)) == 1

    def it_should_report_unreadable_settings_instead_of_crashing(self, workspace, capsys):
        workspace.settings_path.write_text("first_weekday: [1, 2\n", encoding="utf-8")
        capsys.readouterr()

        rc = accounts.run(workspace=workspace)

        assert rc == 1
        assert "Cannot read settings" in capsys.readouterr().out

    def it_should_report_out_of_range_settings_instead_of_crashing(self, workspace, capsys):
        workspace.settings_path.write_text("first_weekday: 9\n", encoding="utf-8")
        capsys.readouterr()

        assert accounts.run(workspace=workspace) == 1
        assert "Error" in capsys.readouterr().out


class DescribeCategoriesCommand:
    def it_should_list_only_requested_type(self, workspace, capsys):
        capsys.readouterr()

        rc = categories.run(workspace=workspace, type="income")

        out = capsys.readouterr().out
        assert rc == 0
        assert "Salary" in out
        assert "Shopping" not in out

    def it_should_reject_unknown_type(self, workspace):
        assert categories.run(workspace=workspace, type="transfer") == 2


class DescribeTransactionsCommand:
    def it_should_list_most_recent_first(self, workspace, capsys):
        add.run(workspace=workspace, amount="1", category="Other", date="2026-01-01", note="older", write=True)
        add.run(workspace=workspace, amount="2", category="Other", date="2026-02-01", note="newer", write=True)
        capsys.readouterr()

        rc = transactions.run(workspace=workspace)

        out = capsys.readouterr().out
        assert rc == 0
        assert out.index("newer") < out.index("older")

    def it_should_honour_limit(self, workspace, capsys):
        add.run(workspace=workspace, amount="1", category="Other", date="2026-01-01", note="older", write=True)
        add.run(workspace=workspace, amount="2", category="Other", date="2026-02-01", note="newer", write=True)
        capsys.readouterr()

        transactions.run(workspace=workspace, limit=1)

        out = capsys.readouterr().out
        assert "newer" in out
        assert "older" not in out

    def it_should_report_unknown_account(self, workspace):
        assert transactions.run(workspace=workspace, account="Nope") == 1
