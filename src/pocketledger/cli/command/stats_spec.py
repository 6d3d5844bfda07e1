from __future__ import annotations

"""
Tests for stats command.
"""

from datetime import datetime

import pytest

from pocketledger.cli.command import add, init
from pocketledger.cli.command.stats import run
from pocketledger.workspace import Workspace


@pytest.fixture
def workspace(tmp_path):
    ws = Workspace(root=tmp_path)
    init.run(workspace=ws)
    add.run(workspace=ws, amount="1000", type="income", category="Salary", date="2026-03-01", write=True)
    add.run(workspace=ws, amount="250", category="Food & Dining", date="2026-03-05", write=True)
    return ws


class DescribeStats:
    def it_should_print_totals_and_breakdown(self, workspace, capsys):
        rc = run(workspace=workspace, period="month", reference=datetime(2026, 3, 20))

        out = capsys.readouterr().out
        assert rc == 0
        assert "1,000.00" in out
        assert "75.0%" in out
        assert "Food & Dining" in out

    def it_should_report_empty_period(self, workspace, capsys):
        rc = run(workspace=workspace, period="week", reference=datetime(2026, 3, 20))

        assert rc == 0
        assert "No transactions in this period" in capsys.readouterr().out

    def it_should_accept_all_time(self, workspace):
        assert run(workspace=workspace, period="all-time") == 0

    def it_should_reject_unknown_period(self, workspace):
        assert run(workspace=workspace, period="fortnight") == 2
