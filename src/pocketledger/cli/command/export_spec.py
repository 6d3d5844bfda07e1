from __future__ import annotations

"""
Tests for export command.
"""

from datetime import date

from pocketledger.cli.command import add, init
from pocketledger.cli.command.export import run
from pocketledger.workspace import Workspace


class DescribeExport:
    def it_should_write_csv_into_exports_dir(self, tmp_path):
        workspace = Workspace(root=tmp_path)
        init.run(workspace=workspace)
        add.run(
            workspace=workspace,
            amount="3.20",
            category="Food & Dining",
            date="2026-01-07T09:30:00",
            note="Coffee, croissant",
            write=True,
        )

        rc = run(workspace=workspace)

        assert rc == 0
        path = workspace.exports_dir / f"PocketLedger_Export_{date.today().isoformat()}.csv"
        assert path.read_text(encoding="utf-8") == (
            "Date,Amount,Type,Note\n2026-01-07 09:30:00,3.20,Expense,Coffee; croissant\n"
        )

    def it_should_skip_empty_ledger(self, tmp_path):
        workspace = Workspace(root=tmp_path)
        init.run(workspace=workspace)

        assert run(workspace=workspace) == 0
        assert list(workspace.exports_dir.iterdir()) == []
