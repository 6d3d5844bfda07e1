from __future__ import annotations

from pathlib import Path

from pocketledger.workspace import Workspace


class DescribeWorkspace:
    class DescribeResolve:
        def it_should_use_explicit_path_when_provided(self):
            ws = Workspace.resolve(explicit=Path("/tmp/my-ledger"))
            assert ws.root == Path("/tmp/my-ledger")

        def it_should_use_env_var_when_set(self, monkeypatch):
            monkeypatch.setenv("POCKETLEDGER_DATA", "/tmp/env-ledger")
            ws = Workspace.resolve()
            assert ws.root == Path("/tmp/env-ledger")

        def it_should_prefer_explicit_over_env_var(self, monkeypatch):
            monkeypatch.setenv("POCKETLEDGER_DATA", "/tmp/env-ledger")
            ws = Workspace.resolve(explicit=Path("/tmp/explicit"))
            assert ws.root == Path("/tmp/explicit")

        def it_should_fall_back_to_cwd_when_no_env_var(self, monkeypatch):
            monkeypatch.delenv("POCKETLEDGER_DATA", raising=False)
            ws = Workspace.resolve()
            assert ws.root == Path.cwd()

    class DescribePaths:
        def it_should_compute_ledger_db_path(self):
            ws = Workspace(root=Path("/data"))
            assert ws.ledger_db_path == Path("/data/data/ledger.db")

        def it_should_compute_settings_path(self):
            ws = Workspace(root=Path("/data"))
            assert ws.settings_path == Path("/data/config/settings.yml")

        def it_should_compute_exports_dir(self):
            ws = Workspace(root=Path("/data"))
            assert ws.exports_dir == Path("/data/exports")

        def it_should_list_directories_created_by_init(self):
            ws = Workspace(root=Path("/data"))
            assert ws.directories == [
                Path("/data/data"),
                Path("/data/config"),
                Path("/data/exports"),
            ]
