"""
Where a PocketLedger workspace keeps its files.

    <root>/
      data/ledger.db          accounts, categories, transactions
      config/settings.yml     currency, week start, input timing
      exports/                CSV exports

The root comes from --data-dir, else $POCKETLEDGER_DATA, else the CWD.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENV_VAR = "POCKETLEDGER_DATA"


@dataclass
class Workspace:
    root: Path

    @classmethod
    def resolve(cls, explicit: Path | None = None) -> Workspace:
        """Pick the workspace root; an explicit path beats the environment."""
        if explicit is None:
            explicit = Path(os.environ[ENV_VAR]) if os.environ.get(ENV_VAR) else Path.cwd()
        return cls(root=explicit)

    @property
    def ledger_db_path(self) -> Path:
        return self.root / "data" / "ledger.db"

    @property
    def settings_path(self) -> Path:
        return self.root / "config" / "settings.yml"

    @property
    def exports_dir(self) -> Path:
        return self.root / "exports"

    @property
    def directories(self) -> list[Path]:
        """Directories `init` creates, in creation order."""
        return [self.ledger_db_path.parent, self.settings_path.parent, self.exports_dir]


__all__ = ["Workspace", "ENV_VAR"]
