from __future__ import annotations

import asyncio

from pocketledger.errors import StorageError
from pocketledger.workspace import Workspace

from .util import console, open_ledger


def run(*, workspace: Workspace) -> int:
    """Write all transactions as CSV into the workspace exports/ directory.

    Returns an exit code (0 success or nothing to export, 1 failure).
    """
    ctx = open_ledger(workspace)
    if ctx is None:
        return 1

    try:
        path = asyncio.run(ctx.exporter.export_to(workspace.exports_dir))
    except StorageError as e:
        console.print(f"[red]Export failed:[/] {e}")
        return 1

    if path is None:
        console.print("[yellow]No transactions to export.[/]")
        return 0

    console.print(f"[green]Exported ledger to[/] {path}")
    return 0
