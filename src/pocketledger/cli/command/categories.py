from __future__ import annotations

import asyncio
from typing import Optional

from rich.table import Table

from pocketledger.model.transaction import TransactionType
from pocketledger.workspace import Workspace

from .util import console, open_ledger, short_id


def run(*, workspace: Workspace, type: Optional[str] = None) -> int:
    """List categories, optionally only those applicable to one transaction type.

    Returns an exit code (0 success, 1 missing ledger, 2 invalid type).
    """
    txn_type = None
    if type is not None:
        try:
            txn_type = TransactionType(type.lower())
        except ValueError:
            console.print(f"[red]Unknown type:[/] {type} (expected 'income' or 'expense')")
            return 2

    ctx = open_ledger(workspace)
    if ctx is None:
        return 1

    store = ctx.categories
    categories = asyncio.run(
        store.fetch_for_type(txn_type) if txn_type is not None else store.fetch_all()
    )
    if not categories:
        console.print("[yellow]No categories defined.[/] Run 'pocketledger init' to seed defaults.")
        return 0

    table = Table(title="Categories", show_lines=False)
    table.add_column("ID", style="blue", no_wrap=True)
    table.add_column("Name", style="cyan")
    table.add_column("Applies To", style="white")
    table.add_column("Color", style="dim")
    table.add_column("System", justify="center")

    for category in categories:
        applies = ", ".join(
            t.display_name for t in TransactionType if category.applies_to(t)
        )
        table.add_row(
            short_id(category.id),
            category.name,
            applies,
            f"[#{category.color_hex}]#{category.color_hex}[/]",
            "✓" if category.is_system else "",
        )

    console.print(table)
    return 0
