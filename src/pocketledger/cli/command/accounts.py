from __future__ import annotations

import asyncio

from rich.table import Table

from pocketledger.context import AppContext
from pocketledger.workspace import Workspace

from .util import console, fmt_amount, open_ledger, short_id


async def _render(ctx: AppContext) -> int:
    accounts = await ctx.accounts.fetch_all()
    if not accounts:
        console.print("[yellow]No accounts found.[/] Run 'pocketledger init' to create one.")
        return 1

    table = Table(title="Accounts", show_lines=False)
    table.add_column("ID", style="blue", no_wrap=True)
    table.add_column("Name", style="cyan")
    table.add_column("Type", style="white")
    table.add_column("Currency", style="white")
    table.add_column("Balance", justify="right")
    table.add_column("In Total", justify="center")

    for account in accounts:
        table.add_row(
            short_id(account.id),
            f"{account.name} ★" if account.is_default else account.name,
            account.type.display_name,
            account.currency_code,
            fmt_amount(account.balance),
            "✓" if account.include_in_total else "",
        )

    console.print(table)
    console.print("Total balance: ", fmt_amount(await ctx.accounts.total_balance()))
    return 0


def run(*, workspace: Workspace) -> int:
    """List accounts with their running balances.

    Returns an exit code (0 success, 1 when the ledger is missing or empty).
    """
    ctx = open_ledger(workspace)
    if ctx is None:
        return 1
    return asyncio.run(_render(ctx))
