from __future__ import annotations

import asyncio
from typing import Optional

from rich.table import Table

from pocketledger.context import AppContext
from pocketledger.errors import NotFoundError
from pocketledger.storage.queries import TransactionQuery
from pocketledger.workspace import Workspace

from .util import console, fmt_amount, open_ledger, short_id


async def _render(ctx: AppContext, account: Optional[str], limit: Optional[int]) -> int:
    account_id = None
    if account is not None:
        try:
            account_id = (await ctx.bookkeeping.find_account(account)).id
        except NotFoundError as e:
            console.print(f"[red]{e}[/]")
            return 1

    transactions = await ctx.transactions.fetch(
        TransactionQuery(account_id=account_id, limit=limit)
    )
    if not transactions:
        console.print("[yellow]No transactions recorded.[/]")
        return 0

    names = {c.id: c.name for c in await ctx.categories.fetch_all()}

    table = Table(title="Transactions", show_lines=False)
    table.add_column("TxnID", style="blue", no_wrap=True)
    table.add_column("Date", style="white", no_wrap=True)
    table.add_column("Type", style="white")
    table.add_column("Category", style="cyan")
    table.add_column("Amount", justify="right")
    table.add_column("Note", style="dim")

    for txn in transactions:
        table.add_row(
            short_id(txn.id),
            txn.date.strftime("%Y-%m-%d %H:%M"),
            txn.type.display_name,
            names.get(txn.category_id, "Unknown"),
            fmt_amount(txn.signed_amount),
            txn.note[:40],
        )

    console.print(table)
    return 0


def run(
    *,
    workspace: Workspace,
    account: Optional[str] = None,
    limit: Optional[int] = None,
) -> int:
    """Show transactions, most recent first, optionally for one account.

    Returns an exit code (0 success, 1 missing ledger or unknown account).
    """
    ctx = open_ledger(workspace)
    if ctx is None:
        return 1
    return asyncio.run(_render(ctx, account, limit))
