from __future__ import annotations

import asyncio

from pocketledger.context import AppContext
from pocketledger.errors import LedgerError
from pocketledger.workspace import Workspace

from .util import (
    MIN_ID_PREFIX,
    console,
    fmt_amount,
    match_transactions,
    open_ledger,
    print_dry_run,
    short_id,
)


async def _delete(ctx: AppContext, prefix: str, write: bool) -> int:
    matches = match_transactions(await ctx.transactions.fetch_all(), prefix)

    if not matches:
        console.print(f"[red]No transaction found[/] matching prefix [bold]{prefix}[/].")
        return 1

    if len(matches) > 1:
        sample = "; ".join(
            f"{t.date:%Y-%m-%d} id={short_id(t.id)} amt={t.signed_amount}" for t in matches[:5]
        )
        console.print(
            f"[yellow]Ambiguous prefix[/] [bold]{prefix}[/]: matches {len(matches)} transactions. "
            f"Examples: {sample}"
        )
        console.print("Refine the id with more characters to disambiguate.")
        return 2

    txn = matches[0]
    console.print(
        f"{txn.date:%Y-%m-%d} {txn.type.display_name} ",
        fmt_amount(txn.signed_amount),
        f" {txn.note}".rstrip(),
    )

    if not write:
        console.print("Would reverse ", fmt_amount(-txn.signed_amount), " on its account.")
        print_dry_run()
        return 0

    try:
        await ctx.ledger.delete_transaction(txn.id)
    except LedgerError as e:
        console.print(f"[red]Could not delete transaction:[/] {e}")
        return 1

    console.print(f"[green]Deleted transaction[/] {short_id(txn.id)}")
    return 0


def run(*, workspace: Workspace, txid: str, write: bool = False) -> int:
    """Delete one transaction by id prefix and reverse its balance effect.

    Returns an exit code (0 success, 1 not found or failed write, 2 bad/ambiguous prefix).
    Dry-run when write=False.
    """
    prefix = (txid or "").strip().lower()
    if len(prefix) < MIN_ID_PREFIX:
        console.print(f"[red]Transaction id must be at least {MIN_ID_PREFIX} characters.[/]")
        return 2

    ctx = open_ledger(workspace)
    if ctx is None:
        return 1
    return asyncio.run(_delete(ctx, prefix, write))
