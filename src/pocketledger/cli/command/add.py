from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Optional

from rich.table import Table

from pocketledger.context import AppContext
from pocketledger.errors import InvalidAmountError, LedgerError, NotFoundError
from pocketledger.model.transaction import TransactionType
from pocketledger.services.ledger_service import validate_amount
from pocketledger.workspace import Workspace

from .util import console, fmt_amount, open_ledger, print_dry_run


def _parse_when(value: Optional[str]) -> datetime:
    if not value:
        return datetime.now()
    return datetime.fromisoformat(value)


async def _add(
    ctx: AppContext,
    amount,
    txn_type: TransactionType,
    category: str,
    account: Optional[str],
    when: datetime,
    note: str,
    write: bool,
) -> int:
    try:
        target_category = await ctx.bookkeeping.find_category(category, txn_type)
        target_account = await ctx.bookkeeping.find_account(account)
    except NotFoundError as e:
        console.print(f"[red]{e}[/] (for {txn_type.display_name.lower()} transactions)")
        return 1

    signed = amount * txn_type.balance_multiplier

    table = Table(title="New Transaction", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Date", when.strftime("%Y-%m-%d %H:%M"))
    table.add_row("Type", txn_type.display_name)
    table.add_row("Category", target_category.name)
    table.add_row("Account", target_account.name)
    table.add_row("Amount", fmt_amount(signed))
    table.add_row("Note", note or "—")
    console.print(table)

    if not write:
        console.print("Balance after: ", fmt_amount(target_account.balance + signed))
        print_dry_run()
        return 0

    try:
        txn = await ctx.ledger.add_transaction(
            amount, txn_type, target_category.id, target_account.id, when, note
        )
    except LedgerError as e:
        console.print(f"[red]Could not add transaction:[/] {e}")
        return 1

    updated = await ctx.accounts.fetch_by_id(target_account.id)
    console.print(f"[green]Added transaction[/] {str(txn.id)[:8]}")
    console.print(f"{updated.name} balance: ", fmt_amount(updated.balance))
    return 0


def run(
    *,
    workspace: Workspace,
    amount: str,
    type: str = "expense",
    category: str,
    account: Optional[str] = None,
    date: Optional[str] = None,
    note: str = "",
    write: bool = False,
) -> int:
    """Record an income or expense and update the account balance.

    Category and account are given by name, id, or id prefix; the default
    account is used when none is given. Dry-run when write=False.

    Returns an exit code (0 success, 1 not found or failed write, 2 invalid input).
    """
    try:
        txn_type = TransactionType(type.lower())
    except ValueError:
        console.print(f"[red]Unknown type:[/] {type} (expected 'income' or 'expense')")
        return 2

    try:
        value = validate_amount(amount)
    except InvalidAmountError as e:
        console.print(f"[red]{e}[/]")
        return 2

    try:
        when = _parse_when(date)
    except ValueError:
        console.print(f"[red]Invalid date:[/] {date} (use YYYY-MM-DD or YYYY-MM-DDTHH:MM)")
        return 2

    ctx = open_ledger(workspace)
    if ctx is None:
        return 1

    return asyncio.run(
        _add(ctx, value, txn_type, category, account, when, note, write)
    )
