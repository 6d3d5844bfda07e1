from __future__ import annotations

import asyncio
from typing import Optional

from pocketledger.context import AppContext
from pocketledger.errors import LedgerError
from pocketledger.model.account import AccountType
from pocketledger.storage.queries import TransactionQuery
from pocketledger.workspace import Workspace

from .util import console, open_ledger, print_dry_run


async def _add(
    ctx: AppContext,
    name: str,
    account_type: AccountType,
    currency: str,
    write: bool,
) -> int:
    label = f"[bold]{name.strip()}[/] ({account_type.display_name}, {currency})"
    if not write:
        console.print(f"Would add account {label}")
        print_dry_run()
        return 0

    try:
        account = await ctx.bookkeeping.add_account(name, type=account_type, currency_code=currency)
    except LedgerError as e:
        console.print(f"[red]{e}[/]")
        return 1

    default = " [dim](default)[/dim]" if account.is_default else ""
    console.print(f"[green]Added account[/] {label}{default}")
    return 0


async def _remove(ctx: AppContext, key: str, write: bool) -> int:
    try:
        account = await ctx.bookkeeping.find_account(key)
    except LedgerError as e:
        console.print(f"[red]{e}[/]")
        return 1

    try:
        in_use = len(await ctx.transactions.fetch(TransactionQuery(account_id=account.id)))
    except LedgerError as e:
        console.print(f"[red]{e}[/]")
        return 1
    if in_use:
        console.print(
            f"[yellow]Warning:[/] {in_use} transaction(s) still reference '{account.name}'; "
            "they will be kept."
        )

    if not write:
        console.print(f"Would remove account [bold]{account.name}[/]")
        print_dry_run()
        return 0

    try:
        await ctx.bookkeeping.delete_account(account.id)
    except LedgerError as e:
        console.print(f"[red]{e}[/]")
        return 1

    console.print(f"[green]Removed account[/] [bold]{account.name}[/]")
    return 0


async def _set_default(ctx: AppContext, key: str, write: bool) -> int:
    try:
        account = await ctx.bookkeeping.find_account(key)
    except LedgerError as e:
        console.print(f"[red]{e}[/]")
        return 1

    if not write:
        console.print(f"Would make [bold]{account.name}[/] the default account")
        print_dry_run()
        return 0

    try:
        await ctx.bookkeeping.set_default_account(account.id)
    except LedgerError as e:
        console.print(f"[red]{e}[/]")
        return 1

    console.print(f"[green]Default account is now[/] [bold]{account.name}[/]")
    return 0


def run(
    *,
    workspace: Workspace,
    add: Optional[str] = None,
    remove: Optional[str] = None,
    set_default: Optional[str] = None,
    type: str = AccountType.checking.value,
    currency: Optional[str] = None,
    write: bool = False,
) -> int:
    """Add, remove, or choose the default account.

    Returns an exit code (0 success, 1 not found, 2 invalid input).
    Dry-run when write=False.
    """
    selected = [opt for opt in (add, remove, set_default) if opt is not None]
    if len(selected) != 1:
        console.print("[red]Specify exactly one of --add, --remove, or --set-default.[/]")
        return 2

    try:
        account_type = AccountType(type)
    except ValueError:
        choices = ", ".join(t.value for t in AccountType)
        console.print(f"[red]Unknown account type:[/] {type} (choose from {choices})")
        return 2

    if add is not None and not add.strip():
        console.print("[red]Account name cannot be blank[/]")
        return 2

    ctx = open_ledger(workspace)
    if ctx is None:
        return 1

    if add is not None:
        code = (currency or ctx.settings.default_currency).upper()
        if len(code) != 3:
            console.print(f"[red]Currency code must be 3 letters:[/] {code}")
            return 2
        return asyncio.run(_add(ctx, add, account_type, code, write))
    if remove is not None:
        return asyncio.run(_remove(ctx, remove, write))
    return asyncio.run(_set_default(ctx, set_default, write))
