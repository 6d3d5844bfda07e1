from __future__ import annotations

import asyncio
from typing import Optional

from pocketledger.context import AppContext
from pocketledger.errors import LedgerError, ValidationError
from pocketledger.model.transaction import TransactionType
from pocketledger.workspace import Workspace

from .util import console, open_ledger, print_dry_run

_TYPE_CHOICES = {
    "expense": (TransactionType.expense,),
    "income": (TransactionType.income,),
    "both": (TransactionType.expense, TransactionType.income),
}


async def _add(
    ctx: AppContext,
    name: str,
    types: tuple[TransactionType, ...],
    icon: Optional[str],
    color: Optional[str],
    write: bool,
) -> int:
    applies = " & ".join(t.display_name for t in types)
    if not write:
        existing = await ctx.categories.fetch_all()
        if any(c.name.lower() == name.strip().lower() for c in existing):
            console.print(f"[red]Category '{name.strip()}' already exists[/]")
            return 2
        console.print(f"Would add category [bold]{name.strip()}[/] ({applies})")
        print_dry_run()
        return 0

    options = {}
    if icon:
        options["icon"] = icon
    if color:
        options["color_hex"] = color.lstrip("#").upper()

    try:
        category = await ctx.bookkeeping.add_category(name, types, **options)
    except ValidationError as e:
        console.print(f"[red]{e}[/]")
        return 2
    except LedgerError as e:
        console.print(f"[red]{e}[/]")
        return 1

    console.print(f"[green]Added category[/] [bold]{category.name}[/] ({applies})")
    return 0


async def _remove(ctx: AppContext, name: str, write: bool) -> int:
    try:
        category = await ctx.bookkeeping.find_category(name)
    except LedgerError as e:
        console.print(f"[red]{e}[/]")
        return 1

    if category.is_system:
        console.print(f"[red]System category '{category.name}' cannot be deleted[/]")
        return 1

    if not write:
        console.print(f"Would remove category [bold]{category.name}[/]")
        print_dry_run()
        return 0

    try:
        await ctx.bookkeeping.delete_category(category.id)
    except LedgerError as e:
        console.print(f"[red]{e}[/]")
        return 1

    console.print(f"[green]Removed category[/] [bold]{category.name}[/]")
    return 0


def run(
    *,
    workspace: Workspace,
    add: Optional[str] = None,
    remove: Optional[str] = None,
    type: str = "expense",
    icon: Optional[str] = None,
    color: Optional[str] = None,
    write: bool = False,
) -> int:
    """Add or remove a user category. System categories cannot be removed.

    Returns an exit code (0 success, 1 not found/protected, 2 invalid input).
    Dry-run when write=False.
    """
    if (add is None) == (remove is None):
        console.print("[red]Specify exactly one of --add or --remove.[/]")
        return 2

    types = _TYPE_CHOICES.get(type.lower())
    if types is None:
        console.print(f"[red]Unknown type:[/] {type} (expected expense, income, or both)")
        return 2

    if add is not None and not add.strip():
        console.print("[red]Category name cannot be blank[/]")
        return 2

    ctx = open_ledger(workspace)
    if ctx is None:
        return 1

    if add is not None:
        return asyncio.run(_add(ctx, add, types, icon, color, write))
    return asyncio.run(_remove(ctx, remove, write))
