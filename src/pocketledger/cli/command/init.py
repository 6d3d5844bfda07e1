"""Initialize a new pocketledger workspace directory."""

from __future__ import annotations

import asyncio

from pydantic import ValidationError

from pocketledger.context import AppContext
from pocketledger.errors import LedgerError
from pocketledger.workspace import Workspace

from .util import console

_STARTER_SETTINGS_YML = """\
# PocketLedger settings
#
# default_currency: currency code used for newly created accounts
# first_weekday: first day of the week for 'stats --period week' (0=Monday .. 6=Sunday)
# debounce_delay: seconds of quiet before debounced input is applied
# throttle_interval: minimum seconds between throttled actions

default_currency: USD
first_weekday: 0
debounce_delay: 0.1
throttle_interval: 0.05
"""


def run(*, workspace: Workspace) -> int:
    """Initialize a workspace: directories, starter settings and seeded ledger.

    Skips anything that already exists (safe to run on an existing workspace).

    Args:
        workspace: Workspace to initialize

    Returns:
        Exit code (0 = success)
    """
    root = workspace.root
    console.print(f"[bold cyan]Initializing workspace:[/] {root}\n")

    created = []
    skipped = []

    for directory in workspace.directories:
        label = str(directory.relative_to(root)) + "/"
        if directory.exists():
            skipped.append(label)
        else:
            directory.mkdir(parents=True, exist_ok=True)
            created.append(label)

    settings_path = workspace.settings_path
    if settings_path.exists():
        skipped.append(str(settings_path.relative_to(root)))
    else:
        settings_path.write_text(_STARTER_SETTINGS_YML, encoding="utf-8")
        created.append(str(settings_path.relative_to(root)))

    try:
        ctx = AppContext.open(workspace)
        seeded = asyncio.run(ctx.bookkeeping.ensure_seeded(ctx.settings.default_currency))
    except (LedgerError, ValidationError) as e:
        console.print(f"[red]Error:[/red] {e}")
        return 1

    if seeded.account_created:
        created.append("default account 'Main Account'")
    if seeded.categories_seeded:
        created.append("default categories")

    if created:
        console.print("[green]Created:[/]")
        for item in created:
            console.print(f"  {item}")

    if skipped:
        console.print("[dim]Already exists (skipped):[/dim]")
        for item in skipped:
            console.print(f"  [dim]{item}[/dim]")

    if not created:
        console.print("[green]Workspace already fully initialized.[/]")
    else:
        console.print(f"\n[green]Workspace ready at {root}[/]")
        console.print("\n[dim]Next steps:[/dim]")
        console.print('  1. Run: pocketledger add --amount 12.50 --category "Food & Dining" --write')
        console.print("  2. Run: pocketledger stats --period month")

    return 0
