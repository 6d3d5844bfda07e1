from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from typing import Optional

from pydantic import ValidationError
from rich.console import Console
from rich.text import Text

from pocketledger.context import AppContext
from pocketledger.errors import LedgerError
from pocketledger.model.transaction import Transaction
from pocketledger.workspace import Workspace

console = Console()

# Shortest transaction id prefix accepted on the command line
MIN_ID_PREFIX = 8


def fmt_amount(amt: Decimal) -> Text:
    s = f"{amt:,.2f}"
    if amt < 0:
        return Text(s, style="bold red")
    elif amt > 0:
        return Text(s, style="bold green")
    return Text(s)


def fmt_percent(value: Optional[Decimal]) -> str:
    return "—" if value is None else f"{value:.1f}%"


def short_id(record_id) -> str:
    return str(record_id)[:MIN_ID_PREFIX]


def open_ledger(workspace: Workspace) -> Optional[AppContext]:
    """Open the workspace ledger, or report why it cannot be opened."""
    if not workspace.ledger_db_path.exists():
        console.print(f"[red]Error:[/red] Ledger database not found: {workspace.ledger_db_path}")
        console.print("[yellow]Run 'pocketledger init' first.[/yellow]")
        return None
    try:
        return AppContext.open(workspace)
    except (LedgerError, ValidationError) as e:
        console.print(f"[red]Error:[/red] {e}")
        return None


def match_transactions(transactions: Sequence[Transaction], prefix: str) -> list[Transaction]:
    p = prefix.strip().lower()
    return [t for t in transactions if str(t.id).startswith(p)]


def print_dry_run() -> None:
    console.print("[dim]Dry-run: use --write to persist changes.[/dim]")
