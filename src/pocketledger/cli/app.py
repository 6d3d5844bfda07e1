from __future__ import annotations

"""
PocketLedger CLI Wrapper (Typer + Rich)

Local-only personal ledger: transactions, running account balances and
period statistics.

All paths are resolved from a single workspace root:
  --data-dir / POCKETLEDGER_DATA env var / current working directory
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.logging import RichHandler

from pocketledger.workspace import ENV_VAR, Workspace

HELP_WRITE = "Persist changes (default: dry-run)"

APP_HELP = "PocketLedger CLI (local-only)"
HELP_ACCOUNT = "Account name, ID, or ID prefix (default: the default account)"

app = typer.Typer(no_args_is_help=True, add_completion=False, help=APP_HELP)


def _configure_logging(verbose: bool) -> None:
    from pocketledger.cli.command.util import console

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, rich_tracebacks=verbose)],
    )


@app.callback()
def main(
    ctx: typer.Context,
    data_dir: Optional[Path] = typer.Option(
        None,
        "--data-dir",
        envvar=ENV_VAR,
        help="Workspace root directory (default: current directory)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """PocketLedger CLI — all paths resolved from a single workspace root."""
    _configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["workspace"] = Workspace.resolve(data_dir)


def _ws(ctx: typer.Context) -> Workspace:
    return ctx.obj["workspace"]


@app.command()
def init(ctx: typer.Context):
    """Initialize a new workspace: directories, starter settings, default account and categories.

    Safe to run on an existing workspace — skips anything that already exists.

    Examples:
      pocketledger --data-dir ~/ledger init
      pocketledger init
    """
    from pocketledger.cli.command import init as cmd_init

    code = cmd_init.run(workspace=_ws(ctx))
    raise typer.Exit(code=code)


@app.command()
def accounts(ctx: typer.Context):
    """List accounts with balances and the total balance."""
    from pocketledger.cli.command import accounts as cmd_accounts

    code = cmd_accounts.run(workspace=_ws(ctx))
    raise typer.Exit(code=code)


@app.command()
def categories(
    ctx: typer.Context,
    type: Optional[str] = typer.Option(None, "--type", "-t", help="Only categories for 'income' or 'expense'"),
):
    """List categories."""
    from pocketledger.cli.command import categories as cmd_categories

    code = cmd_categories.run(workspace=_ws(ctx), type=type)
    raise typer.Exit(code=code)


@app.command()
def add(
    ctx: typer.Context,
    amount: str = typer.Option(..., "--amount", "-m", help="Positive amount, e.g. 12.50"),
    type: str = typer.Option("expense", "--type", "-t", help="income or expense"),
    category: str = typer.Option(..., "--category", "-c", help="Category name, ID, or ID prefix"),
    account: Optional[str] = typer.Option(None, "--account", "-a", help=HELP_ACCOUNT),
    date: Optional[str] = typer.Option(None, "--date", "-d", help="ISO date/time (default: now)"),
    note: str = typer.Option("", "--note", "-n", help="Free-text note"),
    write: bool = typer.Option(False, "--write", help=HELP_WRITE),
):
    """Record an income or expense and update the account balance.

    Examples:
      pocketledger add --amount 12.50 --category "Food & Dining" --note Lunch --write
      pocketledger add -m 2500 -t income -c Salary -d 2026-03-01 --write

    Safety: dry-run by default. Use --write to persist changes.
    """
    from pocketledger.cli.command import add as cmd_add

    code = cmd_add.run(
        workspace=_ws(ctx),
        amount=amount,
        type=type,
        category=category,
        account=account,
        date=date,
        note=note,
        write=write,
    )
    raise typer.Exit(code=code)


@app.command()
def delete(
    ctx: typer.Context,
    txid: str = typer.Argument(..., help="Transaction ID prefix (at least 8 characters)"),
    write: bool = typer.Option(False, "--write", help=HELP_WRITE),
):
    """Delete a transaction and reverse its effect on the account balance.

    Examples:
      pocketledger delete 1a2b3c4d --write

    Safety: dry-run by default. Use --write to persist changes.
    """
    from pocketledger.cli.command import delete as cmd_delete

    code = cmd_delete.run(workspace=_ws(ctx), txid=txid, write=write)
    raise typer.Exit(code=code)


@app.command()
def transactions(
    ctx: typer.Context,
    account: Optional[str] = typer.Option(None, "--account", "-a", help="Account name, ID, or ID prefix (omit for all accounts)"),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", min=1, help="Max number of rows to show"),
):
    """Show transactions, most recent first."""
    from pocketledger.cli.command import transactions as cmd_transactions

    code = cmd_transactions.run(workspace=_ws(ctx), account=account, limit=limit)
    raise typer.Exit(code=code)


@app.command()
def stats(
    ctx: typer.Context,
    period: str = typer.Option("month", "--period", "-p", help="week, month, quarter, year, or all-time"),
):
    """Show totals, savings rate, daily averages and category breakdown for a period.

    Examples:
      pocketledger stats
      pocketledger stats --period all-time
    """
    from pocketledger.cli.command import stats as cmd_stats

    code = cmd_stats.run(workspace=_ws(ctx), period=period)
    raise typer.Exit(code=code)


@app.command()
def export(ctx: typer.Context):
    """Export all transactions as CSV into the workspace exports/ directory."""
    from pocketledger.cli.command import export as cmd_export

    code = cmd_export.run(workspace=_ws(ctx))
    raise typer.Exit(code=code)


@app.command()
def category(
    ctx: typer.Context,
    add: Optional[str] = typer.Option(None, "--add", help="Add a new category"),
    remove: Optional[str] = typer.Option(None, "--remove", help="Remove a user category"),
    type: str = typer.Option("expense", "--type", "-t", help="Applies to: expense, income, or both"),
    icon: Optional[str] = typer.Option(None, "--icon", help="Symbol name for the new category"),
    color: Optional[str] = typer.Option(None, "--color", help="Hex colour for the new category, e.g. 3498DB"),
    write: bool = typer.Option(False, "--write", help=HELP_WRITE),
):
    """Manage categories: add or remove.

    Examples:
      pocketledger category --add "Pets" --write
      pocketledger category --add "Side Gig" --type income --write
      pocketledger category --remove "Pets" --write

    Safety: dry-run by default. Use --write to persist changes.
    """
    from pocketledger.cli.command import category as cmd_category

    code = cmd_category.run(
        workspace=_ws(ctx),
        add=add,
        remove=remove,
        type=type,
        icon=icon,
        color=color,
        write=write,
    )
    raise typer.Exit(code=code)


@app.command()
def account(
    ctx: typer.Context,
    add: Optional[str] = typer.Option(None, "--add", help="Add a new account"),
    remove: Optional[str] = typer.Option(None, "--remove", help="Remove an account"),
    set_default: Optional[str] = typer.Option(None, "--set-default", help="Make an account the default"),
    type: str = typer.Option("checking", "--type", "-t", help="checking, savings, cash, creditCard, or investment"),
    currency: Optional[str] = typer.Option(None, "--currency", help="Currency code (default: from settings)"),
    write: bool = typer.Option(False, "--write", help=HELP_WRITE),
):
    """Manage accounts: add, remove, or choose the default.

    Examples:
      pocketledger account --add "Wallet" --type cash --write
      pocketledger account --set-default "Wallet" --write

    Safety: dry-run by default. Use --write to persist changes.
    """
    from pocketledger.cli.command import account as cmd_account

    code = cmd_account.run(
        workspace=_ws(ctx),
        add=add,
        remove=remove,
        set_default=set_default,
        type=type,
        currency=currency,
        write=write,
    )
    raise typer.Exit(code=code)


if __name__ == "__main__":
    app()  # pragma: no cover
