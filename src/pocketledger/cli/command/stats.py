from __future__ import annotations

import asyncio
from datetime import datetime
from decimal import Decimal
from typing import Optional

from rich.table import Table
from rich.text import Text

from pocketledger.model.statistics import Statistics, StatisticsPeriod
from pocketledger.workspace import Workspace

from .util import console, fmt_amount, fmt_percent, open_ledger


def _outflow(amount: Decimal) -> Text:
    return fmt_amount(-amount if amount else amount)


def _summary_table(stats: Statistics, title: str) -> Table:
    table = Table(title=title, show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    averages = stats.daily_averages
    table.add_row("Income", fmt_amount(stats.total_income))
    table.add_row("Expenses", _outflow(stats.total_expenses))
    table.add_row("Net change", fmt_amount(stats.net_change))
    table.add_row("Savings rate", fmt_percent(stats.savings_rate))
    table.add_row("Transactions", str(stats.transaction_count))
    table.add_row("Days", str(averages.days_in_period))
    table.add_row("Avg income / day", fmt_amount(averages.average_income))
    table.add_row("Avg expense / day", _outflow(averages.average_expense))
    return table


def _breakdown_table(stats: Statistics) -> Table:
    table = Table(title="By Category", show_header=True, header_style="bold")
    table.add_column("Category", style="cyan")
    table.add_column("Type", style="white")
    table.add_column("Count", justify="right")
    table.add_column("Amount", justify="right")
    table.add_column("Share", justify="right")

    for stat in stats.category_breakdown:
        table.add_row(
            f"[#{stat.category_color_hex}]●[/] {stat.category_name}",
            stat.type.display_name,
            str(stat.transaction_count),
            fmt_amount(stat.amount * stat.type.balance_multiplier),
            fmt_percent(stat.percentage),
        )
    return table


def run(
    *,
    workspace: Workspace,
    period: str = "month",
    reference: Optional[datetime] = None,
) -> int:
    """Show income, expenses, savings rate and category breakdown for a period.

    Returns an exit code (0 success, 1 missing ledger, 2 unknown period).
    """
    try:
        named = StatisticsPeriod(period.lower())
    except ValueError:
        choices = ", ".join(p.value for p in StatisticsPeriod)
        console.print(f"[red]Unknown period:[/] {period} (choose from {choices})")
        return 2

    ctx = open_ledger(workspace)
    if ctx is None:
        return 1

    stats = asyncio.run(ctx.statistics.get_statistics(named, reference=reference))

    start = stats.period.start.strftime("%Y-%m-%d")
    end = stats.period.end.strftime("%Y-%m-%d")
    console.print(_summary_table(stats, f"{named.display_name} ({start} to {end})"))

    if stats.category_breakdown:
        console.print(_breakdown_table(stats))
    else:
        console.print("[dim]No transactions in this period.[/dim]")
    return 0
