from __future__ import annotations

"""
Statistics Service - aggregate reports over a time window.

Provides period totals, a per-category breakdown with percentages, daily
averages and the savings rate. Reads transactions and categories; never
writes.
"""

import logging
from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal
from typing import Optional, Union
from uuid import UUID

from pocketledger.config import (
    UNKNOWN_CATEGORY_COLOR,
    UNKNOWN_CATEGORY_ICON,
    UNKNOWN_CATEGORY_NAME,
)
from pocketledger.model.category import Category
from pocketledger.model.statistics import (
    CategoryStatistic,
    DailyAverages,
    DateInterval,
    Statistics,
    StatisticsPeriod,
)
from pocketledger.model.transaction import Transaction, TransactionType
from pocketledger.storage.category_store import CategoryStore
from pocketledger.storage.transaction_store import TransactionStore

logger = logging.getLogger(__name__)

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")


def days_in_period(period: DateInterval) -> int:
    """Whole days spanned by the period, never less than 1."""
    return max(period.duration.days, 1)


def percentage_of(amount: Decimal, total: Decimal) -> Decimal:
    return amount / total * _HUNDRED if total > 0 else _ZERO


def compute_category_breakdown(
    transactions: Iterable[Transaction],
    categories: dict[UUID, Category],
    total_income: Decimal,
    total_expenses: Decimal,
) -> list[CategoryStatistic]:
    """Group transactions by category, largest amount first.

    A category's type is taken from its transactions; a category id is
    assumed to be used with one type only.
    """
    totals: dict[UUID, tuple[Decimal, int, TransactionType]] = {}
    for txn in transactions:
        amount, count, _ = totals.get(txn.category_id, (_ZERO, 0, txn.type))
        totals[txn.category_id] = (amount + txn.amount, count + 1, txn.type)

    breakdown = []
    for category_id, (amount, count, txn_type) in totals.items():
        category = categories.get(category_id)
        type_total = total_income if txn_type == TransactionType.income else total_expenses
        breakdown.append(
            CategoryStatistic(
                category_id=category_id,
                category_name=category.name if category else UNKNOWN_CATEGORY_NAME,
                category_icon=category.icon if category else UNKNOWN_CATEGORY_ICON,
                category_color_hex=category.color_hex if category else UNKNOWN_CATEGORY_COLOR,
                amount=amount,
                transaction_count=count,
                type=txn_type,
                percentage=percentage_of(amount, type_total),
            )
        )

    # sorted() is stable, so equal amounts keep first-seen order
    return sorted(breakdown, key=lambda s: s.amount, reverse=True)


def compute_statistics(
    period: DateInterval,
    transactions: list[Transaction],
    categories: Iterable[Category],
) -> Statistics:
    """Pure aggregation over already-fetched records."""
    if not transactions:
        return Statistics.empty(period)

    total_income = sum(
        (t.amount for t in transactions if t.type == TransactionType.income), _ZERO
    )
    total_expenses = sum(
        (t.amount for t in transactions if t.type == TransactionType.expense), _ZERO
    )

    lookup = {c.id: c for c in categories}
    breakdown = compute_category_breakdown(transactions, lookup, total_income, total_expenses)

    days = days_in_period(period)
    averages = DailyAverages(
        average_income=total_income / days,
        average_expense=total_expenses / days,
        average_net_change=(total_income - total_expenses) / days,
        days_in_period=days,
    )

    return Statistics(
        period=period,
        total_income=total_income,
        total_expenses=total_expenses,
        transaction_count=len(transactions),
        category_breakdown=breakdown,
        daily_averages=averages,
    )


class StatisticsService:
    """Service for period statistics."""

    def __init__(
        self,
        transactions: TransactionStore,
        categories: CategoryStore,
        first_weekday: int = 0,
    ):
        """
        Initialize the statistics service.

        Args:
            transactions: Store to read transactions from
            categories: Store to read category labels from
            first_weekday: 0=Monday .. 6=Sunday, used to resolve "week"
        """
        self._transactions = transactions
        self._categories = categories
        self.first_weekday = first_weekday

    async def get_statistics(
        self,
        period: Union[DateInterval, StatisticsPeriod],
        reference: Optional[datetime] = None,
    ) -> Statistics:
        """
        Compute statistics for an interval or a named period.

        Args:
            period: Concrete [start, end] interval, or a StatisticsPeriod
                resolved against `reference`
            reference: Anchor for named periods (default: now); ignored for
                concrete intervals

        Returns:
            Statistics for the period (Statistics.empty when nothing matched)
        """
        if isinstance(period, StatisticsPeriod):
            period = period.date_interval(reference, first_weekday=self.first_weekday)

        transactions = await self._transactions.fetch_in_period(period)
        if not transactions:
            logger.debug("No transactions between %s and %s", period.start, period.end)
            return Statistics.empty(period)

        categories = await self._categories.fetch_all()
        return compute_statistics(period, transactions, categories)


__all__ = [
    "StatisticsService",
    "compute_category_breakdown",
    "compute_statistics",
    "days_in_period",
]
