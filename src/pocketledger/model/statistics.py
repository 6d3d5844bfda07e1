"""
Statistics models - derived, immutable snapshots of a time window.

Statistics are always computed from transactions (see
pocketledger.services.statistics_service) and never edited. All money and
percentage values are Decimal so that totals reconcile exactly with the
ledger.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal
from enum import StrEnum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from pocketledger.config import ALL_TIME_LOOKBACK_YEARS
from pocketledger.model.transaction import TransactionType

_ZERO = Decimal("0")


class DateInterval(BaseModel):
    """Closed time interval [start, end]."""

    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime

    @model_validator(mode="after")
    def _validate_order(self) -> DateInterval:
        if self.end < self.start:
            raise ValueError(f"Interval end ({self.end}) is before start ({self.start})")
        return self

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end


class CategoryStatistic(BaseModel):
    """Aggregate for a single category within a period."""

    model_config = ConfigDict(frozen=True)

    category_id: UUID
    category_name: str
    category_icon: str
    category_color_hex: str
    amount: Decimal
    transaction_count: int
    type: TransactionType
    percentage: Decimal = Field(
        default=_ZERO, description="Share of the type total (0-100); 0 when the total is 0"
    )


class DailyAverages(BaseModel):
    model_config = ConfigDict(frozen=True)

    average_income: Decimal = _ZERO
    average_expense: Decimal = _ZERO
    average_net_change: Decimal = _ZERO
    days_in_period: int = 0


class Statistics(BaseModel):
    """Computed statistics for a time period."""

    model_config = ConfigDict(frozen=True)

    period: DateInterval
    total_income: Decimal = _ZERO
    total_expenses: Decimal = _ZERO
    transaction_count: int = 0
    category_breakdown: list[CategoryStatistic] = Field(default_factory=list)
    daily_averages: DailyAverages = Field(default_factory=DailyAverages)

    @computed_field  # type: ignore[misc]
    @property
    def net_change(self) -> Decimal:
        return self.total_income - self.total_expenses

    @computed_field  # type: ignore[misc]
    @property
    def savings_rate(self) -> Optional[Decimal]:
        """Net change as a percentage of income; None when there was no income."""
        if self.total_income <= 0:
            return None
        return (self.total_income - self.total_expenses) / self.total_income * 100

    @property
    def is_positive(self) -> bool:
        return self.net_change >= 0

    def breakdown_for(self, transaction_type: TransactionType) -> list[CategoryStatistic]:
        return [s for s in self.category_breakdown if s.type == transaction_type]

    @classmethod
    def empty(cls, period: DateInterval) -> Statistics:
        """Statistics for a period with no transactions."""
        return cls(
            period=period,
            total_income=_ZERO,
            total_expenses=_ZERO,
            transaction_count=0,
            category_breakdown=[],
            daily_averages=DailyAverages(days_in_period=0),
        )


class StatisticsPeriod(StrEnum):
    """Named periods, each anchored at a reference moment (usually now)."""

    week = "week"
    month = "month"
    quarter = "quarter"
    year = "year"
    all_time = "all-time"

    @property
    def display_name(self) -> str:
        return {
            StatisticsPeriod.week: "This Week",
            StatisticsPeriod.month: "This Month",
            StatisticsPeriod.quarter: "This Quarter",
            StatisticsPeriod.year: "This Year",
            StatisticsPeriod.all_time: "All Time",
        }[self]

    def date_interval(
        self, reference: Optional[datetime] = None, first_weekday: int = 0
    ) -> DateInterval:
        """Resolve to [start of the unit containing reference, reference].

        Args:
            reference: Anchor moment (default: now)
            first_weekday: 0=Monday .. 6=Sunday, used for `week`

        Returns:
            DateInterval ending at the reference moment
        """
        ref = reference or datetime.now()
        midnight = ref.replace(hour=0, minute=0, second=0, microsecond=0)

        if self is StatisticsPeriod.week:
            start = midnight - timedelta(days=(ref.weekday() - first_weekday) % 7)
        elif self is StatisticsPeriod.month:
            start = midnight.replace(day=1)
        elif self is StatisticsPeriod.quarter:
            start = midnight.replace(month=3 * ((ref.month - 1) // 3) + 1, day=1)
        elif self is StatisticsPeriod.year:
            start = midnight.replace(month=1, day=1)
        else:
            # Not a true unbounded range: a fixed lookback
            start = _years_before(ref, ALL_TIME_LOOKBACK_YEARS)

        return DateInterval(start=start, end=ref)


def _years_before(moment: datetime, years: int) -> datetime:
    try:
        return moment.replace(year=moment.year - years)
    except ValueError:
        # Feb 29 in a year that has none
        return moment.replace(year=moment.year - years, day=28)


__all__ = [
    "CategoryStatistic",
    "DailyAverages",
    "DateInterval",
    "Statistics",
    "StatisticsPeriod",
]
