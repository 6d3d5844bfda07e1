"""
Explicit filters for record store fetches.

Each query renders to a SQL WHERE clause plus parameters. Unset fields do
not filter; set fields are combined with AND.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from pocketledger.model.statistics import DateInterval
from pocketledger.model.transaction import TransactionType, format_timestamp


def _where(clauses: list[str]) -> str:
    return f"WHERE {' AND '.join(clauses)}" if clauses else ""


@dataclass(frozen=True)
class TransactionQuery:
    """Filter for TransactionStore.fetch()."""

    id: Optional[UUID] = None
    period: Optional[DateInterval] = None  # inclusive on both ends
    account_id: Optional[UUID] = None
    category_id: Optional[UUID] = None
    type: Optional[TransactionType] = None
    limit: Optional[int] = None

    def to_sql(self) -> tuple[str, list]:
        clauses: list[str] = []
        params: list = []
        if self.id is not None:
            clauses.append("id = ?")
            params.append(str(self.id))
        if self.period is not None:
            clauses.append("date >= ? AND date <= ?")
            params.extend([format_timestamp(self.period.start), format_timestamp(self.period.end)])
        if self.account_id is not None:
            clauses.append("account_id = ?")
            params.append(str(self.account_id))
        if self.category_id is not None:
            clauses.append("category_id = ?")
            params.append(str(self.category_id))
        if self.type is not None:
            clauses.append("type = ?")
            params.append(self.type.value)
        return _where(clauses), params


@dataclass(frozen=True)
class AccountQuery:
    """Filter for AccountStore.fetch()."""

    id: Optional[UUID] = None
    is_default: Optional[bool] = None
    include_in_total: Optional[bool] = None
    limit: Optional[int] = None

    def to_sql(self) -> tuple[str, list]:
        clauses: list[str] = []
        params: list = []
        if self.id is not None:
            clauses.append("id = ?")
            params.append(str(self.id))
        if self.is_default is not None:
            clauses.append("is_default = ?")
            params.append(int(self.is_default))
        if self.include_in_total is not None:
            clauses.append("include_in_total = ?")
            params.append(int(self.include_in_total))
        return _where(clauses), params


@dataclass(frozen=True)
class CategoryQuery:
    """Filter for CategoryStore.fetch()."""

    id: Optional[UUID] = None
    applicable_type: Optional[TransactionType] = None
    is_system: Optional[bool] = None
    limit: Optional[int] = None

    def to_sql(self) -> tuple[str, list]:
        clauses: list[str] = []
        params: list = []
        if self.id is not None:
            clauses.append("id = ?")
            params.append(str(self.id))
        if self.applicable_type is not None:
            # applicable_types is a comma-separated list; pad with commas to match whole values
            clauses.append("(',' || applicable_types || ',') LIKE ?")
            params.append(f"%,{self.applicable_type.value},%")
        if self.is_system is not None:
            clauses.append("is_system = ?")
            params.append(int(self.is_system))
        return _where(clauses), params


__all__ = ["AccountQuery", "CategoryQuery", "TransactionQuery"]
