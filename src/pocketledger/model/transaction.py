from __future__ import annotations

"""
Transaction models for the ledger.

Scope
- Pure Pydantic v2 models; no I/O.
- A Transaction is immutable once created. The amount is always stored as a
  positive Decimal; direction is carried only by TransactionType.

Privacy
- These models hold financial data but perform no network I/O.
"""

from datetime import datetime
from decimal import Decimal
from enum import StrEnum
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_serializer, field_validator

from pocketledger.config import MAX_TRANSACTION_AMOUNT


class TransactionType(StrEnum):
    """Direction of a transaction."""

    income = "income"
    expense = "expense"

    @property
    def display_name(self) -> str:
        return "Income" if self is TransactionType.income else "Expense"

    @property
    def balance_multiplier(self) -> Decimal:
        """+1 for income (adds to balance), -1 for expense (subtracts)."""
        return Decimal(1) if self is TransactionType.income else Decimal(-1)


def parse_decimal(value: Any) -> Decimal:
    """Parse money from string, int, float, or Decimal without float drift."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, str):
        return Decimal(value.strip())
    return Decimal(str(value))


def normalize_amount(value: Decimal) -> Decimal:
    """Absolute value, capped at MAX_TRANSACTION_AMOUNT."""
    return min(abs(value), MAX_TRANSACTION_AMOUNT)


class Transaction(BaseModel):
    """A single income or expense record against one account.

    Transactions are never edited after creation; corrections are made by
    deleting and re-adding. Use `signed_amount` for balance arithmetic.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    amount: Decimal
    type: TransactionType
    category_id: UUID
    account_id: UUID
    date: datetime
    note: str = ""
    created_at: datetime = Field(default_factory=datetime.now)

    @field_validator("amount", mode="before")
    @classmethod
    def parse_amount(cls, value: Any) -> Decimal:
        return normalize_amount(parse_decimal(value))

    @field_serializer("amount")
    def serialize_amount(self, value: Decimal) -> str:
        """Serialize Decimal to string to preserve precision."""
        return str(value)

    @computed_field  # type: ignore[misc]
    @property
    def signed_amount(self) -> Decimal:
        return self.amount * self.type.balance_multiplier

    def to_row(self) -> dict:
        """Flatten to the column layout used by the transactions table."""
        return {
            "id": str(self.id),
            "amount": str(self.amount),
            "type": self.type.value,
            "category_id": str(self.category_id),
            "account_id": str(self.account_id),
            "date": format_timestamp(self.date),
            "note": self.note,
            "created_at": format_timestamp(self.created_at),
        }

    @classmethod
    def from_row(cls, row: dict) -> Transaction:
        """Construct a Transaction from a transactions table row dict."""
        return cls(
            id=UUID(row["id"]),
            amount=row["amount"],
            type=TransactionType(row["type"]),
            category_id=UUID(row["category_id"]),
            account_id=UUID(row["account_id"]),
            date=datetime.fromisoformat(row["date"]),
            note=row["note"] or "",
            created_at=datetime.fromisoformat(row["created_at"]),
        )


def format_timestamp(value: datetime) -> str:
    # Fixed width so that stored timestamps compare correctly as text
    return value.isoformat(timespec="microseconds")


__all__ = [
    "Transaction",
    "TransactionType",
    "format_timestamp",
    "normalize_amount",
    "parse_decimal",
]
