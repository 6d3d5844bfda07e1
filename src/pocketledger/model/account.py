from __future__ import annotations

"""
Account model.

Accounts are mutable: the balance moves with every transaction and users may
rename or reorder accounts. The balance is a running total maintained by the
ledger service; it is not recomputed from transactions on read.
"""

from decimal import Decimal
from enum import StrEnum
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from pocketledger.config import DEFAULT_ACCOUNT_COLOR, DEFAULT_CURRENCY_CODE
from pocketledger.model.transaction import parse_decimal


class AccountType(StrEnum):
    checking = "checking"
    savings = "savings"
    cash = "cash"
    credit_card = "creditCard"
    investment = "investment"

    @property
    def display_name(self) -> str:
        return {
            AccountType.checking: "Checking",
            AccountType.savings: "Savings",
            AccountType.cash: "Cash",
            AccountType.credit_card: "Credit Card",
            AccountType.investment: "Investment",
        }[self]


class Account(BaseModel):
    """A place money lives, with a running balance."""

    model_config = ConfigDict(validate_assignment=True)

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(min_length=1)
    type: AccountType = AccountType.checking
    balance: Decimal = Decimal("0")
    currency_code: str = DEFAULT_CURRENCY_CODE
    color_hex: str = DEFAULT_ACCOUNT_COLOR
    sort_order: int = 0
    is_default: bool = False
    include_in_total: bool = True

    @field_validator("balance", mode="before")
    @classmethod
    def parse_balance(cls, value: Any) -> Decimal:
        return parse_decimal(value)

    @field_serializer("balance")
    def serialize_balance(self, value: Decimal) -> str:
        return str(value)

    @classmethod
    def default(cls, currency_code: str = DEFAULT_CURRENCY_CODE) -> Account:
        """The account seeded for a brand-new ledger."""
        return cls(
            name="Main Account",
            type=AccountType.checking,
            balance=Decimal("0"),
            currency_code=currency_code,
            color_hex=DEFAULT_ACCOUNT_COLOR,
            sort_order=0,
            is_default=True,
            include_in_total=True,
        )

    def to_row(self) -> dict:
        return {
            "id": str(self.id),
            "name": self.name,
            "type": self.type.value,
            "balance": str(self.balance),
            "currency_code": self.currency_code,
            "color_hex": self.color_hex,
            "sort_order": self.sort_order,
            "is_default": int(self.is_default),
            "include_in_total": int(self.include_in_total),
        }

    @classmethod
    def from_row(cls, row: dict) -> Account:
        return cls(
            id=UUID(row["id"]),
            name=row["name"],
            type=AccountType(row["type"]),
            balance=row["balance"],
            currency_code=row["currency_code"],
            color_hex=row["color_hex"],
            sort_order=row["sort_order"],
            is_default=bool(row["is_default"]),
            include_in_total=bool(row["include_in_total"]),
        )


__all__ = ["Account", "AccountType"]
