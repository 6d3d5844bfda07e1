"""
Tests for the Transaction model.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import uuid4

import pytest
from pydantic import ValidationError

from pocketledger.config import MAX_TRANSACTION_AMOUNT
from pocketledger.model.transaction import Transaction, TransactionType, parse_decimal


def _txn(amount, type_=TransactionType.expense, **kwargs) -> Transaction:
    return Transaction(
        amount=amount,
        type=type_,
        category_id=uuid4(),
        account_id=uuid4(),
        date=datetime(2026, 1, 7, 9, 30),
        **kwargs,
    )


class DescribeTransaction:
    def it_should_store_absolute_amount(self):
        assert _txn(Decimal("-12.50")).amount == Decimal("12.50")

    def it_should_cap_amount_at_maximum(self):
        assert _txn("1000000000000000").amount == MAX_TRANSACTION_AMOUNT

    def it_should_parse_strings_without_float_drift(self):
        assert _txn("0.10").amount == Decimal("0.10")
        assert parse_decimal(0.1) == Decimal("0.1")

    def it_should_sign_amount_by_type(self):
        assert _txn("20", TransactionType.income).signed_amount == Decimal("20")
        assert _txn("20", TransactionType.expense).signed_amount == Decimal("-20")

    def it_should_be_immutable(self):
        txn = _txn("5")

        with pytest.raises(ValidationError):
            txn.note = "changed"

    def it_should_round_trip_through_row(self):
        txn = _txn("7.25", note="Lunch")

        assert Transaction.from_row(txn.to_row()) == txn

    def it_should_store_fixed_width_timestamps(self):
        row = _txn("1").to_row()

        assert row["date"] == "2026-01-07T09:30:00.000000"


class DescribeTransactionType:
    def it_should_expose_display_names(self):
        assert TransactionType.income.display_name == "Income"
        assert TransactionType.expense.display_name == "Expense"

    def it_should_parse_from_stored_value(self):
        assert TransactionType("expense") is TransactionType.expense
