"""
Error taxonomy for PocketLedger.

Four families, all rooted at LedgerError:
- ValidationError: input rejected before any write (e.g., amount <= 0)
- NotFoundError: an account, category, or transaction id does not resolve
- ProtectedResourceError: attempt to delete a system category
- StorageError: the underlying SQLite database failed
"""

from __future__ import annotations

from typing import Any


class LedgerError(Exception):
    """Base class for all ledger errors."""


class ValidationError(LedgerError):
    """Input failed validation; nothing was written."""


class InvalidAmountError(ValidationError):
    def __init__(self, amount: Any):
        self.amount = amount
        super().__init__(f"Amount must be greater than zero (got {amount})")


class CategoryValidationError(ValidationError):
    """Category definition is invalid (empty name, no types, duplicate)."""


class NotFoundError(LedgerError):
    """An identifier did not resolve to a stored record."""

    kind = "Record"

    def __init__(self, record_id: Any):
        self.record_id = record_id
        super().__init__(f"{self.kind} not found: {record_id}")


class AccountNotFoundError(NotFoundError):
    kind = "Account"


class CategoryNotFoundError(NotFoundError):
    kind = "Category"


class TransactionNotFoundError(NotFoundError):
    kind = "Transaction"


class ProtectedResourceError(LedgerError):
    """The record is protected and cannot be removed."""


class StorageError(LedgerError):
    """Underlying persistence failure (I/O, constraint violation, corrupt file)."""


__all__ = [
    "LedgerError",
    "ValidationError",
    "InvalidAmountError",
    "CategoryValidationError",
    "NotFoundError",
    "AccountNotFoundError",
    "CategoryNotFoundError",
    "TransactionNotFoundError",
    "ProtectedResourceError",
    "StorageError",
]
