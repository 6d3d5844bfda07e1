"""
Ledger service - adds and deletes transactions while keeping account
balances in step.

Each operation is two sequential store writes that commit independently:

    add:    TransactionStore.add        -> AccountStore.apply_balance_delta(+signed)
    delete: AccountStore.apply_balance_delta(-signed) -> TransactionStore.delete

Validation and lookups happen before the first write, so a rejected request
leaves no trace. There is no transaction boundary spanning both stores: if
the second write fails, the first is NOT rolled back. The error propagates
and is logged with the ids needed to reconcile by hand.

NO IMPORTS FROM:
- rich (console, table, prompt)
- typer

All dependencies are injected.
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional
from uuid import UUID

from pocketledger.errors import (
    AccountNotFoundError,
    InvalidAmountError,
    LedgerError,
    TransactionNotFoundError,
)
from pocketledger.model.transaction import Transaction, TransactionType, parse_decimal
from pocketledger.notifications import ChangeNotifier
from pocketledger.storage.account_store import AccountStore
from pocketledger.storage.transaction_store import TransactionStore

logger = logging.getLogger(__name__)


def validate_amount(amount: Any) -> Decimal:
    """Parse and check an amount supplied by a user.

    Raises:
        InvalidAmountError: If the amount is not a finite number greater than zero
    """
    try:
        value = parse_decimal(amount)
    except (InvalidOperation, ValueError, TypeError) as e:
        raise InvalidAmountError(amount) from e
    if not value.is_finite() or value <= 0:
        raise InvalidAmountError(amount)
    return value


class LedgerService:
    """Orchestrates transaction writes together with balance deltas."""

    def __init__(
        self,
        transactions: TransactionStore,
        accounts: AccountStore,
        notifier: Optional[ChangeNotifier] = None,
    ):
        self._transactions = transactions
        self._accounts = accounts
        self._notifier = notifier

    async def add_transaction(
        self,
        amount: Any,
        type: TransactionType,
        category_id: UUID,
        account_id: UUID,
        date: datetime,
        note: str = "",
    ) -> Transaction:
        """Record a transaction and apply its signed amount to the account.

        Args:
            amount: Positive amount (Decimal, str, or int); sign comes from `type`
            type: Income or expense
            category_id: Category for this transaction (not validated)
            account_id: Account whose balance moves
            date: When the transaction occurred
            note: Optional free text

        Returns:
            The created transaction

        Raises:
            InvalidAmountError: amount <= 0
            AccountNotFoundError: account_id does not resolve
            StorageError: a store write failed
        """
        value = validate_amount(amount)

        if await self._accounts.fetch_by_id(account_id) is None:
            raise AccountNotFoundError(account_id)

        transaction = Transaction(
            amount=value,
            type=type,
            category_id=category_id,
            account_id=account_id,
            date=date,
            note=note,
        )

        await self._transactions.add(transaction)

        try:
            await self._accounts.apply_balance_delta(account_id, transaction.signed_amount)
        except LedgerError:
            logger.error(
                "Transaction %s was saved but account %s balance was not updated by %s",
                transaction.id,
                account_id,
                transaction.signed_amount,
            )
            raise

        logger.info(
            "Added %s of %s to account %s (%s)",
            transaction.type.value,
            transaction.amount,
            account_id,
            transaction.id,
        )
        if self._notifier is not None:
            self._notifier.publish_added(
                transaction.amount, transaction.type, transaction.category_id, transaction.note
            )
        return transaction

    async def delete_transaction(self, transaction_id: UUID) -> Transaction:
        """Reverse a transaction's balance effect, then delete it.

        Returns:
            The deleted transaction

        If the owning account has been deleted there is no balance to
        reverse; the transaction is still removed.

        Raises:
            TransactionNotFoundError: transaction_id does not resolve
            StorageError: a store write failed
        """
        transaction = await self._transactions.fetch_by_id(transaction_id)
        if transaction is None:
            raise TransactionNotFoundError(transaction_id)

        reverse_delta = -transaction.signed_amount
        if await self._accounts.fetch_by_id(transaction.account_id) is None:
            logger.warning(
                "Account %s no longer exists; deleting transaction %s without a balance update",
                transaction.account_id,
                transaction_id,
            )
        else:
            await self._accounts.apply_balance_delta(transaction.account_id, reverse_delta)

        try:
            await self._transactions.delete(transaction_id)
        except LedgerError:
            logger.error(
                "Account %s balance was reversed by %s but transaction %s was not deleted",
                transaction.account_id,
                reverse_delta,
                transaction_id,
            )
            raise

        logger.info("Deleted transaction %s from account %s", transaction_id, transaction.account_id)
        if self._notifier is not None:
            self._notifier.publish_deleted(
                transaction.amount, transaction.type, transaction.category_id, transaction.note
            )
        return transaction


__all__ = ["LedgerService", "validate_amount"]
