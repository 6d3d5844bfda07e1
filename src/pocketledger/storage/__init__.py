from .account_store import AccountStore
from .category_store import CategoryStore
from .database import LedgerDatabase
from .queries import AccountQuery, CategoryQuery, TransactionQuery
from .serial import SerialExecutor
from .transaction_store import TransactionStore

__all__ = [
    "AccountQuery",
    "AccountStore",
    "CategoryQuery",
    "CategoryStore",
    "LedgerDatabase",
    "SerialExecutor",
    "TransactionQuery",
    "TransactionStore",
]
