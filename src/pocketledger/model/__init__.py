from .account import Account, AccountType
from .category import Category, default_categories
from .events import (
    ChangeEvent,
    TransactionAdded,
    TransactionDeleted,
    TransactionsChanged,
    TransactionUpdated,
)
from .ledger_io import EXPORT_COLUMNS, dump_export_csv
from .settings import LedgerSettings
from .statistics import (
    CategoryStatistic,
    DailyAverages,
    DateInterval,
    Statistics,
    StatisticsPeriod,
)
from .transaction import Transaction, TransactionType

__all__ = [
    # models
    "Account",
    "AccountType",
    "Category",
    "CategoryStatistic",
    "DailyAverages",
    "DateInterval",
    "LedgerSettings",
    "Statistics",
    "StatisticsPeriod",
    "Transaction",
    "TransactionType",
    "default_categories",
    # events
    "ChangeEvent",
    "TransactionAdded",
    "TransactionDeleted",
    "TransactionUpdated",
    "TransactionsChanged",
    # IO helpers
    "dump_export_csv",
    "EXPORT_COLUMNS",
]
