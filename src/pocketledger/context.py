"""
Application context - explicit wiring of stores and services.

Built once per CLI invocation from a Workspace. There are no global
singletons: every collaborator is constructed here and passed down.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pocketledger.model.settings import LedgerSettings
from pocketledger.model.settings_io import load_settings
from pocketledger.notifications import ChangeNotifier
from pocketledger.services.bookkeeping_service import BookkeepingService
from pocketledger.services.export_service import ExportService
from pocketledger.services.ledger_service import LedgerService
from pocketledger.services.statistics_service import StatisticsService
from pocketledger.storage.account_store import AccountStore
from pocketledger.storage.category_store import CategoryStore
from pocketledger.storage.database import LedgerDatabase
from pocketledger.storage.transaction_store import TransactionStore
from pocketledger.timing import Debouncer, Throttler
from pocketledger.workspace import Workspace


@dataclass
class AppContext:
    workspace: Workspace
    settings: LedgerSettings
    database: LedgerDatabase
    transactions: TransactionStore
    accounts: AccountStore
    categories: CategoryStore
    notifier: ChangeNotifier = field(default_factory=ChangeNotifier)

    @classmethod
    def open(cls, workspace: Workspace) -> AppContext:
        """Load settings and open the ledger database under `workspace`.

        Raises:
            StorageError: If settings or the database cannot be opened
        """
        settings = load_settings(workspace.settings_path)
        database = LedgerDatabase(workspace.ledger_db_path)
        return cls(
            workspace=workspace,
            settings=settings,
            database=database,
            transactions=TransactionStore(database),
            accounts=AccountStore(database),
            categories=CategoryStore(database),
        )

    @property
    def ledger(self) -> LedgerService:
        return LedgerService(self.transactions, self.accounts, self.notifier)

    @property
    def statistics(self) -> StatisticsService:
        return StatisticsService(
            self.transactions, self.categories, first_weekday=self.settings.first_weekday
        )

    @property
    def bookkeeping(self) -> BookkeepingService:
        return BookkeepingService(self.accounts, self.categories)

    @property
    def exporter(self) -> ExportService:
        return ExportService(self.transactions)

    def debouncer(self) -> Debouncer:
        return Debouncer(delay=self.settings.debounce_delay)

    def throttler(self) -> Throttler:
        return Throttler(interval=self.settings.throttle_interval)


__all__ = ["AppContext"]
