"""
Central configuration for PocketLedger.

Path resolution lives in pocketledger.workspace.Workspace, which provides
a single workspace root with computed path properties for all data locations.

User-tunable settings (currency, week start, input timing) are read from
config/settings.yml; see pocketledger.model.settings.
"""

from decimal import Decimal

MAX_TRANSACTION_AMOUNT = Decimal("999999999999.99")

ALL_TIME_LOOKBACK_YEARS = 10

DEFAULT_CURRENCY_CODE = "USD"
DEFAULT_ACCOUNT_COLOR = "007AFF"

# Shown in statistics when a transaction points at a category that no longer exists
UNKNOWN_CATEGORY_NAME = "Unknown"
UNKNOWN_CATEGORY_ICON = "questionmark.circle"
UNKNOWN_CATEGORY_COLOR = "808080"

EXPORT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
