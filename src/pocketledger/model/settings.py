from __future__ import annotations

"""
User settings for PocketLedger.

Mirrors config/settings.yml. Every field has a default so a missing or
partial file still yields a usable configuration.
"""

from pydantic import BaseModel, Field

from pocketledger.config import DEFAULT_CURRENCY_CODE


class LedgerSettings(BaseModel):
    """Settings that shape ledger behaviour outside the core invariants."""

    default_currency: str = Field(
        default=DEFAULT_CURRENCY_CODE, min_length=3, max_length=3,
        description="Currency code for newly created accounts",
    )
    first_weekday: int = Field(
        default=0, ge=0, le=6, description="First day of the week: 0=Monday .. 6=Sunday"
    )
    debounce_delay: float = Field(
        default=0.1, ge=0.0, description="Seconds of quiet before debounced input is applied"
    )
    throttle_interval: float = Field(
        default=0.05, ge=0.0, description="Minimum seconds between throttled actions"
    )


__all__ = ["LedgerSettings"]
