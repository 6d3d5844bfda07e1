"""
Change notification events.

These events tell presentation code (CLI, GUI) that the ledger changed so it
can update balances and lists optimistically, without re-querying stores.
They are NOT a source of truth: delivery is best-effort and nothing is
persisted.

All events inherit from ChangeEvent and include:
- Automatic event_id generation (UUID)
- Automatic event_timestamp
- Optional payload: amount, type, category_id, note
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from pocketledger.model.transaction import TransactionType


class ChangeEvent(BaseModel):
    """Base class for ledger change notifications."""

    model_config = ConfigDict(frozen=True)

    event_id: str = Field(default_factory=lambda: str(uuid4()))
    event_type: str
    event_timestamp: datetime = Field(default_factory=datetime.now)

    amount: Optional[Decimal] = None
    type: Optional[TransactionType] = None
    category_id: Optional[UUID] = None
    note: Optional[str] = None

    @field_serializer("event_timestamp")
    def serialize_timestamp(self, value: datetime) -> str:
        return value.isoformat()

    @field_serializer("amount")
    def serialize_amount(self, value: Optional[Decimal]) -> Optional[str]:
        return None if value is None else str(value)

    @property
    def signed_amount(self) -> Optional[Decimal]:
        """Balance effect carried by the event, when amount and type are known."""
        if self.amount is None or self.type is None:
            return None
        return self.amount * self.type.balance_multiplier


class TransactionAdded(ChangeEvent):
    event_type: str = Field(default="TransactionAdded", frozen=True)


class TransactionDeleted(ChangeEvent):
    event_type: str = Field(default="TransactionDeleted", frozen=True)


class TransactionUpdated(ChangeEvent):
    event_type: str = Field(default="TransactionUpdated", frozen=True)


class TransactionsChanged(ChangeEvent):
    """Posted alongside every specific change event."""

    event_type: str = Field(default="TransactionsChanged", frozen=True)


EVENT_TYPE_MAP: dict[str, type[ChangeEvent]] = {
    "TransactionAdded": TransactionAdded,
    "TransactionDeleted": TransactionDeleted,
    "TransactionUpdated": TransactionUpdated,
    "TransactionsChanged": TransactionsChanged,
}


def payload_of(event: ChangeEvent) -> dict[str, Any]:
    """The optional payload fields of an event, for re-posting as another type."""
    return {
        "amount": event.amount,
        "type": event.type,
        "category_id": event.category_id,
        "note": event.note,
    }


__all__ = [
    "ChangeEvent",
    "TransactionAdded",
    "TransactionDeleted",
    "TransactionUpdated",
    "TransactionsChanged",
    "EVENT_TYPE_MAP",
    "payload_of",
]
