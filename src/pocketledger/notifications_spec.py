"""
Tests for the change notification bus.
"""

from __future__ import annotations

import asyncio
from decimal import Decimal
from uuid import uuid4

import pytest

from pocketledger.model.events import (
    ChangeEvent,
    TransactionAdded,
    TransactionDeleted,
    TransactionsChanged,
    TransactionUpdated,
)
from pocketledger.model.transaction import TransactionType
from pocketledger.notifications import ChangeNotifier


class DescribeChangeNotifier:
    def it_should_deliver_to_subscribers_of_the_event_class(self):
        notifier = ChangeNotifier()
        added: list[ChangeEvent] = []
        deleted: list[ChangeEvent] = []
        notifier.subscribe(TransactionAdded, added.append)
        notifier.subscribe(TransactionDeleted, deleted.append)

        delivered = notifier.publish(TransactionAdded(amount=Decimal("5"), type=TransactionType.income))

        assert delivered == 1
        assert len(added) == 1
        assert deleted == []

    def it_should_post_summary_event_with_same_payload(self):
        notifier = ChangeNotifier()
        changed: list[ChangeEvent] = []
        notifier.subscribe(TransactionsChanged, changed.append)
        category_id = uuid4()

        notifier.publish_added(Decimal("250"), TransactionType.expense, category_id, "Lunch")

        assert len(changed) == 1
        assert changed[0].amount == Decimal("250")
        assert changed[0].type == TransactionType.expense
        assert changed[0].category_id == category_id
        assert changed[0].note == "Lunch"
        assert changed[0].signed_amount == Decimal("-250")

    def it_should_post_deleted_and_updated_events(self):
        notifier = ChangeNotifier()
        seen: list[str] = []
        for event_type in (TransactionDeleted, TransactionUpdated, TransactionsChanged):
            notifier.subscribe(event_type, lambda e: seen.append(e.event_type))

        notifier.publish_deleted(Decimal("1"), TransactionType.income)
        notifier.publish_updated()

        assert seen == [
            "TransactionDeleted",
            "TransactionsChanged",
            "TransactionUpdated",
            "TransactionsChanged",
        ]

    def it_should_keep_delivering_when_a_handler_fails(self):
        notifier = ChangeNotifier()
        received: list[ChangeEvent] = []

        def broken(event):
            raise RuntimeError("view went away")

        notifier.subscribe(TransactionAdded, broken)
        notifier.subscribe(TransactionAdded, received.append)

        delivered = notifier.publish(TransactionAdded())

        assert delivered == 1
        assert len(received) == 1

    def it_should_stop_delivering_after_unsubscribe(self):
        notifier = ChangeNotifier()
        received: list[ChangeEvent] = []
        notifier.subscribe(TransactionAdded, received.append)
        notifier.subscribe(TransactionAdded, received.append)  # ignored duplicate
        notifier.unsubscribe(TransactionAdded, received.append)

        notifier.publish(TransactionAdded())

        assert received == []
        assert notifier.subscriber_count(TransactionAdded) == 0

    def it_should_return_zero_without_subscribers(self):
        assert ChangeNotifier().publish(TransactionUpdated()) == 0

    @pytest.mark.asyncio
    async def it_should_schedule_coroutine_handlers(self):
        notifier = ChangeNotifier()
        received: list[ChangeEvent] = []

        async def handler(event):
            received.append(event)

        notifier.subscribe(TransactionAdded, handler)
        notifier.publish(TransactionAdded())
        await asyncio.sleep(0.01)

        assert len(received) == 1
