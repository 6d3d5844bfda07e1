"""
Change notification bus.

A typed, in-process event channel. Presentation code subscribes handlers
per event class; the ledger service publishes after each successful change.

Delivery is best-effort and fire-and-forget:
- each subscribed handler is called at most once per publish
- a handler that raises is logged and skipped; the others still run
- coroutine handlers are scheduled on the running loop and not awaited
- no ordering between subscribers is promised, nothing is persisted
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable
from decimal import Decimal
from typing import Any, Optional
from uuid import UUID

from pocketledger.model.events import (
    ChangeEvent,
    TransactionAdded,
    TransactionDeleted,
    TransactionsChanged,
    TransactionUpdated,
    payload_of,
)
from pocketledger.model.transaction import TransactionType

logger = logging.getLogger(__name__)

Handler = Callable[[ChangeEvent], Any]


class ChangeNotifier:
    """Registry of subscribers keyed by event class."""

    def __init__(self) -> None:
        self._subscribers: dict[type[ChangeEvent], list[Handler]] = {}
        self._pending: set[asyncio.Task] = set()

    def subscribe(self, event_type: type[ChangeEvent], handler: Handler) -> None:
        handlers = self._subscribers.setdefault(event_type, [])
        if handler not in handlers:
            handlers.append(handler)

    def unsubscribe(self, event_type: type[ChangeEvent], handler: Handler) -> None:
        handlers = self._subscribers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def subscriber_count(self, event_type: type[ChangeEvent]) -> int:
        return len(self._subscribers.get(event_type, []))

    def publish(self, event: ChangeEvent) -> int:
        """Deliver an event to the subscribers of its exact class.

        Returns:
            Number of handlers that accepted the event without raising
        """
        delivered = 0
        for handler in list(self._subscribers.get(type(event), [])):
            try:
                result = handler(event)
                if inspect.isawaitable(result):
                    self._schedule(result, event)
                delivered += 1
            except Exception:
                logger.exception("Handler %r failed for %s", handler, event.event_type)
        return delivered

    def _schedule(self, awaitable, event: ChangeEvent) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("Dropping async handler for %s: no running event loop", event.event_type)
            if inspect.iscoroutine(awaitable):
                awaitable.close()
            return
        task = loop.create_task(awaitable)
        self._pending.add(task)
        task.add_done_callback(self._finish)

    def _finish(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Async change handler failed", exc_info=task.exception())

    # -- convenience publishers -------------------------------------------

    def _publish_with_summary(self, event: ChangeEvent) -> None:
        self.publish(event)
        self.publish(TransactionsChanged(**payload_of(event)))

    def publish_added(
        self,
        amount: Decimal,
        type: TransactionType,
        category_id: Optional[UUID] = None,
        note: Optional[str] = None,
    ) -> None:
        """Post TransactionAdded followed by TransactionsChanged."""
        self._publish_with_summary(
            TransactionAdded(amount=amount, type=type, category_id=category_id, note=note)
        )

    def publish_deleted(
        self,
        amount: Decimal,
        type: TransactionType,
        category_id: Optional[UUID] = None,
        note: Optional[str] = None,
    ) -> None:
        """Post TransactionDeleted followed by TransactionsChanged."""
        self._publish_with_summary(
            TransactionDeleted(amount=amount, type=type, category_id=category_id, note=note)
        )

    def publish_updated(self, **payload: Any) -> None:
        """Post TransactionUpdated followed by TransactionsChanged."""
        self._publish_with_summary(TransactionUpdated(**payload))


__all__ = ["ChangeNotifier", "Handler"]
