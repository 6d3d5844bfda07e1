"""
Single-writer serialization for record stores.

Each store owns one SerialExecutor. Operations submitted to the same
executor run one at a time in submission order; blocking SQLite work runs
in a worker thread so the event loop stays responsive. Executors of
different stores are independent and may interleave freely.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SerialExecutor:
    """Runs blocking callables one at a time, FIFO, off the event loop."""

    def __init__(self, name: str):
        self.name = name
        self._lock = asyncio.Lock()

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    async def run(self, fn: Callable[..., T], *args) -> T:
        """Wait for earlier operations, then run fn(*args) in a worker thread.

        Cancelling the caller does not stop a started worker thread, so the
        lock is held until that thread finishes before the cancellation is
        re-raised.
        """
        async with self._lock:
            logger.debug("[%s] running %s", self.name, getattr(fn, "__name__", fn))
            worker = asyncio.ensure_future(asyncio.to_thread(fn, *args))
            try:
                return await asyncio.shield(worker)
            except asyncio.CancelledError:
                await self._drain(worker)
                raise

    async def _drain(self, worker: asyncio.Future) -> None:
        while not worker.done():
            try:
                await asyncio.wait([worker])
            except asyncio.CancelledError:
                continue
        if not worker.cancelled() and worker.exception() is not None:
            logger.warning(
                "[%s] operation failed after its caller was cancelled: %s",
                self.name,
                worker.exception(),
            )


__all__ = ["SerialExecutor"]
