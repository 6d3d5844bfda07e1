"""
Debounce and throttle primitives for input handling.

Both are single-slot and cooperative: they run on the event loop, hold at
most one piece of state, and never pre-empt an action that has started.

Debouncer - coalesce rapid submissions into one delayed run of the latest:

    debouncer = Debouncer(delay=0.1)
    debouncer.submit(lambda: parse_amount(text))   # on every keystroke

Throttler - run at most once per interval, dropping calls in between:

    throttler = Throttler(interval=0.05)
    await throttler.execute(refresh_totals)
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from collections.abc import Callable
from typing import Any, Optional

logger = logging.getLogger(__name__)

Action = Callable[[], Any]


async def _run_action(action: Action) -> None:
    result = action()
    if inspect.isawaitable(result):
        await result


class _Scheduled:
    """One submitted action plus its cancellation flag."""

    __slots__ = ("action", "cancelled", "task")

    def __init__(self, action: Action):
        self.action = action
        self.cancelled = False
        self.task: Optional[asyncio.Task] = None


class Debouncer:
    """Run only the most recent action, after `delay` seconds of quiet."""

    def __init__(self, delay: float = 0.1):
        if delay < 0:
            raise ValueError("delay must be >= 0")
        self.delay = delay
        self._current: Optional[_Scheduled] = None

    @property
    def pending(self) -> bool:
        return self._current is not None and not self._current.cancelled

    def submit(self, action: Action) -> None:
        """Cancel any pending action and schedule this one.

        Must be called from a running event loop. `action` may be a plain
        callable or return an awaitable.
        """
        self.cancel()
        scheduled = _Scheduled(action)
        scheduled.task = asyncio.get_running_loop().create_task(self._fire(scheduled))
        self._current = scheduled

    def cancel(self) -> None:
        """Drop the pending action, if any. A running action is not interrupted."""
        if self._current is not None:
            self._current.cancelled = True
            # Still sleeping: _fire clears _current before the action starts
            if self._current.task is not None:
                self._current.task.cancel()
            self._current = None

    async def wait(self) -> None:
        """Wait until the currently scheduled action (if any) has fired or been dropped."""
        scheduled = self._current
        if scheduled is not None and scheduled.task is not None:
            await scheduled.task

    async def _fire(self, scheduled: _Scheduled) -> None:
        await asyncio.sleep(self.delay)
        if scheduled.cancelled:
            return
        if self._current is scheduled:
            self._current = None
        try:
            await _run_action(scheduled.action)
        except Exception:
            logger.exception("Debounced action failed")


class Throttler:
    """Allow an action at most once per `interval` seconds."""

    def __init__(self, interval: float, clock: Callable[[], float] = time.monotonic):
        if interval < 0:
            raise ValueError("interval must be >= 0")
        self.interval = interval
        self._clock = clock
        self._last_execution: Optional[float] = None

    async def execute(self, action: Action) -> bool:
        """Run action unless still cooling down.

        Returns:
            True if the action ran, False if it was dropped
        """
        now = self._clock()
        if self._last_execution is not None and now - self._last_execution < self.interval:
            return False

        # Recorded before running so overlapping callers see the cooldown
        self._last_execution = now
        await _run_action(action)
        return True

    def reset(self) -> None:
        """Clear the cooldown so the next call runs immediately."""
        self._last_execution = None


__all__ = ["Debouncer", "Throttler"]
