"""
Tests for debounce and throttle primitives.
"""

from __future__ import annotations

import asyncio

import pytest

from pocketledger.timing import Debouncer, Throttler


class FakeClock:
    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class DescribeDebouncer:
    @pytest.mark.asyncio
    async def it_should_run_only_the_latest_action(self):
        debouncer = Debouncer(delay=0.02)
        ran: list[str] = []

        debouncer.submit(lambda: ran.append("A"))
        debouncer.submit(lambda: ran.append("B"))
        await debouncer.wait()

        assert ran == ["B"]

    @pytest.mark.asyncio
    async def it_should_run_after_the_delay(self):
        debouncer = Debouncer(delay=0.02)
        ran: list[str] = []

        debouncer.submit(lambda: ran.append("A"))
        assert ran == []
        assert debouncer.pending

        await asyncio.sleep(0.06)

        assert ran == ["A"]
        assert not debouncer.pending

    @pytest.mark.asyncio
    async def it_should_never_run_a_cancelled_action(self):
        debouncer = Debouncer(delay=0.01)
        ran: list[str] = []

        debouncer.submit(lambda: ran.append("A"))
        debouncer.cancel()
        await asyncio.sleep(0.04)

        assert ran == []

    @pytest.mark.asyncio
    async def it_should_await_async_actions(self):
        debouncer = Debouncer(delay=0.0)
        ran: list[str] = []

        async def action():
            await asyncio.sleep(0)
            ran.append("async")

        debouncer.submit(action)
        await debouncer.wait()

        assert ran == ["async"]

    @pytest.mark.asyncio
    async def it_should_keep_working_after_a_failing_action(self):
        debouncer = Debouncer(delay=0.0)
        ran: list[str] = []

        def boom():
            raise RuntimeError("bad input")

        debouncer.submit(boom)
        await debouncer.wait()
        debouncer.submit(lambda: ran.append("ok"))
        await debouncer.wait()

        assert ran == ["ok"]

    def it_should_reject_negative_delay(self):
        with pytest.raises(ValueError):
            Debouncer(delay=-1)


class DescribeThrottler:
    @pytest.mark.asyncio
    async def it_should_drop_calls_inside_the_interval(self):
        clock = FakeClock()
        throttler = Throttler(interval=1.0, clock=clock)
        ran: list[int] = []

        first = await throttler.execute(lambda: ran.append(1))
        clock.now += 0.5
        second = await throttler.execute(lambda: ran.append(2))

        assert (first, second) == (True, False)
        assert ran == [1]

    @pytest.mark.asyncio
    async def it_should_run_again_after_the_interval(self):
        clock = FakeClock()
        throttler = Throttler(interval=1.0, clock=clock)

        await throttler.execute(lambda: None)
        clock.now += 0.5
        await throttler.execute(lambda: None)
        clock.now += 0.6

        assert await throttler.execute(lambda: None) is True

    @pytest.mark.asyncio
    async def it_should_measure_from_last_successful_run(self):
        clock = FakeClock()
        throttler = Throttler(interval=1.0, clock=clock)

        await throttler.execute(lambda: None)
        clock.now += 0.9
        assert await throttler.execute(lambda: None) is False
        clock.now += 0.1

        assert await throttler.execute(lambda: None) is True

    @pytest.mark.asyncio
    async def it_should_run_immediately_after_reset(self):
        clock = FakeClock()
        throttler = Throttler(interval=10.0, clock=clock)

        await throttler.execute(lambda: None)
        throttler.reset()

        assert await throttler.execute(lambda: None) is True

    @pytest.mark.asyncio
    async def it_should_use_real_time_by_default(self):
        throttler = Throttler(interval=0.02)

        assert await throttler.execute(lambda: None) is True
        assert await throttler.execute(lambda: None) is False
        await asyncio.sleep(0.04)
        assert await throttler.execute(lambda: None) is True
