"""Tests for the trailing-edge Debouncer (loop and loop-less paths)."""

import asyncio

import pytest

from fieldsurvey.ui.debounce import Debouncer


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class Counter:
    def __init__(self) -> None:
        self.calls = 0

    def __call__(self) -> None:
        self.calls += 1


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def counter() -> Counter:
    return Counter()


class TestWithoutLoop:
    def test_poll_fires_after_deadline(self, clock: FakeClock, counter: Counter) -> None:
        debouncer = Debouncer(delay_s=1.0, fn=counter, clock=clock)
        debouncer.trigger()
        assert debouncer.pending
        assert debouncer.poll() is False
        clock.now = 1.0
        assert debouncer.poll() is True
        assert counter.calls == 1
        assert not debouncer.pending

    def test_trigger_restarts_quiet_period(self, clock: FakeClock, counter: Counter) -> None:
        debouncer = Debouncer(delay_s=1.0, fn=counter, clock=clock)
        debouncer.trigger()
        clock.now = 0.5
        debouncer.trigger()
        clock.now = 1.1
        assert debouncer.poll() is False
        clock.now = 1.5
        assert debouncer.poll() is True
        assert counter.calls == 1

    def test_burst_fires_once(self, clock: FakeClock, counter: Counter) -> None:
        debouncer = Debouncer(delay_s=1.0, fn=counter, clock=clock)
        for _ in range(5):
            debouncer.trigger()
        clock.now = 2.0
        debouncer.poll()
        debouncer.poll()
        assert counter.calls == 1

    def test_flush(self, clock: FakeClock, counter: Counter) -> None:
        debouncer = Debouncer(delay_s=1.0, fn=counter, clock=clock)
        debouncer.flush()
        assert counter.calls == 0
        debouncer.trigger()
        debouncer.flush()
        assert counter.calls == 1
        assert not debouncer.pending

    def test_cancel(self, clock: FakeClock, counter: Counter) -> None:
        debouncer = Debouncer(delay_s=1.0, fn=counter, clock=clock)
        debouncer.trigger()
        debouncer.cancel()
        clock.now = 5.0
        assert debouncer.poll() is False
        assert counter.calls == 0

    def test_zero_delay_is_immediate(self, counter: Counter) -> None:
        debouncer = Debouncer(delay_s=0.0, fn=counter)
        debouncer.trigger()
        assert counter.calls == 1
        assert not debouncer.pending

    def test_negative_delay_rejected(self, counter: Counter) -> None:
        with pytest.raises(ValueError):
            Debouncer(delay_s=-1.0, fn=counter)

    def test_failing_fn_does_not_propagate(self, clock: FakeClock) -> None:
        def broken() -> None:
            raise RuntimeError("boom")

        debouncer = Debouncer(delay_s=0.0, fn=broken, clock=clock)
        debouncer.trigger()
        assert not debouncer.pending


class TestWithLoop:
    def test_call_later_coalesces(self, counter: Counter) -> None:
        debouncer = Debouncer(delay_s=0.01, fn=counter)

        async def burst() -> None:
            debouncer.trigger()
            debouncer.trigger()
            debouncer.trigger()
            assert counter.calls == 0
            await asyncio.sleep(0.1)

        asyncio.run(burst())
        assert counter.calls == 1

    def test_flush_inside_loop(self, counter: Counter) -> None:
        debouncer = Debouncer(delay_s=10.0, fn=counter)

        async def trigger_and_flush() -> None:
            debouncer.trigger()
            debouncer.flush()

        asyncio.run(trigger_and_flush())
        assert counter.calls == 1
        assert not debouncer.pending
