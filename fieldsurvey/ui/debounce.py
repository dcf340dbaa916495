"""Trailing-edge debouncer.

Every trigger() restarts the quiet period; fn runs once, delay_s after the last
trigger. Inside a running asyncio loop the call is scheduled with
loop.call_later. Without a loop (Streamlit reruns) the deadline is kept and
fired by the next poll() that finds it expired.
"""

import asyncio
import logging
import time
from typing import Callable

logger = logging.getLogger(__name__)


class Debouncer:
    """Coalesces bursts of triggers into a single call.

    Example:
        debouncer = Debouncer(delay_s=1.0, fn=engine.regenerate)
        debouncer.trigger()
        debouncer.trigger()  # restarts the timer, fn still runs once
    """

    def __init__(self, delay_s: float, fn: Callable[[], None], clock: Callable[[], float] = time.monotonic) -> None:
        if delay_s < 0:
            raise ValueError(f"delay_s must be >= 0, got {delay_s}")
        self.delay_s = delay_s
        self.fn = fn
        self.clock = clock
        self._handle: asyncio.TimerHandle | None = None
        self._deadline: float | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None or self._deadline is not None

    def trigger(self) -> None:
        """Restart the quiet period."""
        self.cancel()
        if self.delay_s == 0:
            self._fire()
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._deadline = self.clock() + self.delay_s
            return
        self._handle = loop.call_later(self.delay_s, self._fire)

    def poll(self) -> bool:
        """Fire a loop-less pending call whose deadline has passed.

        Returns:
            True if fn was called.
        """
        if self._deadline is None or self.clock() < self._deadline:
            return False
        self._fire()
        return True

    def flush(self) -> None:
        """Run a pending call now."""
        if self.pending:
            self.cancel()
            self._fire()

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._deadline = None

    def _fire(self) -> None:
        self._handle = None
        self._deadline = None
        try:
            self.fn()
        except Exception:
            logger.exception(f"Debounced call {self.fn!r} failed")
