"""
Millisecond tick clocks with 32-bit wraparound
"""

import time

from .interfaces import IClock

TICKS_PERIOD = 1 << 32
TICKS_MAX = TICKS_PERIOD - 1


def ticks_diff(now: int, then: int) -> int:
    """
    Milliseconds from `then` to `now`, correct across one wraparound.

    Both values must come from the same 32-bit tick clock.
    """
    return (now - then) & TICKS_MAX


class MonotonicClock(IClock):
    """
    Production clock backed by time.monotonic_ns().

    Ticks wrap every ~49.7 days, like a microcontroller millis() counter.
    """

    def now_ms(self) -> int:
        return (time.monotonic_ns() // 1_000_000) & TICKS_MAX


class ManualClock(IClock):
    """
    Clock that only moves when told to, for simulation and tests.

    Example:
        clock = ManualClock()
        button = PushButton(17, sampler=MockPinSampler(), clock=clock)
        clock.advance(20)
        button.status()
    """

    def __init__(self, start_ms: int = 0):
        self._now = start_ms & TICKS_MAX

    def now_ms(self) -> int:
        return self._now

    def advance(self, ms: int) -> int:
        """Move time forward by ms and return the new tick count"""
        if ms < 0:
            raise ValueError("A monotonic clock cannot go backwards")
        self._now = (self._now + ms) & TICKS_MAX
        return self._now

    def set(self, ms: int) -> None:
        """Jump to an absolute tick count (wrapped to 32 bits)"""
        self._now = ms & TICKS_MAX
