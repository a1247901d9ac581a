"""
Timing utility for throttling polls in a fast control loop
"""

from typing import Optional

from .clock import ticks_diff
from .interfaces import IClock


class PollTimer:
    """
    Allows an action at most once per interval, measured on an IClock.

    Use this when the surrounding loop runs much faster than the button
    needs to be sampled.

    Example:
        timer = PollTimer(50, clock)

        # In a loop running every millisecond:
        if timer.should_execute():
            button.status()   # Only runs every 50ms
    """

    def __init__(self, interval_ms: int, clock: IClock):
        """
        Args:
            interval_ms: Minimum milliseconds between executions
            clock: Tick source shared with the button
        """
        self.interval_ms = interval_ms
        self._clock = clock
        self._last_execution: Optional[int] = None

    def should_execute(self) -> bool:
        """
        Check if the interval has passed and re-arm the timer if so.

        Returns:
            True on the first call and whenever interval_ms has elapsed
        """
        now = self._clock.now_ms()
        if self._last_execution is None or ticks_diff(now, self._last_execution) >= self.interval_ms:
            self._last_execution = now
            return True
        return False

    def reset(self) -> None:
        """Force next should_execute() call to return True"""
        self._last_execution = None

    def elapsed_ms(self) -> int:
        """Milliseconds since the last execution (0 if never executed)"""
        if self._last_execution is None:
            return 0
        return ticks_diff(self._clock.now_ms(), self._last_execution)

    def remaining_ms(self) -> int:
        """Milliseconds until the next execution is allowed, never negative"""
        if self._last_execution is None:
            return 0
        return max(self.interval_ms - self.elapsed_ms(), 0)
