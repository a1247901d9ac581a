"""
Abstract interfaces for the collaborators of a push button
"""

from abc import ABC, abstractmethod


class IPinSampler(ABC):
    """
    Abstract interface for sampling the raw level of one input pin.

    Separates reading hardware from the debounce logic, so the same
    machine runs against GPIO, a keyboard, or a scripted mock.
    """

    @abstractmethod
    def setup(self) -> None:
        """Configure the pin (direction, pull resistor). Called once."""
        pass

    @abstractmethod
    def read_pin(self) -> bool:
        """
        Read the current electrical level of the pin.

        Must not debounce; that is the machine's job.

        Returns:
            True if the pin is HIGH, False if it is LOW
        """
        pass

    @abstractmethod
    def cleanup(self) -> None:
        """Release the pin"""
        pass


class IClock(ABC):
    """Abstract monotonic millisecond clock"""

    @abstractmethod
    def now_ms(self) -> int:
        """
        Current time in milliseconds since an arbitrary epoch.

        Returns:
            int: Non-decreasing tick count, wrapping at clock.TICKS_PERIOD
        """
        pass
