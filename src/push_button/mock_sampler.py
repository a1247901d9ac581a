"""
Mock pin sampler - scripted levels for simulation and tests
"""

from collections import deque
from typing import Iterable, Optional

from .interfaces import IPinSampler


class MockPinSampler(IPinSampler):
    """
    Pin sampler that returns levels set by code instead of hardware.

    Scripted levels are consumed one per read_pin(); once the script is
    empty the last level set (or scripted) keeps being returned.

    Example:
        sampler = MockPinSampler(idle_level=True)   # active LOW button idles HIGH
        sampler.set_level(False)                     # press
    """

    def __init__(self, levels: Optional[Iterable[bool]] = None, idle_level: bool = False):
        self._script = deque(levels or ())
        self._level = idle_level
        self.read_count = 0
        self.setup_count = 0
        self.cleaned_up = False

    def setup(self) -> None:
        self.setup_count += 1

    def set_level(self, level: bool) -> None:
        """Hold the pin at level until changed"""
        self._level = level

    def script(self, levels: Iterable[bool]) -> None:
        """Queue levels returned by the next reads, one each"""
        self._script.extend(levels)

    def read_pin(self) -> bool:
        self.read_count += 1
        if self._script:
            self._level = self._script.popleft()
        return self._level

    def cleanup(self) -> None:
        self.cleaned_up = True
