"""
Push Button Package

Debounced push button reading for polled control loops. Reports the
number of quick consecutive clicks, or -1 for a long hold.
"""

from .button_state import ButtonState, StateChange, NO_EVENT, HOLD_EVENT, describe_event
from .button_machine import ButtonMachine
from .clock import MonotonicClock, ManualClock, ticks_diff, TICKS_PERIOD
from .config import (
    ActiveLevel,
    PullMode,
    ButtonTimings,
    ButtonConfig,
    pull_mode_for,
    DISABLED_TIME,
)
from .interfaces import IPinSampler, IClock
from .gpio_sampler import GPIOPinSampler
from .keyboard_sampler import KeyboardPinSampler
from .mock_sampler import MockPinSampler
from .poll_timer import PollTimer
from .push_button import PushButton
from .hybrid_logger import HybridLogger, ClassLogger, ColoredFormatter

__version__ = "0.1.0"

__all__ = [
    "ButtonState",
    "StateChange",
    "NO_EVENT",
    "HOLD_EVENT",
    "describe_event",
    "ButtonMachine",
    "MonotonicClock",
    "ManualClock",
    "ticks_diff",
    "TICKS_PERIOD",
    "ActiveLevel",
    "PullMode",
    "ButtonTimings",
    "ButtonConfig",
    "pull_mode_for",
    "DISABLED_TIME",
    "IPinSampler",
    "IClock",
    "GPIOPinSampler",
    "KeyboardPinSampler",
    "MockPinSampler",
    "PollTimer",
    "PushButton",
    "HybridLogger",
    "ClassLogger",
    "ColoredFormatter",
]
