"""
Push button configuration
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum

# All times in milliseconds
DEFAULT_DEBOUNCE_PRESS_TIME = 15     # Settle time for the make edge
DEFAULT_DEBOUNCE_RELEASE_TIME = 30   # Settle time for the break edge
DEFAULT_MULTI_CLICK_TIME = 400       # 0 reports every click on its own
DEFAULT_HOLD_TIME = 2000             # Minimum press length reported as a hold (-1)
DEFAULT_CHECK_INTERVAL = 50          # Suggested time between polls

# 16-bit sentinel marking a disabled/uninitialised time, never a valid setting
DISABLED_TIME = 0xFFFF


def is_valid_time(value) -> bool:
    """True if value can be used as a timing threshold"""
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value < DISABLED_TIME


class ActiveLevel(IntEnum):
    """Logical level that means 'pressed'"""
    LOW = 0
    HIGH = 1

    @classmethod
    def coerce(cls, level) -> "ActiveLevel":
        """
        Accept an ActiveLevel, 0/1 or False/True, like Arduino's LOW/HIGH.

        Raises:
            ValueError: for any other value
        """
        try:
            return cls(int(level))
        except (TypeError, ValueError):
            raise ValueError(f"active level must be LOW (0) or HIGH (1), got {level!r}") from None


class PullMode(Enum):
    """Internal pull resistor selection for the input pin"""
    OFF = "off"
    UP = "up"
    DOWN = "down"


def pull_mode_for(active_level: ActiveLevel, use_internal_pull_resistor: bool) -> PullMode:
    """
    Pick the pull resistor that holds the pin at its idle level.

    An active LOW button must idle HIGH (pull-up), an active HIGH button
    must idle LOW (pull-down). Without the internal resistor an external
    one is assumed.
    """
    if not use_internal_pull_resistor:
        return PullMode.OFF
    if ActiveLevel.coerce(active_level) == ActiveLevel.LOW:
        return PullMode.UP
    return PullMode.DOWN


@dataclass
class ButtonTimings:
    """Timing thresholds of one button, in milliseconds"""
    debounce_press_time: int = DEFAULT_DEBOUNCE_PRESS_TIME
    debounce_release_time: int = DEFAULT_DEBOUNCE_RELEASE_TIME
    multi_click_time: int = DEFAULT_MULTI_CLICK_TIME
    hold_time: int = DEFAULT_HOLD_TIME
    check_interval: int = DEFAULT_CHECK_INTERVAL

    def validate(self) -> None:
        """Raise ValueError if any threshold is outside 0..DISABLED_TIME-1"""
        for name, value in vars(self).items():
            if not is_valid_time(value):
                raise ValueError(
                    f"{name} must be an int in 0..{DISABLED_TIME - 1} ms, got {value!r}"
                )


@dataclass
class ButtonConfig:
    """Hardware and timing configuration of one push button"""
    pin: int
    active_level: ActiveLevel = ActiveLevel.LOW
    use_internal_pull_resistor: bool = True
    timings: ButtonTimings = field(default_factory=ButtonTimings)

    @property
    def pull_mode(self) -> PullMode:
        """Pull resistor derived from polarity and the internal resistor flag"""
        return pull_mode_for(self.active_level, self.use_internal_pull_resistor)

    def validate(self) -> None:
        """Basic validation of configuration"""
        if not isinstance(self.pin, int) or self.pin < 0:
            raise ValueError(f"pin must be a non-negative int, got {self.pin!r}")
        self.active_level = ActiveLevel.coerce(self.active_level)
        self.timings.validate()
