"""
GPIO-based pin sampler implementation using RPi.GPIO
"""

import sys
from typing import Optional

try:
    import RPi.GPIO as GPIO
except (ImportError, RuntimeError):
    # RPi.GPIO raises RuntimeError when imported off a Raspberry Pi
    GPIO = None

from .config import PullMode
from .hybrid_logger import ClassLogger
from .interfaces import IPinSampler


class GPIOPinSampler(IPinSampler):
    """
    Raw GPIO sampling of one button pin for production.

    The pull resistor is selected once in setup(); the debounce machine
    only ever sees the logical level.

    Example:
        sampler = GPIOPinSampler(17, PullMode.UP, logger)
        sampler.setup()
        level = sampler.read_pin()
    """

    def __init__(self,
                 pin: int,
                 pull_mode: PullMode,
                 logger: Optional[ClassLogger] = None):
        """
        Initialize GPIO sampler.

        Args:
            pin: GPIO pin number (BCM mode)
            pull_mode: Internal pull resistor to enable
            logger: ClassLogger instance for logging
        """
        if GPIO is None or 'RPi.GPIO' not in sys.modules:
            raise ImportError("RPi.GPIO is required but not available")

        self._pin = pin
        self._pull_mode = pull_mode
        self._logger = logger or ClassLogger.for_library("GPIOPinSampler")
        self._initialized = False

    @property
    def pin(self) -> int:
        return self._pin

    def setup(self) -> None:
        """Configure the pin as an input with the selected pull resistor"""
        pud = {
            PullMode.OFF: GPIO.PUD_OFF,
            PullMode.UP: GPIO.PUD_UP,
            PullMode.DOWN: GPIO.PUD_DOWN,
        }[self._pull_mode]

        try:
            GPIO.setmode(GPIO.BCM)
            GPIO.setup(self._pin, GPIO.IN, pull_up_down=pud)
            self._initialized = True
            self._logger.info(f"GPIO{self._pin} configured as input (pull {self._pull_mode.value})")
        except Exception as e:
            self._logger.error(f"GPIO{self._pin} setup failed", exception=e)
            raise

    def read_pin(self) -> bool:
        """
        Returns:
            True if the pin is HIGH, False otherwise
        """
        return GPIO.input(self._pin) == GPIO.HIGH

    def cleanup(self) -> None:
        """Release this pin only, other pins may belong to other buttons"""
        if not self._initialized:
            return
        try:
            GPIO.cleanup(self._pin)
            self._logger.info(f"GPIO{self._pin} released")
        except Exception as e:
            self._logger.warning(f"GPIO{self._pin} cleanup failed: {e}")
        finally:
            self._initialized = False
