"""
Keyboard pin sampler for trying the button logic without GPIO hardware
"""

import select
import sys
import termios
import tty
from typing import Optional

from .config import ActiveLevel
from .hybrid_logger import ClassLogger
from .interfaces import IPinSampler


class KeyboardPinSampler(IPinSampler):
    """
    Simulates one button pin from an interactive terminal.

    The space bar toggles the virtual button between pressed and released,
    so clicks and holds can both be produced by hand. Works over SSH
    (non-blocking select on stdin).

    Example:
        sampler = KeyboardPinSampler(ActiveLevel.LOW, logger)
        button = PushButton(17, ActiveLevel.LOW, sampler=sampler)
    """

    TOGGLE_KEY = ' '
    QUIT_KEYS = ('q', 'Q', '\x03')  # \x03 is Ctrl+C in raw mode

    def __init__(self,
                 active_level: ActiveLevel = ActiveLevel.LOW,
                 logger: Optional[ClassLogger] = None):
        """
        Args:
            active_level: Level reported while the virtual button is pressed
            logger: ClassLogger instance for logging
        """
        self._active_level = ActiveLevel.coerce(active_level)
        self._logger = logger or ClassLogger.for_library("KeyboardPinSampler")
        self._pressed = False
        self._quit_requested = False
        self._original_terminal_settings = None

    @property
    def quit_requested(self) -> bool:
        """True once 'q' or Ctrl+C has been typed"""
        return self._quit_requested

    def setup(self) -> None:
        """Put the terminal in raw mode for immediate key capture"""
        if not sys.stdin.isatty():
            self._logger.error("Keyboard input not available (stdin is not a TTY)")
            raise RuntimeError("Keyboard input not available")

        try:
            self._original_terminal_settings = termios.tcgetattr(sys.stdin)
            tty.setraw(sys.stdin.fileno())
        except termios.error as e:
            self._logger.error("Could not enable raw terminal mode", exception=e)
            raise RuntimeError("Failed to enable raw terminal mode") from e

        self._logger.info("🎮 Keyboard sampler ready: SPACE toggles the button, 'q' quits")

    def read_pin(self) -> bool:
        self._drain_keys()
        pressed_level = self._active_level == ActiveLevel.HIGH
        return pressed_level if self._pressed else not pressed_level

    def _drain_keys(self) -> None:
        while select.select([sys.stdin], [], [], 0)[0]:
            key = sys.stdin.read(1)
            if key == self.TOGGLE_KEY:
                self._pressed = not self._pressed
                self._logger.debug("Virtual button " + ("pressed" if self._pressed else "released"))
            elif key in self.QUIT_KEYS:
                self._quit_requested = True

    def cleanup(self) -> None:
        """Restore original terminal settings"""
        if self._original_terminal_settings is None:
            return
        try:
            termios.tcsetattr(sys.stdin.fileno(), termios.TCSADRAIN,
                              self._original_terminal_settings)
        except termios.error as e:
            self._logger.warning(f"Could not restore terminal settings: {e}")
        finally:
            self._original_terminal_settings = None
