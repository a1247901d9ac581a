"""
PushButton - debounced multi-click / hold button with callback dispatch
"""

from typing import Callable, Optional

from .button_machine import ButtonMachine, TraceHook
from .button_state import ButtonState, NO_EVENT, describe_event
from .clock import MonotonicClock
from .config import ActiveLevel, ButtonTimings, DISABLED_TIME, is_valid_time, pull_mode_for
from .gpio_sampler import GPIOPinSampler
from .hybrid_logger import ClassLogger
from .interfaces import IClock, IPinSampler
from .poll_timer import PollTimer

ClickCallback = Callable[[int], None]
PinClickCallback = Callable[[int, int], None]


class PushButton:
    """
    One physical push button, polled cooperatively.

    status() returns 0 while nothing has finished, N > 0 after N quick
    clicks, or -1 after a long hold. The same value is passed to the
    registered callbacks, so callers can use either style.

    Example:
        main_logger = HybridLogger("buttons")
        logger = main_logger.get_class_logger("PushButton", logging.INFO)
        button = PushButton(17, ActiveLevel.LOW, logger=logger)
        button.on_pin_clicked(lambda pin, event: print(pin, event))

        while True:
            if button.status() == HOLD_EVENT:
                shutdown()
            time.sleep(button.check_interval / 1000)
    """

    def __init__(self,
                 pin: int,
                 active_level: ActiveLevel = ActiveLevel.LOW,
                 use_internal_pull_resistor: bool = True,
                 *,
                 sampler: Optional[IPinSampler] = None,
                 clock: Optional[IClock] = None,
                 logger: Optional[ClassLogger] = None,
                 timings: Optional[ButtonTimings] = None):
        """
        Initialize the button and configure its pin.

        Args:
            pin: Pin identifier, passed back to two-argument callbacks
            active_level: Level of the pin while the button is pressed
            use_internal_pull_resistor: Enable the pull resistor matching active_level
            sampler: Pin source; defaults to a GPIOPinSampler on pin
            clock: Millisecond tick source; defaults to MonotonicClock
            logger: ClassLogger instance for logging
            timings: Initial thresholds; defaults to ButtonTimings()

        Raises:
            ValueError: if timings holds an out-of-range value, or active_level
                is not LOW/HIGH (0/1)
        """
        self._pin = pin
        self._active_level = ActiveLevel.coerce(active_level)
        self._logger = logger or ClassLogger.for_library("PushButton")

        timings = timings or ButtonTimings()
        timings.validate()

        if sampler is None:
            sampler = GPIOPinSampler(
                pin, pull_mode_for(self._active_level, use_internal_pull_resistor), self._logger
            )
        self._sampler = sampler
        self._clock = clock or MonotonicClock()

        self._machine = ButtonMachine(
            debounce_press_time=timings.debounce_press_time,
            debounce_release_time=timings.debounce_release_time,
            multi_click_time=timings.multi_click_time,
            hold_time=timings.hold_time,
        )
        self._poll_timer = PollTimer(timings.check_interval, self._clock)

        self._on_click: Optional[ClickCallback] = None
        self._on_pin_click: Optional[PinClickCallback] = None

        self._sampler.setup()
        self._logger.info(
            f"PushButton on pin {pin} initialized (active {self._active_level.name})"
        )

    @property
    def pin(self) -> int:
        return self._pin

    @property
    def active_level(self) -> ActiveLevel:
        return self._active_level

    @property
    def state(self) -> ButtonState:
        return self._machine.state

    @property
    def click_count(self) -> int:
        return self._machine.click_count

    @property
    def debounce_press_time(self) -> int:
        return self._machine.debounce_press_time

    @property
    def debounce_release_time(self) -> int:
        return self._machine.debounce_release_time

    @property
    def multi_click_time(self) -> int:
        return self._machine.multi_click_time

    @property
    def hold_time(self) -> int:
        return self._machine.hold_time

    @property
    def check_interval(self) -> int:
        return self._poll_timer.interval_ms

    # Settings. Each returns the previous value so it can be restored.

    def set_debounce_press_time(self, value: int) -> int:
        previous = self._machine.debounce_press_time
        if self._accept_time("debounce_press_time", value):
            self._machine.debounce_press_time = value
        return previous

    def set_debounce_release_time(self, value: int) -> int:
        previous = self._machine.debounce_release_time
        if self._accept_time("debounce_release_time", value):
            self._machine.debounce_release_time = value
        return previous

    def set_multi_click_time(self, value: int) -> int:
        previous = self._machine.multi_click_time
        if self._accept_time("multi_click_time", value):
            self._machine.multi_click_time = value
        return previous

    def set_hold_time(self, value: int) -> int:
        previous = self._machine.hold_time
        if self._accept_time("hold_time", value):
            self._machine.hold_time = value
        return previous

    def set_check_interval(self, value: int) -> int:
        """Advisory polling interval, used by poll() and the monitor loop"""
        previous = self._poll_timer.interval_ms
        if self._accept_time("check_interval", value):
            self._poll_timer.interval_ms = value
        return previous

    def _accept_time(self, name: str, value) -> bool:
        if is_valid_time(value):
            return True
        self._logger.warning(
            f"Ignoring {name}={value!r} on pin {self._pin}: "
            f"must be an int in 0..{DISABLED_TIME - 1} ms"
        )
        return False

    def on_button_clicked(self, callback: Optional[ClickCallback]) -> Optional[ClickCallback]:
        """
        Register the handler called with the event code only.

        Returns:
            The handler it replaces (or None)
        """
        previous = self._on_click
        self._on_click = callback
        return previous

    def on_pin_clicked(self, callback: Optional[PinClickCallback]) -> Optional[PinClickCallback]:
        """
        Register the handler called with (pin, event code).

        Useful when one function serves several buttons. Called before
        the single-argument handler.

        Returns:
            The handler it replaces (or None)
        """
        previous = self._on_pin_click
        self._on_pin_click = callback
        return previous

    def set_trace_hook(self, hook: Optional[TraceHook]) -> Optional[TraceHook]:
        """Forward every state change of the machine to hook (None disables)"""
        return self._machine.set_trace_hook(hook)

    def status(self) -> int:
        """
        Sample the pin once, advance the machine and dispatch callbacks.

        Returns:
            0 for no completed gesture, N > 0 for N clicks, -1 for a hold
        """
        level = self._sampler.read_pin()
        active = level == (self._active_level == ActiveLevel.HIGH)
        event = self._machine.step(active, self._clock.now_ms())

        if event != NO_EVENT:
            self._logger.info(f"Pin {self._pin}: {describe_event(event)}")
            self._dispatch(event)
        return event

    def poll(self) -> int:
        """
        Throttled status(): samples only once per check_interval.

        Returns:
            The status() result, or 0 without sampling if called too early
        """
        if self._poll_timer.should_execute():
            return self.status()
        return NO_EVENT

    def _dispatch(self, event: int) -> None:
        try:
            if self._on_pin_click is not None:
                self._on_pin_click(self._pin, event)
            if self._on_click is not None:
                self._on_click(event)
        except Exception as e:
            self._logger.error(f"Callback for pin {self._pin} failed", exception=e)
            raise

    def reset(self) -> None:
        """Abandon any click or hold in progress"""
        self._machine.reset(self._clock.now_ms())
        self._poll_timer.reset()

    def cleanup(self) -> None:
        """Release the pin sampler"""
        self._sampler.cleanup()
        self._logger.debug(f"PushButton on pin {self._pin} cleaned up")

    def __enter__(self) -> "PushButton":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()

    def __repr__(self) -> str:
        return (
            f"PushButton(pin={self._pin}, active={self._active_level.name}, "
            f"state={self._machine.state.name}, clicks={self._machine.click_count})"
        )
