"""
Debounce and click classification state machine for one push button
"""

from typing import Callable, Optional

from .button_state import ButtonState, StateChange, NO_EVENT, HOLD_EVENT
from .clock import ticks_diff
from .config import (
    DEFAULT_DEBOUNCE_PRESS_TIME,
    DEFAULT_DEBOUNCE_RELEASE_TIME,
    DEFAULT_MULTI_CLICK_TIME,
    DEFAULT_HOLD_TIME,
)

TraceHook = Callable[[StateChange], None]


class ButtonMachine:
    """
    Five-state machine turning raw pin samples into click / hold events.

    The machine does no I/O: every step() gets the logical pin level
    (True = pressed) and the current tick count from the caller. It
    returns 0 while nothing is finished, N > 0 when N quick clicks have
    completed, or -1 when a long hold has been released.

    Both edges are debounced independently. A confirmed release only
    increments the click count and opens the multi-click window; the
    count is reported once the window lapses without a new press.
    A press longer than hold_time is reported as -1 as soon as the
    release is seen, without debouncing the release.

    Example:
        machine = ButtonMachine()
        while True:
            event = machine.step(pin_is_pressed(), clock.now_ms())
            if event:
                handle(event)
    """

    def __init__(self,
                 debounce_press_time: int = DEFAULT_DEBOUNCE_PRESS_TIME,
                 debounce_release_time: int = DEFAULT_DEBOUNCE_RELEASE_TIME,
                 multi_click_time: int = DEFAULT_MULTI_CLICK_TIME,
                 hold_time: int = DEFAULT_HOLD_TIME):
        """
        Initialize the machine in AWAIT_PRESS.

        Args:
            debounce_press_time: ms the press must settle before it counts
            debounce_release_time: ms the release must settle before it counts
            multi_click_time: ms to wait for another press after a click
            hold_time: ms a press must last to be reported as a hold
        """
        self.debounce_press_time = debounce_press_time
        self.debounce_release_time = debounce_release_time
        self.multi_click_time = multi_click_time
        self.hold_time = hold_time

        self._state = ButtonState.AWAIT_PRESS
        self._event_time = 0
        self._click_count = 0
        self._trace_hook: Optional[TraceHook] = None

    @property
    def state(self) -> ButtonState:
        return self._state

    @property
    def event_time(self) -> int:
        """Tick count at which the current state was entered"""
        return self._event_time

    @property
    def click_count(self) -> int:
        return self._click_count

    def set_trace_hook(self, hook: Optional[TraceHook]) -> Optional[TraceHook]:
        """
        Register a callable receiving a StateChange after every transition.

        Args:
            hook: Callable taking a StateChange, or None to disable tracing

        Returns:
            The previously registered hook (or None)
        """
        previous = self._trace_hook
        self._trace_hook = hook
        return previous

    def reset(self, now_ms: int = 0) -> None:
        """Abandon any gesture in progress and return to AWAIT_PRESS"""
        self._click_count = 0
        if self._state != ButtonState.AWAIT_PRESS:
            self._enter(ButtonState.AWAIT_PRESS, now_ms)
        else:
            self._event_time = now_ms

    def step(self, pin_active: bool, now_ms: int) -> int:
        """
        Advance the machine by one poll.

        Args:
            pin_active: True if the raw pin is at the active (pressed) level
            now_ms: Current tick count from the button's clock

        Returns:
            0 for no completed gesture, N > 0 for N clicks, -1 for a hold
        """
        state = self._state
        elapsed = ticks_diff(now_ms, self._event_time)

        if state == ButtonState.AWAIT_PRESS:
            self._click_count = 0
            if pin_active:
                self._enter(ButtonState.DEBOUNCE_PRESS, now_ms)

        elif state == ButtonState.DEBOUNCE_PRESS:
            # Pin is not looked at: bounce inside the window is ignored
            if elapsed > self.debounce_press_time:
                self._enter(ButtonState.AWAIT_RELEASE, now_ms)

        elif state == ButtonState.AWAIT_RELEASE:
            if not pin_active:
                if elapsed > self.hold_time:
                    # Reported at once, the release edge is not debounced
                    self._click_count = 0
                    self._enter(ButtonState.AWAIT_PRESS, now_ms, HOLD_EVENT)
                    return HOLD_EVENT
                self._enter(ButtonState.DEBOUNCE_RELEASE, now_ms)

        elif state == ButtonState.DEBOUNCE_RELEASE:
            if elapsed > self.debounce_release_time:
                self._click_count += 1
                self._enter(ButtonState.AWAIT_MULTI_PRESS, now_ms)

        else:  # AWAIT_MULTI_PRESS
            if pin_active:
                self._enter(ButtonState.DEBOUNCE_PRESS, now_ms)
            elif elapsed > self.multi_click_time:
                clicks = self._click_count
                self._click_count = 0
                self._enter(ButtonState.AWAIT_PRESS, now_ms, clicks)
                return clicks

        return NO_EVENT

    def _enter(self, new_state: ButtonState, now_ms: int, event: int = NO_EVENT) -> None:
        """Move to new_state and restart its timer"""
        previous = self._state
        self._state = new_state
        self._event_time = now_ms
        if self._trace_hook is not None:
            self._trace_hook(StateChange(
                previous=previous,
                current=new_state,
                timestamp_ms=now_ms,
                click_count=self._click_count,
                event=event,
            ))
