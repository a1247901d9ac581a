"""
ButtonState - States of the debounce machine and the events it reports
"""

from dataclasses import dataclass
from enum import Enum

# Event codes returned by ButtonMachine.step() and PushButton.status().
# Positive values are click counts.
NO_EVENT = 0
HOLD_EVENT = -1


class ButtonState(Enum):
    """Five states of the debounce / click classification machine"""
    AWAIT_PRESS = 0         # Idle, click count held at 0
    DEBOUNCE_PRESS = 1      # Pin went active, waiting out contact bounce
    AWAIT_RELEASE = 2       # Press confirmed, waiting for release or hold
    DEBOUNCE_RELEASE = 3    # Pin went inactive, waiting out contact bounce
    AWAIT_MULTI_PRESS = 4   # Click counted, waiting for another press


@dataclass(frozen=True)
class StateChange:
    """
    Immutable record of one state transition, handed to trace hooks.

    Usage:
        def trace(change: StateChange) -> None:
            print(f"{change.previous.name} -> {change.current.name}")

        machine.set_trace_hook(trace)
    """
    previous: ButtonState
    current: ButtonState
    timestamp_ms: int
    click_count: int
    event: int = NO_EVENT   # Code returned by the step that made the change

    def __str__(self) -> str:
        text = (
            f"{self.previous.name} -> {self.current.name} "
            f"@ {self.timestamp_ms}ms (clicks={self.click_count})"
        )
        if self.event != NO_EVENT:
            text += f" => {describe_event(self.event)}"
        return text


def describe_event(event: int) -> str:
    """Human-readable name for an event code"""
    if event == NO_EVENT:
        return "none"
    if event == HOLD_EVENT:
        return "hold"
    if event == 1:
        return "1 click"
    return f"{event} clicks"
