import unittest

from push_button.button_machine import ButtonMachine
from push_button.button_state import ButtonState, HOLD_EVENT
from push_button.clock import TICKS_MAX


class MachineDriver:
    """Feeds a ButtonMachine a constant level for a span of time, one step per tick"""

    def __init__(self, machine: ButtonMachine, start_ms: int = 0, tick_ms: int = 5):
        self.machine = machine
        self.now = start_ms
        self.tick = tick_ms
        self.results = []

    def hold(self, active: bool, duration_ms: int):
        """Return the non-zero events as (time, event) pairs"""
        events = []
        for _ in range(duration_ms // self.tick):
            event = self.machine.step(active, self.now)
            self.results.append(event)
            if event:
                events.append((self.now, event))
            self.now = (self.now + self.tick) & TICKS_MAX
        return events

    def events(self):
        return [result for result in self.results if result]


class IdleTests(unittest.TestCase):
    def test_idle_pin_never_reports(self):
        machine = ButtonMachine()
        driver = MachineDriver(machine)
        self.assertEqual([], driver.hold(False, 5000))
        self.assertEqual(ButtonState.AWAIT_PRESS, machine.state)
        self.assertEqual(0, machine.click_count)

    def test_press_enters_debounce(self):
        machine = ButtonMachine()
        self.assertEqual(0, machine.step(True, 100))
        self.assertEqual(ButtonState.DEBOUNCE_PRESS, machine.state)
        self.assertEqual(100, machine.event_time)


class ClickTests(unittest.TestCase):
    def test_single_click(self):
        driver = MachineDriver(ButtonMachine())
        driver.hold(True, 50)
        driver.hold(False, 500)
        self.assertEqual([1], driver.events())
        self.assertEqual(1, driver.results.count(1))

    def test_single_click_reported_after_window_lapses(self):
        machine = ButtonMachine()
        driver = MachineDriver(machine)
        driver.hold(True, 50)       # confirmed at 20
        driver.hold(False, 350)     # release confirmed at 85, window open
        self.assertEqual([], driver.events())
        self.assertEqual(ButtonState.AWAIT_MULTI_PRESS, machine.state)
        self.assertEqual(1, machine.click_count)

        events = driver.hold(False, 200)
        self.assertEqual([(490, 1)], events)
        self.assertEqual(ButtonState.AWAIT_PRESS, machine.state)

    def test_double_click_scenario(self):
        driver = MachineDriver(ButtonMachine())
        driver.hold(True, 50)
        driver.hold(False, 50)
        driver.hold(True, 50)
        events = driver.hold(False, 500)
        self.assertEqual([(590, 2)], events)
        self.assertEqual([2], driver.events())

    def test_clicks_accumulate(self):
        for clicks in (1, 3, 5):
            driver = MachineDriver(ButtonMachine())
            for _ in range(clicks):
                driver.hold(True, 50)
                driver.hold(False, 100)
            driver.hold(False, 600)
            self.assertEqual([clicks], driver.events(), f"{clicks} clicks")

    def test_gap_longer_than_window_splits_gestures(self):
        driver = MachineDriver(ButtonMachine())
        driver.hold(True, 50)
        driver.hold(False, 600)
        driver.hold(True, 50)
        driver.hold(False, 600)
        self.assertEqual([1, 1], driver.events())

    def test_zero_multi_click_time_reports_each_click(self):
        driver = MachineDriver(ButtonMachine(multi_click_time=0))
        driver.hold(True, 50)
        driver.hold(False, 100)
        driver.hold(True, 50)
        driver.hold(False, 100)
        self.assertEqual([1, 1], driver.events())

    def test_click_count_cleared_after_report(self):
        machine = ButtonMachine()
        driver = MachineDriver(machine)
        driver.hold(True, 50)
        driver.hold(False, 500)
        self.assertEqual(0, machine.click_count)


class HoldTests(unittest.TestCase):
    def test_long_hold_reports_once_on_release(self):
        machine = ButtonMachine()
        driver = MachineDriver(machine)
        self.assertEqual([], driver.hold(True, 2500))
        events = driver.hold(False, 1000)
        self.assertEqual([(2500, HOLD_EVENT)], events)
        self.assertEqual([HOLD_EVENT], driver.events())
        self.assertEqual(0, machine.click_count)
        self.assertEqual(ButtonState.AWAIT_PRESS, machine.state)

    def test_press_just_under_hold_time_is_a_click(self):
        driver = MachineDriver(ButtonMachine(hold_time=200))
        driver.hold(True, 200)   # confirmed at 20, released at 200: 180ms held
        driver.hold(False, 500)
        self.assertEqual([1], driver.events())

    def test_hold_after_clicks_discards_them(self):
        machine = ButtonMachine(hold_time=300)
        driver = MachineDriver(machine)
        driver.hold(True, 50)
        driver.hold(False, 100)
        driver.hold(True, 400)
        driver.hold(False, 600)
        self.assertEqual([HOLD_EVENT], driver.events())
        self.assertEqual(0, machine.click_count)


class DebounceTests(unittest.TestCase):
    def test_press_window_expires_whatever_the_pin_level(self):
        machine = ButtonMachine()
        machine.step(True, 0)
        machine.step(False, 16)
        self.assertEqual(ButtonState.AWAIT_RELEASE, machine.state)
        self.assertEqual(0, machine.click_count)

    def test_short_tap_counts_when_polled_slowly(self):
        # 40ms tap sampled every 50ms: imprecise, but still one click
        driver = MachineDriver(ButtonMachine(), tick_ms=50)
        driver.hold(True, 50)
        driver.hold(False, 900)
        self.assertEqual([1], driver.events())

    def test_bounce_on_press_edge_counts_once(self):
        driver = MachineDriver(ButtonMachine())
        for active in (True, False, True, False, True):
            driver.hold(active, 5)
        driver.hold(True, 50)
        driver.hold(False, 500)
        self.assertEqual([1], driver.events())

    def test_press_must_outlast_debounce_time(self):
        machine = ButtonMachine(debounce_press_time=15)
        machine.step(True, 0)
        machine.step(True, 15)
        self.assertEqual(ButtonState.DEBOUNCE_PRESS, machine.state)
        machine.step(True, 16)
        self.assertEqual(ButtonState.AWAIT_RELEASE, machine.state)

    def test_release_must_outlast_debounce_time(self):
        machine = ButtonMachine(debounce_release_time=30)
        machine.step(True, 0)
        machine.step(True, 20)
        machine.step(False, 40)
        self.assertEqual(ButtonState.DEBOUNCE_RELEASE, machine.state)
        machine.step(False, 70)
        self.assertEqual(ButtonState.DEBOUNCE_RELEASE, machine.state)
        machine.step(False, 71)
        self.assertEqual(ButtonState.AWAIT_MULTI_PRESS, machine.state)
        self.assertEqual(1, machine.click_count)


class ClockTests(unittest.TestCase):
    def test_click_across_tick_wraparound(self):
        driver = MachineDriver(ButtonMachine(), start_ms=TICKS_MAX - 29)
        driver.hold(True, 50)
        driver.hold(False, 500)
        self.assertEqual([1], driver.events())

    def test_hold_across_tick_wraparound(self):
        driver = MachineDriver(ButtonMachine(), start_ms=TICKS_MAX - 1000)
        driver.hold(True, 2500)
        driver.hold(False, 100)
        self.assertEqual([HOLD_EVENT], driver.events())

    def test_long_gap_between_polls_looks_like_hold(self):
        machine = ButtonMachine()
        machine.step(True, 0)
        machine.step(True, 20)
        self.assertEqual(HOLD_EVENT, machine.step(False, 5000))


class TraceHookTests(unittest.TestCase):
    def test_hook_sees_every_transition(self):
        machine = ButtonMachine()
        changes = []
        machine.set_trace_hook(changes.append)
        driver = MachineDriver(machine)
        driver.hold(True, 50)
        driver.hold(False, 500)

        self.assertEqual(
            [
                (ButtonState.AWAIT_PRESS, ButtonState.DEBOUNCE_PRESS),
                (ButtonState.DEBOUNCE_PRESS, ButtonState.AWAIT_RELEASE),
                (ButtonState.AWAIT_RELEASE, ButtonState.DEBOUNCE_RELEASE),
                (ButtonState.DEBOUNCE_RELEASE, ButtonState.AWAIT_MULTI_PRESS),
                (ButtonState.AWAIT_MULTI_PRESS, ButtonState.AWAIT_PRESS),
            ],
            [(change.previous, change.current) for change in changes],
        )
        self.assertEqual([0, 0, 0, 0, 1], [change.event for change in changes])
        self.assertEqual([0, 20, 50, 85, 490], [change.timestamp_ms for change in changes])

    def test_event_time_tracks_entry_into_current_state(self):
        machine = ButtonMachine()
        seen = []
        machine.set_trace_hook(lambda change: seen.append((change.timestamp_ms, machine.event_time)))
        driver = MachineDriver(machine)
        driver.hold(True, 2500)
        driver.hold(False, 100)
        for timestamp, event_time in seen:
            self.assertEqual(timestamp, event_time)

    def test_set_trace_hook_returns_previous(self):
        machine = ButtonMachine()
        first = lambda change: None
        self.assertIsNone(machine.set_trace_hook(first))
        self.assertIs(first, machine.set_trace_hook(None))

    def test_no_hook_calls_when_state_is_unchanged(self):
        machine = ButtonMachine()
        changes = []
        machine.set_trace_hook(changes.append)
        MachineDriver(machine).hold(False, 1000)
        self.assertEqual([], changes)


class ResetTests(unittest.TestCase):
    def test_reset_abandons_gesture(self):
        machine = ButtonMachine()
        driver = MachineDriver(machine)
        driver.hold(True, 50)
        driver.hold(False, 100)
        self.assertEqual(1, machine.click_count)

        machine.reset(driver.now)
        self.assertEqual(ButtonState.AWAIT_PRESS, machine.state)
        self.assertEqual(0, machine.click_count)
        driver.hold(False, 1000)
        self.assertEqual([], driver.events())
