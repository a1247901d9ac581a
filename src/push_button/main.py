#!/usr/bin/env python3
"""
Push button monitor - polls one button and logs every click and hold

Usage:
    push-button-monitor --pin 17                 # active LOW, internal pull-up
    push-button-monitor --pin 22 --active-high   # active HIGH, internal pull-down
    push-button-monitor --keyboard --trace       # no GPIO, SPACE toggles the button
"""

import argparse
import logging
import sys
import time
from typing import List, Optional

from .button_state import StateChange, describe_event
from .config import ActiveLevel, ButtonConfig, ButtonTimings
from .hybrid_logger import HybridLogger
from .keyboard_sampler import KeyboardPinSampler
from .push_button import PushButton


def build_parser() -> argparse.ArgumentParser:
    defaults = ButtonTimings()
    parser = argparse.ArgumentParser(
        prog="push-button-monitor",
        description="Report multi-clicks and long holds of a push button",
    )
    parser.add_argument("--pin", type=int, default=17, help="GPIO pin (BCM numbering)")
    parser.add_argument("--active-high", action="store_true",
                        help="button pulls the pin HIGH when pressed (default: LOW)")
    parser.add_argument("--no-pull", action="store_true",
                        help="do not enable the internal pull resistor")
    parser.add_argument("--keyboard", action="store_true",
                        help="simulate the button with the space bar instead of GPIO")
    parser.add_argument("--debounce-press", type=int, default=defaults.debounce_press_time,
                        metavar="MS")
    parser.add_argument("--debounce-release", type=int, default=defaults.debounce_release_time,
                        metavar="MS")
    parser.add_argument("--multi-click", type=int, default=defaults.multi_click_time,
                        metavar="MS")
    parser.add_argument("--hold", type=int, default=defaults.hold_time, metavar="MS")
    parser.add_argument("--interval", type=int, default=defaults.check_interval, metavar="MS",
                        help="time between polls")
    parser.add_argument("--trace", action="store_true", help="log every state change")
    parser.add_argument("--log-dir", default=None, help="also write a log file here")
    return parser


def config_from_args(args: argparse.Namespace) -> ButtonConfig:
    """Build and validate a ButtonConfig, raising ValueError on bad values"""
    config = ButtonConfig(
        pin=args.pin,
        active_level=ActiveLevel.HIGH if args.active_high else ActiveLevel.LOW,
        use_internal_pull_resistor=not args.no_pull,
        timings=ButtonTimings(
            debounce_press_time=args.debounce_press,
            debounce_release_time=args.debounce_release,
            multi_click_time=args.multi_click,
            hold_time=args.hold,
            check_interval=args.interval,
        ),
    )
    config.validate()
    return config


def run_monitor(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    main_logger = HybridLogger("button_monitor", log_dir=args.log_dir)
    logger = main_logger.get_main_logger(logging.INFO)
    button_logger = main_logger.get_class_logger(
        "PushButton", logging.DEBUG if args.trace else logging.INFO
    )

    button = None
    try:
        config = config_from_args(args)
        sampler = None
        if args.keyboard:
            sampler = KeyboardPinSampler(
                config.active_level, main_logger.get_class_logger("KeyboardPinSampler")
            )
        button = PushButton(
            config.pin,
            config.active_level,
            config.use_internal_pull_resistor,
            sampler=sampler,
            logger=button_logger,
            timings=config.timings,
        )
    except (ValueError, ImportError, RuntimeError) as e:
        logger.error(f"Button setup failed: {e}")
        main_logger.cleanup()
        return 1

    if args.trace:
        def trace(change: StateChange) -> None:
            button_logger.debug(f"Pin {config.pin}: {change}")
        button.set_trace_hook(trace)

    def report(pin: int, event: int) -> None:
        logger.info(f"🔘 GPIO{pin}: {describe_event(event)}")

    button.on_pin_clicked(report)

    logger.info(f"Monitoring pin {config.pin} every {button.check_interval}ms (Ctrl+C to stop)")
    try:
        while not (sampler is not None and sampler.quit_requested):
            button.status()
            time.sleep(button.check_interval / 1000.0)
    except KeyboardInterrupt:
        logger.info("Received shutdown signal (Ctrl+C)")
    finally:
        button.cleanup()
        logger.info("Monitor stopped")
        main_logger.cleanup()
    return 0


def main() -> None:
    sys.exit(run_monitor())


if __name__ == "__main__":
    main()
