#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import argparse
import logging
import sys
from typing import List, Optional

from config import APP_VERSION, LOG_FORMAT
from core.timer_engine import TimerEngine, local_now
from services.timer_service import TimerService
from ui.display_loop import DisplayLoop
from ui.events import SignalEventSource
from ui.terminal_display import DisplayError, TerminalDisplay

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_DISPLAY_FAILURE = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pomodoro",
        description="A terminal Pomodoro timer: 25 minutes of work, 5 of break, repeat.",
    )
    parser.add_argument(
        "--task",
        help="Display the specified task on the timer. This will help keep you focused.",
    )
    parser.add_argument("--log-file", help="Write log messages to this file.")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log every redraw (needs --log-file)."
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {APP_VERSION}"
    )
    return parser


def setup_logging(verbose: bool, log_file: Optional[str]) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        filename=log_file,
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose and not args.log_file:
        # stderr is the screen being drawn on
        parser.error("--verbose requires --log-file")
    setup_logging(args.verbose, args.log_file)

    try:
        engine = TimerEngine(now=local_now(), task_label=args.task)
        service = TimerService(engine)
        display = TerminalDisplay()
        service.set_on_phase_change(display.bell)

        DisplayLoop(service, display, SignalEventSource()).run()
    except DisplayError as e:
        # terminal has already been restored by the loop
        logger.error("display failure: %s", e)
        print(f"pomodoro: {e}", file=sys.stderr)
        return EXIT_DISPLAY_FAILURE
    except KeyboardInterrupt:
        # Ctrl-C before the signal handlers were installed
        logger.info("interrupted during startup")
        return EXIT_OK

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
