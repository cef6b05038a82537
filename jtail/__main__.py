#!/usr/bin/env python3
"""
jtail - a terminal viewer that follows structured JSON logs
"""
import argparse
import curses
import logging
import os
import sys
import tempfile
from pathlib import Path
from typing import Callable

from jtail.input_controller import InputController, create_input_controller
from jtail.models.log_store import DEFAULT_MAX_ENTRIES
from jtail.models.viewer_state import LogViewState
from jtail.output_controller import CursesOutputController
from jtail.views.app import App

LOG_FILE_ENV = "JTAIL_LOG_FILE"
ESCAPE_DELAY_MS = 25

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    log_file = os.environ.get(LOG_FILE_ENV) or str(
        Path(tempfile.gettempdir()) / "jtail.log"
    )
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s[%(process)d]: %(levelname)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.FileHandler(log_file, mode="a", encoding="utf-8"),
        ],
    )


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from e
    if number < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return number


def _init_app(
    stdscr: curses.window,
    partial_input_controller: Callable[[curses.window], InputController],
    args: argparse.Namespace,
) -> None:
    # Raw mode delivers Ctrl+C, Ctrl+Z and friends as keys
    curses.raw()
    curses.set_escdelay(ESCAPE_DELAY_MS)
    input_controller = partial_input_controller(stdscr)
    state = LogViewState(args.max_entries, autoscroll=not args.no_follow)
    logger.info("Starting viewer")
    viewer = App(CursesOutputController(stdscr), input_controller, state)
    try:
        viewer.run()
    except KeyboardInterrupt:
        logger.info("KeyboardInterrupt")
    except BaseException as e:
        logger.exception("An error occurred")
        raise e
    finally:
        logger.info("Exiting viewer")


def main() -> None:
    """Main entry point"""
    parser = argparse.ArgumentParser(
        description="jtail - follow and explore JSON log streams",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
    Examples:
      %(prog)s app.log
      some-service | %(prog)s
      %(prog)s --no-follow --max-entries 20000 app.log

    Key Features:
      - Columns discovered from JSON fields (press 'c' to choose)
      - Regex filter over every record (press '/')
      - Selection survives filter changes
      - Field explorer for nested payloads (Ctrl+T)
      - Open a record in $EDITOR (Ctrl+E)
      - Follow the newest record (press 'a' to toggle)
    """,
    )

    parser.add_argument("log_file", nargs="?", help="Path to the JSON log file to view")

    parser.add_argument(
        "-n",
        "--no-follow",
        action="store_true",
        help="Start with autoscroll off instead of following the newest record",
    )

    parser.add_argument(
        "-m",
        "--max-entries",
        type=_positive_int,
        default=DEFAULT_MAX_ENTRIES,
        help=f"Number of records kept in memory (default: {DEFAULT_MAX_ENTRIES})",
    )

    args = parser.parse_args()

    if args.log_file is None:
        if sys.stdin.isatty():
            parser.error("No log file specified")
    elif not os.path.exists(args.log_file):
        parser.error(f"File '{args.log_file}' not found")
    elif not os.path.isfile(args.log_file):
        parser.error(f"'{args.log_file}' is not a file")

    _configure_logging()
    with create_input_controller(args.log_file) as partial_input_controller:
        curses.wrapper(_init_app, partial_input_controller, args)


if __name__ == "__main__":
    main()
