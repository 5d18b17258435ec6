"""
Command-line entry point.

Usage:
    terminaltask                      Start the interactive task list
    terminaltask --version            Print the version and exit
    terminaltask --tasks-file PATH    Use PATH instead of the configured task file
    terminaltask --log-file PATH      Write logs to PATH
    terminaltask --debug              Log at DEBUG level
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from terminaltask import __version__
from terminaltask.config import ConfigError, load_config
from terminaltask.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def version_string() -> str:
    return f"terminaltask v{__version__}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="terminaltask",
        description="Interactive terminal task manager",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )
    parser.add_argument(
        "--tasks-file",
        type=Path,
        help="Path to the tasks JSON file (default: <config dir>/tasks.json)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Path to the log file (default: <config dir>/terminaltask.log)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log at DEBUG level",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.version:
        print(version_string())
        return 0

    try:
        config = load_config()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    level = logging.DEBUG if args.debug else config.log_level
    setup_logging(args.log_file or config.log_file, level)

    tasks_file = args.tasks_file or config.tasks_file

    from terminaltask.app import run

    try:
        run(tasks_file)
    except Exception:
        logger.exception("terminaltask crashed")
        raise
    return 0


if __name__ == "__main__":
    sys.exit(main())
