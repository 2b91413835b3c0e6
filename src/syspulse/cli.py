"""Command-line entry point for syspulse."""

import argparse
import json
import logging
import sys

from syspulse.api import metrics_response
from syspulse.config import get_settings
from syspulse.platforms import detect_platform
from syspulse.runner import CommandRunner
from syspulse.sampler import Sampler

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str) -> None:
    """Send syspulse logs to stderr at the given level."""
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger("syspulse")
    root.handlers[:] = [handler]
    root.setLevel(numeric_level)


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="syspulse",
        description="Sample CPU, memory and disk usage.",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="print one sample as JSON and exit instead of opening the dashboard",
    )
    parser.add_argument(
        "--no-specs",
        dest="with_specs",
        action="store_false",
        default=settings.with_specs,
        help="skip total RAM/disk and derived used bytes",
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=settings.poll_rate,
        help="dashboard polling interval in seconds (default: %(default)s)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=settings.command_timeout,
        help="seconds to wait for each OS command (default: no limit)",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help="logging level (default: %(default)s)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Entry point for syspulse."""
    args = parse_arguments(argv)
    configure_logging(args.log_level)

    sampler = Sampler(detect_platform(CommandRunner(timeout=args.timeout)))

    if args.once:
        body, status = metrics_response(sampler, with_specs=args.with_specs)
        print(json.dumps(body, indent=2))
        return 0 if status == 200 else 1

    # Deferred so --once works without a terminal UI
    from syspulse.app import SyspulseApp

    app = SyspulseApp(
        sampler,
        poll_rate=args.interval,
        history_size=get_settings().history_size,
        with_specs=args.with_specs,
    )
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
