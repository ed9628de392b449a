"""
``anemometer start``: load the config and run every monitor until killed.
"""

from __future__ import annotations

import argparse
import threading

import structlog

from anemometer.cli.ux import error, info, print_monitors
from anemometer.config import get_settings, read_config
from anemometer.core.errors import AnemometerError, format_error_message, main_with_error_handling
from anemometer.logging import configure_logging
from anemometer.monitor.launcher import run_forever

logger = structlog.get_logger()


def register_start_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register the start subcommand."""
    settings = get_settings()
    parser = subparsers.add_parser("start", help="Start the Anemometer agent")
    parser.add_argument(
        "-c",
        "--config",
        default=settings.config_path,
        help=f"the full path to the yaml config file (default: {settings.config_path})",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        default=settings.debug,
        help="enable debugging output in the logs",
    )


@main_with_error_handling()
def start_command(
    config_path: str,
    debug: bool = False,
    stop_event: threading.Event | None = None,
) -> int:
    """
    Start the agent.

    Blocks until ``stop_event`` is set; without one it only returns on a
    setup failure or when the process is interrupted.

    Returns:
        Exit code (0 on a clean stop)
    """
    configure_logging("DEBUG" if debug else get_settings().log_level)
    logger.info("anemometer_starting", config=config_path)

    try:
        config = read_config(config_path)
    except AnemometerError as e:
        error(f"Failed to load config: {format_error_message(e)}")
        raise

    if not config.monitors:
        info("No monitors configured")
    print_monitors(
        [(m.name, m.metric, m.metric_type, m.sleep_duration) for m in config.monitors]
    )

    try:
        run_forever(config, debug=debug, stop_event=stop_event)
    except AnemometerError as e:
        error(f"Failed to start monitors: {format_error_message(e)}")
        raise

    return 0


def handle_start_command(args: argparse.Namespace) -> int:
    return start_command(args.config, debug=args.debug)
