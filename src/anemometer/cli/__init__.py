"""
CLI commands for Anemometer.
"""

from anemometer.cli.main import build_parser, main
from anemometer.cli.start import start_command
from anemometer.cli.version import get_version

__all__ = ["build_parser", "main", "start_command", "get_version"]
