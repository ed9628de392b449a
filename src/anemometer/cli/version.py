from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version

from anemometer.cli.ux import console


def get_version() -> str:
    try:
        return version("anemometer")
    except PackageNotFoundError:
        return "unknown"


def register_version_parser(subparsers: argparse._SubParsersAction) -> None:
    subparsers.add_parser("version", help="Print the version number")


def handle_version_command(args: argparse.Namespace) -> int:
    console.print(f"Version {get_version()}")
    return 0
