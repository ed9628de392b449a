from __future__ import annotations

import argparse
import sys
from typing import Sequence

from anemometer.cli.start import handle_start_command, register_start_parser
from anemometer.cli.version import handle_version_command, register_version_parser


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="anemometer",
        description="Anemometer (A SQL -> StatsD metrics generator)",
    )
    subparsers = parser.add_subparsers(dest="command")
    register_start_parser(subparsers)
    register_version_parser(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "start":
        sys.exit(handle_start_command(args))

    if args.command == "version":
        sys.exit(handle_version_command(args))

    parser.print_help()
    sys.exit(1)


if __name__ == "__main__":  # pragma: no cover - exercised via console script
    main()
