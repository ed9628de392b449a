"""
CLI output helpers built on rich.

Respects NO_COLOR and FORCE_COLOR, and falls back to plain text when
stdout is not a terminal.
"""

from __future__ import annotations

import os

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

ANEMOMETER_THEME = Theme(
    {
        "info": "#88C0D0",
        "warning": "#EBCB8B",
        "error": "#BF616A bold",
        "muted": "#D8DEE9",
    }
)

console = Console(
    theme=ANEMOMETER_THEME,
    force_terminal=os.environ.get("FORCE_COLOR") is not None,
    no_color=os.environ.get("NO_COLOR") is not None,
)

error_console = Console(
    theme=ANEMOMETER_THEME,
    stderr=True,
    no_color=os.environ.get("NO_COLOR") is not None,
)


def error(message: str) -> None:
    """Print an error message."""
    error_console.print(f"[error]✗ {message}[/error]")


def info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]ℹ {message}[/info]")


def print_monitors(rows: list[tuple[str, str, str, int]]) -> None:
    """Show the monitors about to be launched."""
    table = Table(title="Monitors", show_header=True, header_style="bold")
    table.add_column("Name")
    table.add_column("Metric")
    table.add_column("Type")
    table.add_column("Interval (s)", justify="right")
    for name, metric, metric_type, interval in rows:
        table.add_row(name, metric, metric_type, str(interval))
    console.print(table)
