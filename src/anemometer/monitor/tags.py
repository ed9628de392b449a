from __future__ import annotations

from datetime import datetime
from typing import Any

from anemometer.monitor.coercion import METRIC_COLUMN, TIMESTAMP_COLUMN

RESERVED_COLUMNS = frozenset({METRIC_COLUMN, TIMESTAMP_COLUMN})


def format_tag_value(value: Any) -> str:
    """Render a column value the way it should appear in a tag."""
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def get_tags(row: dict[str, Any]) -> list[str]:
    """Build ``name:value`` tags from every column except ``metric`` and ``timestamp``."""
    return [
        f"{name}:{format_tag_value(value)}"
        for name, value in row.items()
        if name not in RESERVED_COLUMNS
    ]
