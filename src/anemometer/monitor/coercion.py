"""
Value coercion for the reserved ``metric`` and ``timestamp`` columns.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import Any

from anemometer.core.errors import MetricConversionError, TimestampConversionError

METRIC_COLUMN = "metric"
TIMESTAMP_COLUMN = "timestamp"

_RFC3339 = re.compile(
    r"^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})[Tt]"
    r"(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})(?:\.(?P<fraction>\d+))?"
    r"(?P<offset>[Zz]|[+-]\d{2}:\d{2})$"
)


def get_metric_float(row: dict[str, Any]) -> float:
    """
    Pull the ``metric`` column's value and return it as a float.

    Booleans count as 1.0/0.0. Strings, bytes, NULL and structured values
    are rejected.

    Raises:
        MetricConversionError: If the column is missing or not numeric
    """
    if METRIC_COLUMN not in row:
        raise MetricConversionError("no metric column found")

    value = row[METRIC_COLUMN]
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError as exc:
            raise MetricConversionError(
                f"failed to convert metric column value: '{value}'"
            ) from exc

    raise MetricConversionError(f"failed to convert metric column value: '{value}'")


def parse_rfc3339(value: str) -> datetime:
    """Parse an RFC 3339 timestamp, keeping its UTC offset.

    Fractions beyond microseconds are truncated.

    Raises:
        ValueError: If the string is not RFC 3339
    """
    match = _RFC3339.match(value)
    if match is None:
        raise ValueError(f"not an RFC 3339 timestamp: '{value}'")

    parts = match.groupdict()
    offset = parts["offset"]
    if offset in ("Z", "z"):
        tz = timezone.utc
    else:
        sign = -1 if offset[0] == "-" else 1
        hours, minutes = int(offset[1:3]), int(offset[4:6])
        if hours > 23 or minutes > 59:
            raise ValueError(f"invalid UTC offset: '{offset}'")
        tz = timezone(sign * timedelta(hours=hours, minutes=minutes))

    fraction = (parts["fraction"] or "")[:6].ljust(6, "0")
    return datetime(
        int(parts["year"]),
        int(parts["month"]),
        int(parts["day"]),
        int(parts["hour"]),
        int(parts["minute"]),
        int(parts["second"]),
        int(fraction),
        tzinfo=tz,
    )


def get_timestamp(row: dict[str, Any], now: datetime | None = None) -> datetime:
    """
    Resolve the emission time for a row from its optional ``timestamp`` column.

    A missing column or a NULL value falls back to the current time. Strings
    must be RFC 3339, numbers are Unix epoch seconds. Naive datetimes are
    taken as UTC.

    Args:
        row: Decoded row
        now: Fallback time, defaults to the current UTC time

    Raises:
        TimestampConversionError: For empty or malformed strings and unsupported types
    """
    if TIMESTAMP_COLUMN not in row:
        return now or datetime.now(timezone.utc)

    value = row[TIMESTAMP_COLUMN]

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    if value is None:
        return now or datetime.now(timezone.utc)

    if isinstance(value, str):
        if not value:
            raise TimestampConversionError("timestamp column is empty")
        try:
            return parse_rfc3339(value)
        except ValueError as exc:
            raise TimestampConversionError(
                f"failed to parse timestamp column value '{value}': {exc}"
            ) from exc

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as exc:
            raise TimestampConversionError(
                f"timestamp column value out of range: '{value}'"
            ) from exc

    raise TimestampConversionError(f"unable to convert timestamp column value: '{value}'")
