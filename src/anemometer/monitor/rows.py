"""
Row decoding.

Query results have no fixed shape, so every row is read into a plain
``dict`` keyed by column name. Driver values are normalized here into a
small set of Python types the rest of the pipeline switches over:
``None``, ``bool``, ``int``, ``float``, ``str``, ``bytes``, ``datetime``
and structured values (``list``/``dict``).
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any
from uuid import UUID

from anemometer.core.errors import RowDecodeError

_PASSTHROUGH = (bool, int, float, str, bytes, datetime, list, dict)


def normalize_value(value: Any) -> Any:
    """Map a driver value onto one of the supported row value types."""
    if value is None or isinstance(value, _PASSTHROUGH):
        return value
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if isinstance(value, tuple):
        return list(value)
    if isinstance(value, UUID):
        return str(value)
    # time, timedelta, intervals and driver-specific objects
    return str(value)


def decode_row(columns: Sequence[str], row: Sequence[Any]) -> dict[str, Any]:
    """
    Convert one result row into a column name -> value mapping.

    Args:
        columns: Column names in result order
        row: Values for one row, in the same order

    Raises:
        RowDecodeError: If the row can't be read or doesn't match the columns
    """
    try:
        values = tuple(row)
    except TypeError as exc:
        raise RowDecodeError(f"failed to read row: {exc}") from exc

    if len(values) != len(columns):
        raise RowDecodeError(
            f"row has {len(values)} values but query returned {len(columns)} columns"
        )

    record: dict[str, Any] = {}
    for name, value in zip(columns, values):
        record[str(name)] = normalize_value(value)
    return record
