"""Aggregation of raw table readings into OHLC bars.

Readings are bucketed by a truncated timestamp key. Within each bucket the
original row order is kept, so the first reading becomes the bar's open and
the last one its close.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from candles.exceptions import (
    ColumnNotFoundError,
    DataValidationError,
    MalformedReadingError,
)
from candles.types import Bar, BarKey, Granularity, Table

logger = logging.getLogger(__name__)


def value_column(prefix: str, metric: str = "temperature") -> str:
    """Build the conventional ``<PREFIX>_<metric>`` column name.

    :param prefix: Entity prefix, e.g. "AT".
    :param metric: Metric suffix.
    :returns: Header name of the value column.
    """
    return f"{prefix}_{metric}"


def find_column(header: Sequence[str], column: str) -> int:
    """Locate a column by exact header match.

    :param header: Header row of the table.
    :param column: Column name to look up.
    :returns: Index of the first matching header cell.
    :raises ColumnNotFoundError: If no header cell matches.
    """
    for index, name in enumerate(header):
        if name == column:
            return index
    raise ColumnNotFoundError(column)


def _parse_reading(row: Sequence[str], row_index: int, column_index: int) -> float:
    if column_index >= len(row):
        raise MalformedReadingError(row_index, None)
    cell = row[column_index]
    try:
        reading = float(cell)
    except ValueError as e:
        raise MalformedReadingError(row_index, cell) from e
    if not math.isfinite(reading):
        raise MalformedReadingError(row_index, cell)
    return reading


def parse_granularity(granularity: Granularity | str) -> Granularity:
    """Coerce a granularity name into a :class:`Granularity`.

    :raises DataValidationError: If the name is not year, month or day.
    """
    try:
        return Granularity(granularity)
    except ValueError as e:
        raise DataValidationError(
            f"Invalid granularity '{granularity}'. "
            f"Valid options: {[g.value for g in Granularity]}"
        ) from e


def bucket_readings(
    table: Table,
    column: str,
    granularity: Granularity | str,
) -> dict[str, list[float]]:
    """Group the readings of one column by truncated timestamp.

    Rows whose cell cannot be parsed are logged and skipped.

    :param table: Header row followed by data rows.
    :param column: Exact header name of the value column.
    :param granularity: Bucket granularity.
    :returns: Mapping from bucket key to readings in row order.
    :raises ColumnNotFoundError: If the column is not in the header.
    """
    granularity = parse_granularity(granularity)
    if not table:
        return {}

    column_index = find_column(table[0], column)
    key_length = granularity.key_length

    buckets: dict[str, list[float]] = {}
    for row_index in range(1, len(table)):
        row = table[row_index]
        if not row:
            continue
        try:
            reading = _parse_reading(row, row_index, column_index)
        except MalformedReadingError as e:
            logger.warning("%s; skipping row", e)
            continue
        buckets.setdefault(row[0][:key_length], []).append(reading)

    logger.debug(
        "Bucketed %s by %s into %d buckets", column, granularity.value, len(buckets)
    )
    return buckets


def aggregate(
    table: Table,
    column: str,
    granularity: Granularity | str = Granularity.YEAR,
) -> list[Bar]:
    """Compute one OHLC bar per non-empty bucket.

    :param table: Header row followed by data rows.
    :param column: Exact header name of the value column.
    :param granularity: Bucket granularity ("year", "month" or "day").
    :returns: Bars in ascending key order; empty if the table has no data rows.
    :raises ColumnNotFoundError: If the column is not in the header.
    """
    buckets = bucket_readings(table, column, granularity)
    return [
        Bar(
            key=BarKey(key),
            open=readings[0],
            high=max(readings),
            low=min(readings),
            close=readings[-1],
        )
        for key, readings in sorted(buckets.items())
    ]
