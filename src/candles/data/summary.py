"""Dataset summaries shown before choosing filters or forecast windows."""

from __future__ import annotations

import math
from collections.abc import Sequence

from candles.types import Table


def _is_metric_column(name: str, metric: str) -> bool:
    return name.endswith(f"_{metric}") and len(name) > len(metric) + 1


def available_prefixes(header: Sequence[str], metric: str = "temperature") -> list[str]:
    """Entity prefixes of every ``<PREFIX>_<metric>`` column, in header order.

    :param header: Header row of the table.
    :param metric: Metric suffix to look for.
    :returns: Prefixes such as ``["AT", "BE"]``.
    """
    suffix_length = len(metric) + 1
    return [name[:-suffix_length] for name in header if _is_metric_column(name, metric)]


def value_range(table: Table, metric: str = "temperature") -> tuple[float, float] | None:
    """Smallest and largest reading over every column of one metric.

    Cells that do not parse as finite numbers are ignored.

    :param table: Header row followed by data rows.
    :param metric: Metric suffix of the columns to scan.
    :returns: ``(minimum, maximum)``, or None when nothing parses.
    """
    if not table:
        return None

    columns = [i for i, name in enumerate(table[0]) if _is_metric_column(name, metric)]
    low = math.inf
    high = -math.inf
    for row in table[1:]:
        for i in columns:
            if i >= len(row):
                continue
            try:
                reading = float(row[i])
            except ValueError:
                continue
            if math.isfinite(reading):
                low = min(low, reading)
                high = max(high, reading)

    if low > high:
        return None
    return low, high


def date_span(table: Table) -> tuple[str, str] | None:
    """First and last data-row dates, truncated to ``YYYY-MM-DD``.

    :param table: Header row followed by data rows in chronological order.
    :returns: ``(start, end)``, or None when there are no data rows.
    """
    if len(table) < 2:
        return None
    return table[1][0][:10], table[-1][0][:10]
