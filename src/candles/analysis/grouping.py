"""Decade grouping of yearly bars."""

from __future__ import annotations

from collections.abc import Iterable

from candles.exceptions import InvalidYearKeyError
from candles.types import Bar


def bar_year(bar: Bar) -> int:
    """Parse a bar key as an integer year.

    :raises InvalidYearKeyError: If the key is not made only of digits.
    """
    if not bar.key.isdigit():
        raise InvalidYearKeyError(bar.key)
    return int(bar.key)


def decade_of(year: int) -> int:
    """First year of the decade containing ``year``."""
    return year // 10 * 10


def group_by_decade(bars: Iterable[Bar]) -> list[list[Bar]]:
    """Split bars into contiguous runs that share a decade.

    Input order is trusted and kept: a new group starts whenever the decade
    differs from the previous bar's, so unsorted input can produce several
    groups for the same decade.

    :param bars: Yearly bars.
    :returns: Groups in encounter order; their concatenation equals the input.
    :raises InvalidYearKeyError: If a key is not an integer year.
    """
    groups: list[list[Bar]] = []
    current_decade: int | None = None
    for bar in bars:
        decade = decade_of(bar_year(bar))
        if decade != current_decade:
            groups.append([])
            current_decade = decade
        groups[-1].append(bar)
    return groups
