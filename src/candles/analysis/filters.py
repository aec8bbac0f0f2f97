"""Key-range and value-range filters over bar sequences.

Both filters are pure: they never modify the bars they are given.
"""

from __future__ import annotations

from collections.abc import Iterable

from candles.types import Bar


def filter_by_key_range(bars: Iterable[Bar], start_key: str, end_key: str) -> list[Bar]:
    """Keep bars whose key lies in ``[start_key, end_key]``.

    Keys are compared as strings, which matches chronological order for
    zero-padded keys of equal width.

    :param bars: Bars to filter.
    :param start_key: Inclusive lower key.
    :param end_key: Inclusive upper key.
    :returns: Matching bars in input order.
    """
    return [bar for bar in bars if start_key <= bar.key <= end_key]


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


def clip_bar(bar: Bar, min_value: float, max_value: float) -> Bar:
    """Return a copy of ``bar`` narrowed to ``[min_value, max_value]``.

    The caller must make sure the bar overlaps the range.
    """
    high = min(bar.high, max_value)
    low = max(bar.low, min_value)
    return Bar(
        key=bar.key,
        open=_clamp(bar.open, low, high),
        high=high,
        low=low,
        close=_clamp(bar.close, low, high),
    )


def filter_by_value_range(
    bars: Iterable[Bar],
    min_value: float,
    max_value: float,
) -> list[Bar]:
    """Drop bars outside a value range and clip the ones that overlap it.

    Open and close values outside the clipped ``[low, high]`` interval are
    clamped to it, so the result is lossy but every bar stays consistent.

    :param bars: Bars to filter.
    :param min_value: Lower bound of the range.
    :param max_value: Upper bound of the range.
    :returns: Clipped copies of the overlapping bars, in input order.
    """
    if min_value > max_value:
        return []
    return [
        clip_bar(bar, min_value, max_value)
        for bar in bars
        if not (bar.high < min_value or bar.low > max_value)
    ]
