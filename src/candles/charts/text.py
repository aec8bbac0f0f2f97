"""Fixed-width ASCII charts for bars and forecast series.

Renderers return the chart as a list of lines (plot rows first, then one
label row) and never print. Every line of a chart has the same layout:
a right-aligned value label followed by one fixed-width cell per column.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from candles.analysis.grouping import bar_year, decade_of, group_by_decade
from candles.exceptions import DataValidationError
from candles.types import Bar

# Bar charts
MIN_BAR_PLOT_HEIGHT = 10
BAR_COLUMN_WIDTH = 7
HIGH_GLYPH = "*"
LOW_GLYPH = "*"
OPEN_GLYPH = "O"
CLOSE_GLYPH = "C"
STALK_GLYPH = "|"
GROUP_SEPARATOR = "-" * 35

# Series charts
LABELLED_COLUMN_WIDTH = 4
SPACER_COLUMN_WIDTH = 2
HISTORICAL_GLYPH = "O"
PREDICTED_GLYPH = "*"


def _value_span(low: float, high: float) -> float:
    value_range = high - low
    # A flat series still gets a usable band.
    return value_range if value_range != 0 else 1.0


def _row_labels(values: list[float], fmt: str) -> list[str]:
    labels = [format(value, fmt) for value in values]
    width = max(len(label) for label in labels)
    return [label.rjust(width) for label in labels]


def bar_plot_height(plot_height: int, value_range: float) -> int:
    """Effective number of rows for a bar chart.

    High-variance series use up to ``plot_height`` rows, low-variance ones
    are capped to twice their range, and no chart is shorter than
    ``MIN_BAR_PLOT_HEIGHT``.
    """
    return max(min(plot_height, int(value_range * 2)), MIN_BAR_PLOT_HEIGHT)


def _bar_glyph(row: int, open_row: int, close_row: int, high_row: int, low_row: int) -> str:
    if row == high_row:
        return HIGH_GLYPH
    if row == low_row:
        return LOW_GLYPH
    if row == open_row:
        return OPEN_GLYPH
    if row == close_row:
        return CLOSE_GLYPH
    if low_row < row < high_row:
        return STALK_GLYPH
    return " "


def render_bars(bars: Sequence[Bar], plot_height: int = 20) -> list[str]:
    """Render bars as a text candlestick chart.

    :param bars: Bars to plot, one column each, in the given order.
    :param plot_height: Requested number of rows above the zero row.
    :returns: Plot rows from the highest value down, then the key row;
        an empty list when there are no bars.
    """
    if not bars:
        return []

    global_low = min(bar.low for bar in bars)
    global_high = max(bar.high for bar in bars)
    value_range = _value_span(global_low, global_high)
    height = bar_plot_height(plot_height, value_range)
    width = max(BAR_COLUMN_WIDTH, max(len(bar.key) for bar in bars) + 1)

    def to_row(value: float) -> int:
        return int((value - global_low) / value_range * height)

    positions = [
        (to_row(bar.open), to_row(bar.close), to_row(bar.high), to_row(bar.low))
        for bar in bars
    ]

    rows = list(range(height, -1, -1))
    labels = _row_labels([global_low + row * value_range / height for row in rows], ".1f")

    lines = []
    for row, label in zip(rows, labels):
        cells = "".join(_bar_glyph(row, *position).ljust(width) for position in positions)
        lines.append(f"{label} | {cells}")

    indent = " " * (len(labels[0]) + 3)
    lines.append(indent + "".join(bar.key.ljust(width) for bar in bars))
    return lines


def render_grouped_bars(bars: Sequence[Bar], plot_height: int = 20) -> list[str]:
    """Render yearly bars as one chart per decade.

    Each decade gets a heading line, its chart and a separator line.

    :raises InvalidYearKeyError: If a bar key is not an integer year.
    """
    lines: list[str] = []
    for group in group_by_decade(bars):
        lines.append(f"Candlestick Data for {decade_of(bar_year(group[0]))}s:")
        lines.extend(render_bars(group, plot_height))
        lines.append(GROUP_SEPARATOR)
    return lines


def label_interval(years: Sequence[int]) -> int:
    """Spacing between labelled years for a series spanning ``years``."""
    if not years:
        return 1
    span = years[-1] - years[0] + 1
    if span > 20:
        return 5
    if span > 10:
        return 2
    return 1


def render_series(
    historical: Sequence[tuple[int, float]],
    predicted: Sequence[tuple[int, float]],
    plot_height: int = 8,
) -> list[str]:
    """Render historical and predicted ``(year, value)`` points on one scale.

    Only years that are multiples of :func:`label_interval` are plotted and
    labelled; the others are kept as narrow blank columns so the horizontal
    spacing still reflects time.

    :param historical: Observed samples, in year order.
    :param predicted: Predicted samples following the historical ones.
    :param plot_height: Number of rows above the zero row.
    :returns: Plot rows from the highest value down, then the year row;
        an empty list when both series are empty.
    :raises DataValidationError: If plot_height is not positive.
    """
    if plot_height < 1:
        raise DataValidationError(f"plot_height must be positive, got {plot_height}")

    points = [(year, value, HISTORICAL_GLYPH) for year, value in historical]
    points += [(year, value, PREDICTED_GLYPH) for year, value in predicted]
    if not points:
        return []

    values = [value for _, value, _ in points]
    global_low = min(values)
    value_range = _value_span(global_low, max(values))
    interval = label_interval([year for year, _ in historical] or [year for year, _ in predicted])

    def to_row(value: float) -> int:
        return math.floor((value - global_low) / value_range * plot_height + 0.5)

    columns = [
        (to_row(value), glyph) if year % interval == 0 else None
        for year, value, glyph in points
    ]

    rows = list(range(plot_height, -1, -1))
    labels = _row_labels([global_low + row * value_range / plot_height for row in rows], ".1f")

    lines = []
    for row, label in zip(rows, labels):
        cells = []
        for column in columns:
            if column is None:
                cells.append(" " * SPACER_COLUMN_WIDTH)
            elif column[0] == row:
                cells.append(f"  {column[1]} ")
            else:
                cells.append(" " * LABELLED_COLUMN_WIDTH)
        lines.append(f"{label} | " + "".join(cells))

    indent = " " * (len(labels[0]) + 3)
    year_labels = [
        f" '{year % 100:02d}" if year % interval == 0 else " " * SPACER_COLUMN_WIDTH
        for year, _, _ in points
    ]
    lines.append(indent + "".join(year_labels))
    return lines
