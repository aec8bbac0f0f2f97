"""Text chart rendering."""

from candles.charts.text import (
    bar_plot_height,
    label_interval,
    render_bars,
    render_grouped_bars,
    render_series,
)

__all__ = [
    "bar_plot_height",
    "label_interval",
    "render_bars",
    "render_grouped_bars",
    "render_series",
]
