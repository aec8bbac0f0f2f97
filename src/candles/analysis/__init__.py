"""Aggregation, filtering, grouping and regression over OHLC bars."""

from candles.analysis.aggregation import (
    aggregate,
    bucket_readings,
    find_column,
    parse_granularity,
    value_column,
)
from candles.analysis.filters import (
    clip_bar,
    filter_by_key_range,
    filter_by_value_range,
)
from candles.analysis.forecast import forecast, yearly_samples
from candles.analysis.grouping import bar_year, decade_of, group_by_decade
from candles.analysis.regression import fit, normal_equations, predict, solve

__all__ = [
    # Aggregation
    "aggregate",
    "bucket_readings",
    "find_column",
    "parse_granularity",
    "value_column",
    # Filters
    "clip_bar",
    "filter_by_key_range",
    "filter_by_value_range",
    # Grouping
    "bar_year",
    "decade_of",
    "group_by_decade",
    # Regression
    "fit",
    "normal_equations",
    "predict",
    "solve",
    # Forecast
    "forecast",
    "yearly_samples",
]
