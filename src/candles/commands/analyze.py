"""Configuration and execution for the run command.

Example config file (analysis.yaml):

    data:
      file_path: "weather_data.csv"
      delimiter: ","  # Optional
    country: "AT"
    metric: "temperature"  # Optional
    granularity: "year"  # Optional: year, month or day
    plot_height: 20  # Optional
    filters:  # Optional
      start_key: "1990"
      end_key: "2000"
      min_value: 3.0
      max_value: 12.0
    forecast:  # Optional
      start_year: 1980
      end_year: 2019
      degree: 2
      horizon: 3
    logging:
      level: "INFO"
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field

from candles.analysis import (
    aggregate,
    filter_by_key_range,
    filter_by_value_range,
    forecast,
    value_column,
)
from candles.charts import render_bars, render_grouped_bars, render_series
from candles.exceptions import ConfigError
from candles.types import (
    AnalysisConfig,
    Bar,
    FilterConfig,
    Forecast,
    ForecastConfig,
    FrozenModel,
    Granularity,
    Table,
)

logger = logging.getLogger(__name__)

# Valid log levels
VALID_LOG_LEVELS = frozenset(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])

FORECAST_PLOT_HEIGHT = 8


class AnalysisReport(FrozenModel):
    """Everything an analysis run computed, ready for display.

    :param column: Value column the bars were computed from.
    :param bars: Bars straight from aggregation.
    :param filtered_bars: Bars after the configured filters.
    :param chart: Chart lines for the filtered bars.
    :param forecast: Forecast result, or None when not configured.
    :param forecast_chart: Chart lines for the forecast series.
    """

    column: str
    bars: list[Bar]
    filtered_bars: list[Bar]
    chart: list[str] = Field(default_factory=list)
    forecast: Forecast | None = None
    forecast_chart: list[str] = Field(default_factory=list)


def _require_mapping(raw: Any, name: str) -> dict[str, Any]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"'{name}' must be a mapping")
    return raw


def _parse_number(raw: Any, name: str) -> float | None:
    if raw is None:
        return None
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ConfigError(f"'{name}' must be a number")
    return float(raw)


def _parse_int(raw: Any, name: str) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ConfigError(f"'{name}' must be an integer")
    return raw


def _parse_filters(raw: Any) -> FilterConfig:
    raw_filters = _require_mapping(raw, "filters")

    start_key = raw_filters.get("start_key")
    end_key = raw_filters.get("end_key")
    if (start_key is None) != (end_key is None):
        raise ConfigError("'filters' must set both 'start_key' and 'end_key' or neither")
    if start_key is not None:
        start_key, end_key = str(start_key), str(end_key)
        if start_key > end_key:
            raise ConfigError("'filters.start_key' must not be after 'filters.end_key'")

    min_value = _parse_number(raw_filters.get("min_value"), "filters.min_value")
    max_value = _parse_number(raw_filters.get("max_value"), "filters.max_value")
    if (min_value is None) != (max_value is None):
        raise ConfigError("'filters' must set both 'min_value' and 'max_value' or neither")
    if min_value is not None and max_value is not None and min_value > max_value:
        raise ConfigError("'filters.min_value' must not exceed 'filters.max_value'")

    return FilterConfig(
        start_key=start_key,
        end_key=end_key,
        min_value=min_value,
        max_value=max_value,
    )


def _parse_forecast(raw: Any) -> ForecastConfig | None:
    if raw is None:
        return None
    raw_forecast = _require_mapping(raw, "forecast")
    for field in ("start_year", "end_year"):
        if field not in raw_forecast:
            raise ConfigError(f"Missing required field: forecast.{field}")

    start_year = _parse_int(raw_forecast["start_year"], "forecast.start_year")
    end_year = _parse_int(raw_forecast["end_year"], "forecast.end_year")
    if start_year > end_year:
        raise ConfigError("'forecast.start_year' must not be after 'forecast.end_year'")

    degree = _parse_int(raw_forecast.get("degree", 2), "forecast.degree")
    if degree < 0:
        raise ConfigError("'forecast.degree' must be non-negative")
    horizon = _parse_int(raw_forecast.get("horizon", 3), "forecast.horizon")
    if horizon < 1:
        raise ConfigError("'forecast.horizon' must be positive")

    return ForecastConfig(
        start_year=start_year,
        end_year=end_year,
        degree=degree,
        horizon=horizon,
    )


def load_analysis_config(config_path: str | Path) -> AnalysisConfig:
    """Parse and validate an analysis configuration file.

    :param config_path: Path to YAML configuration file.
    :returns: Validated AnalysisConfig object.
    :raises ConfigError: If file cannot be read or config is invalid.
    """
    config_path = Path(config_path)

    # Read and parse YAML
    try:
        with open(config_path) as f:
            raw_config = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Configuration file not found: {config_path}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in configuration file: {e}") from e

    if not isinstance(raw_config, dict):
        raise ConfigError("Configuration must be a YAML mapping")

    # Validate required fields
    for field in ("data", "country"):
        if field not in raw_config:
            raise ConfigError(f"Missing required field: {field}")

    raw_data = _require_mapping(raw_config["data"], "data")
    file_path = raw_data.get("file_path")
    if not file_path:
        raise ConfigError("'data.file_path' is required")
    delimiter = raw_data.get("delimiter", ",")
    if not isinstance(delimiter, str) or len(delimiter) != 1:
        raise ConfigError("'data.delimiter' must be a single character")

    country = raw_config["country"]
    if not isinstance(country, str) or not country:
        raise ConfigError("'country' must be a non-empty string")

    metric = raw_config.get("metric", "temperature")
    if not isinstance(metric, str) or not metric:
        raise ConfigError("'metric' must be a non-empty string")

    # Parse granularity
    raw_granularity = raw_config.get("granularity", Granularity.YEAR.value)
    try:
        granularity = Granularity(raw_granularity)
    except ValueError as e:
        raise ConfigError(
            f"Invalid granularity '{raw_granularity}'. "
            f"Valid options: {[g.value for g in Granularity]}"
        ) from e

    plot_height = _parse_int(raw_config.get("plot_height", 20), "plot_height")
    if plot_height < 1:
        raise ConfigError("'plot_height' must be positive")

    filters = _parse_filters(raw_config.get("filters"))
    forecast_config = _parse_forecast(raw_config.get("forecast"))

    # Parse logging (optional)
    raw_logging = _require_mapping(raw_config.get("logging"), "logging")
    log_level = str(raw_logging.get("level", "INFO")).upper()
    if log_level not in VALID_LOG_LEVELS:
        raise ConfigError(
            f"Invalid log level '{log_level}'. Valid options: {sorted(VALID_LOG_LEVELS)}"
        )

    return AnalysisConfig(
        file_path=str(file_path),
        delimiter=delimiter,
        country=country,
        metric=metric,
        granularity=granularity,
        plot_height=plot_height,
        filters=filters,
        forecast=forecast_config,
        log_level=log_level,
    )


def apply_filters(bars: list[Bar], filters: FilterConfig) -> list[Bar]:
    """Apply the key and value filters that are set in ``filters``."""
    if filters.start_key is not None and filters.end_key is not None:
        bars = filter_by_key_range(bars, filters.start_key, filters.end_key)
    if filters.min_value is not None and filters.max_value is not None:
        bars = filter_by_value_range(bars, filters.min_value, filters.max_value)
    return bars


def run_analysis(config: AnalysisConfig, table: Table) -> AnalysisReport:
    """Run aggregation, filtering, charting and forecasting on a table.

    Yearly bars are charted one decade at a time; month and day bars are
    charted as a single chart.

    :param config: Validated analysis configuration.
    :param table: Header row followed by data rows.
    :returns: Computed bars, charts and forecast.
    :raises ColumnNotFoundError: If the configured column is absent.
    :raises EmptyInputError: If the forecast window holds no bars.
    :raises SingularMatrixError: If the forecast system cannot be solved.
    """
    column = value_column(config.country, config.metric)
    bars = aggregate(table, column, config.granularity)
    filtered = apply_filters(bars, config.filters)
    logger.info("Computed %d bars for %s, %d after filters", len(bars), column, len(filtered))

    if config.granularity is Granularity.YEAR:
        chart = render_grouped_bars(filtered, config.plot_height)
    else:
        chart = render_bars(filtered, config.plot_height)

    forecast_result = None
    forecast_chart: list[str] = []
    if config.forecast is not None:
        yearly = bars if config.granularity is Granularity.YEAR else aggregate(table, column)
        forecast_result = forecast(
            yearly,
            config.forecast.start_year,
            config.forecast.end_year,
            degree=config.forecast.degree,
            horizon=config.forecast.horizon,
        )
        forecast_chart = render_series(
            forecast_result.historical,
            forecast_result.predicted,
            FORECAST_PLOT_HEIGHT,
        )

    return AnalysisReport(
        column=column,
        bars=bars,
        filtered_bars=filtered,
        chart=chart,
        forecast=forecast_result,
        forecast_chart=forecast_chart,
    )
