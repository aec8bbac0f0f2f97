"""Core type definitions for candles.

All data models use Pydantic BaseModel for automatic validation, JSON
serialization, and better error messages.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import NewType

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Type aliases for domain-specific identifiers
BarKey = NewType("BarKey", str)

# Header row followed by data rows; cell 0 of each data row is a timestamp.
Table = Sequence[Sequence[str]]


# ---------------------------------------------------------------------------
# Base Configuration
# ---------------------------------------------------------------------------


class FrozenModel(BaseModel):
    """Base model with frozen (immutable) configuration."""

    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Bucketing
# ---------------------------------------------------------------------------


class Granularity(str, Enum):
    """Truncation precision used to build bucket keys from timestamps."""

    YEAR = "year"
    MONTH = "month"
    DAY = "day"

    @property
    def key_length(self) -> int:
        """Number of leading timestamp characters kept in the bucket key."""
        return _KEY_LENGTHS[self]


_KEY_LENGTHS = {
    Granularity.YEAR: 4,
    Granularity.MONTH: 7,
    Granularity.DAY: 10,
}


# ---------------------------------------------------------------------------
# Bar Types
# ---------------------------------------------------------------------------


class Bar(FrozenModel):
    """OHLC summary of the readings that share one bucket key.

    Keys must be fixed-width, zero-padded ISO-style prefixes ("YYYY",
    "YYYY-MM" or "YYYY-MM-DD") so that string order is chronological order.

    :param key: Truncated timestamp identifying the bucket.
    :param open: First reading in the bucket.
    :param high: Highest reading in the bucket.
    :param low: Lowest reading in the bucket.
    :param close: Last reading in the bucket.
    """

    key: BarKey
    open: float
    high: float
    low: float
    close: float

    @model_validator(mode="after")
    def _check_ohlc(self) -> Bar:
        if not (self.low <= self.open <= self.high):
            raise ValueError(
                f"open {self.open} outside [{self.low}, {self.high}] for {self.key}"
            )
        if not (self.low <= self.close <= self.high):
            raise ValueError(
                f"close {self.close} outside [{self.low}, {self.high}] for {self.key}"
            )
        return self

    @property
    def midpoint(self) -> float:
        """Average of the bar's high and low."""
        return (self.high + self.low) / 2


# ---------------------------------------------------------------------------
# Regression Types
# ---------------------------------------------------------------------------


class PolynomialModel(FrozenModel):
    """Fitted polynomial ``y(x) = sum(coefficients[i] * x**i)``.

    :param degree: Degree of the polynomial.
    :param coefficients: Coefficients ordered from the constant term upward.
    """

    degree: int
    coefficients: list[float]


class Forecast(FrozenModel):
    """Historical samples of a series and the values predicted after them.

    :param years: Sample years, in bar order.
    :param values: Sample values (bar midpoints) aligned with ``years``.
    :param predict_years: Years the model was evaluated at.
    :param predictions: Predicted values aligned with ``predict_years``.
    :param model: Fitted polynomial used for the predictions.
    """

    years: list[int]
    values: list[float]
    predict_years: list[int]
    predictions: list[float]
    model: PolynomialModel

    @property
    def historical(self) -> list[tuple[int, float]]:
        """Historical samples as ``(year, value)`` pairs."""
        return list(zip(self.years, self.values))

    @property
    def predicted(self) -> list[tuple[int, float]]:
        """Predictions as ``(year, value)`` pairs."""
        return list(zip(self.predict_years, self.predictions))


# ---------------------------------------------------------------------------
# Configuration Types
# ---------------------------------------------------------------------------


class FilterConfig(FrozenModel):
    """Optional bar filters applied before plotting.

    :param start_key: Inclusive lower bar key, or None for no key filter.
    :param end_key: Inclusive upper bar key, or None for no key filter.
    :param min_value: Lower clipping bound, or None for no value filter.
    :param max_value: Upper clipping bound, or None for no value filter.
    """

    start_key: str | None = None
    end_key: str | None = None
    min_value: float | None = None
    max_value: float | None = None


class ForecastConfig(FrozenModel):
    """Parameters for a polynomial forecast over yearly bars.

    :param start_year: First year (inclusive) of the sample window.
    :param end_year: Last year (inclusive) of the sample window.
    :param degree: Polynomial degree.
    :param horizon: Number of years predicted after the last sample.
    """

    start_year: int
    end_year: int
    degree: int = 2
    horizon: int = 3


class AnalysisConfig(FrozenModel):
    """Configuration for a complete analysis run.

    :param file_path: CSV file holding the readings table.
    :param delimiter: CSV delimiter.
    :param country: Column prefix of the observed entity (e.g. "AT").
    :param metric: Column suffix of the metric (e.g. "temperature").
    :param granularity: Bucket granularity for aggregation.
    :param plot_height: Requested chart height in rows.
    :param filters: Bar filters applied before plotting.
    :param forecast: Forecast parameters, or None to skip forecasting.
    :param log_level: Logging level.
    """

    file_path: str
    delimiter: str = ","
    country: str
    metric: str = "temperature"
    granularity: Granularity = Granularity.YEAR
    plot_height: int = 20
    filters: FilterConfig = Field(default_factory=FilterConfig)
    forecast: ForecastConfig | None = None
    log_level: str = "INFO"


# ---------------------------------------------------------------------------
# Exports
# ---------------------------------------------------------------------------

__all__ = [
    # Type aliases
    "BarKey",
    "Table",
    # Base models
    "FrozenModel",
    # Bucketing
    "Granularity",
    # Bars
    "Bar",
    # Regression
    "PolynomialModel",
    "Forecast",
    # Configuration
    "FilterConfig",
    "ForecastConfig",
    "AnalysisConfig",
]
