"""Short-horizon forecasts over yearly bars."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from candles.analysis.grouping import bar_year
from candles.analysis.regression import fit, predict
from candles.exceptions import DataValidationError, EmptyInputError
from candles.types import Bar, Forecast

logger = logging.getLogger(__name__)

DEFAULT_DEGREE = 2
DEFAULT_HORIZON = 3


def yearly_samples(
    bars: Iterable[Bar],
    start_year: int,
    end_year: int,
) -> tuple[list[int], list[float]]:
    """Derive ``(year, midpoint)`` samples from bars inside a year window.

    :param bars: Yearly bars.
    :param start_year: First year kept (inclusive).
    :param end_year: Last year kept (inclusive).
    :returns: Years and the matching ``(high + low) / 2`` values.
    :raises InvalidYearKeyError: If a bar key is not an integer year.
    """
    years: list[int] = []
    values: list[float] = []
    for bar in bars:
        year = bar_year(bar)
        if start_year <= year <= end_year:
            years.append(year)
            values.append(bar.midpoint)
    return years, values


def forecast(
    bars: Iterable[Bar],
    start_year: int,
    end_year: int,
    degree: int = DEFAULT_DEGREE,
    horizon: int = DEFAULT_HORIZON,
) -> Forecast:
    """Fit a polynomial to yearly midpoints and predict the following years.

    The predicted years are the ``horizon`` years right after the last
    sample year.

    :param bars: Yearly bars in chronological order.
    :param start_year: First year of the sample window (inclusive).
    :param end_year: Last year of the sample window (inclusive).
    :param degree: Polynomial degree.
    :param horizon: Number of years to predict.
    :returns: Samples, predictions and the fitted model.
    :raises DataValidationError: If horizon is not positive.
    :raises EmptyInputError: If no bar falls inside the window.
    :raises SingularMatrixError: If the samples cannot determine the model.
    """
    if horizon < 1:
        raise DataValidationError(f"horizon must be positive, got {horizon}")

    years, values = yearly_samples(bars, start_year, end_year)
    if not years:
        raise EmptyInputError(f"No data available between {start_year} and {end_year}")

    model = fit(years, values, degree)
    predict_years = [years[-1] + step for step in range(1, horizon + 1)]
    predictions = predict(model, predict_years)
    logger.info(
        "Forecast %d years after %d from %d samples", horizon, years[-1], len(years)
    )
    return Forecast(
        years=years,
        values=values,
        predict_years=predict_years,
        predictions=predictions,
        model=model,
    )
