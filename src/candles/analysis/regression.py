"""Polynomial least-squares regression.

The fit builds the normal equations of a polynomial basis and solves them by
Gauss-Jordan elimination without row exchanges. Each elimination step
produces a new matrix/vector pair rather than updating the previous one.
A pivot that is zero, or negligible relative to the matrix scale, raises
:class:`SingularMatrixError` instead of letting NaN or Inf leak into the
coefficients.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray

from candles.exceptions import DataValidationError, SingularMatrixError
from candles.types import PolynomialModel

logger = logging.getLogger(__name__)


def normal_equations(
    xs: Sequence[float],
    ys: Sequence[float],
    degree: int,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Build the normal-equations system for a polynomial fit.

    ``X[j][k] = sum(x**(j + k))`` and ``Y[j] = sum(x**j * y)`` for
    ``j, k`` in ``[0, degree]``.

    :param xs: Sample x-values.
    :param ys: Sample y-values.
    :param degree: Polynomial degree.
    :returns: ``(X, Y)`` as float64 arrays.
    """
    x = np.asarray(xs, dtype=np.float64)
    y = np.asarray(ys, dtype=np.float64)

    # Column p holds x**p for every sample.
    powers = np.vander(x, 2 * degree + 1, increasing=True)
    power_sums = powers.sum(axis=0)

    size = degree + 1
    rows, cols = np.indices((size, size))
    matrix = power_sums[rows + cols]
    rhs = powers[:, :size].T @ y
    return matrix, rhs


def _eliminate(
    matrix: NDArray[np.float64],
    rhs: NDArray[np.float64],
    pivot_index: int,
    tolerance: float,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Clear column ``pivot_index`` from every row except the pivot row."""
    pivot = matrix[pivot_index, pivot_index]
    if abs(pivot) <= tolerance:
        raise SingularMatrixError(pivot_index, float(pivot))

    ratios = matrix[:, pivot_index] / pivot
    ratios[pivot_index] = 0.0
    next_matrix = matrix - np.outer(ratios, matrix[pivot_index])
    next_rhs = rhs - ratios * rhs[pivot_index]
    return next_matrix, next_rhs


def solve(matrix: NDArray[np.float64], rhs: NDArray[np.float64]) -> NDArray[np.float64]:
    """Solve ``matrix @ b = rhs`` by Gauss-Jordan elimination without pivoting.

    :param matrix: Square system matrix.
    :param rhs: Right-hand side vector.
    :returns: Solution vector.
    :raises SingularMatrixError: If a pivot is zero or numerically negligible.
    """
    size = matrix.shape[0]
    scale = float(np.abs(matrix).max()) if matrix.size else 0.0
    tolerance = np.finfo(np.float64).eps * size * scale

    for pivot_index in range(size):
        matrix, rhs = _eliminate(matrix, rhs, pivot_index, tolerance)

    return rhs / np.diag(matrix)


def fit(xs: Sequence[float], ys: Sequence[float], degree: int) -> PolynomialModel:
    """Fit a least-squares polynomial of the given degree.

    :param xs: Sample x-values (e.g. years).
    :param ys: Sample y-values aligned with ``xs``.
    :param degree: Polynomial degree, zero or more.
    :returns: Fitted model.
    :raises DataValidationError: If the samples are misaligned or degree < 0.
    :raises SingularMatrixError: If the normal equations are singular, for
        instance with fewer distinct x-values than ``degree + 1``.
    """
    if len(xs) != len(ys):
        raise DataValidationError(
            f"xs and ys must have the same length ({len(xs)} != {len(ys)})"
        )
    if degree < 0:
        raise DataValidationError(f"degree must be non-negative, got {degree}")

    matrix, rhs = normal_equations(xs, ys, degree)
    coefficients = solve(matrix, rhs)
    logger.debug(
        "Fitted degree %d polynomial to %d samples: %s", degree, len(xs), coefficients
    )
    return PolynomialModel(degree=degree, coefficients=[float(c) for c in coefficients])


def predict(model: PolynomialModel, xs: Sequence[float]) -> list[float]:
    """Evaluate a fitted polynomial at each x.

    No range check is made; extrapolating past the samples is the intended use.

    :param model: Fitted model.
    :param xs: Points to evaluate.
    :returns: Predicted values aligned with ``xs``.
    """
    predictions = []
    for x in xs:
        value = 0.0
        for coefficient in reversed(model.coefficients):
            value = value * x + coefficient
        predictions.append(value)
    return predictions
