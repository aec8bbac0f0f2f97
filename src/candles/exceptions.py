"""Candles exception hierarchy.

All candles-specific exceptions derive from :class:`CandlesError` so callers can
catch all analysis-related errors uniformly.
"""

from __future__ import annotations


class CandlesError(Exception):
    """Base class for candles-related exceptions.

    Derived exceptions should extend this class so that callers can catch all
    candles-specific errors uniformly.
    """


class ConfigError(CandlesError):
    """Raised when configuration files or parameters are invalid."""


class DataSourceError(CandlesError):
    """Raised when reading a table from a data source fails."""


class DataValidationError(CandlesError):
    """Raised when input data or arguments fail validation checks.

    Named DataValidationError to avoid conflict with pydantic's ValidationError.
    """


class ColumnNotFoundError(DataValidationError):
    """Raised when the requested value column is absent from the table header.

    :param column: Header name that was looked up.
    """

    def __init__(self, column: str) -> None:
        super().__init__(f"Column not found: {column}")
        self.column = column


class MalformedReadingError(DataValidationError):
    """Raised when a table cell cannot be parsed as a numeric reading.

    The aggregator absorbs this error, logs it and skips the row.

    :param row_index: Index of the offending row in the table.
    :param cell: Raw cell content, or None when the row is too short.
    """

    def __init__(self, row_index: int, cell: str | None) -> None:
        super().__init__(f"Invalid reading {cell!r} in row {row_index}")
        self.row_index = row_index
        self.cell = cell


class InvalidYearKeyError(DataValidationError):
    """Raised when a bar key does not parse as an integer year.

    :param key: The offending bar key.
    """

    def __init__(self, key: str) -> None:
        super().__init__(f"Bar key is not a year: {key!r}")
        self.key = key


class EmptyInputError(DataValidationError):
    """Raised when an operation that needs samples receives none."""


class SingularMatrixError(CandlesError):
    """Raised when an elimination pivot is zero or numerically negligible.

    :param pivot_index: Row/column index of the failing pivot.
    :param pivot: Value of the pivot when elimination reached it.
    """

    def __init__(self, pivot_index: int, pivot: float) -> None:
        super().__init__(
            f"Singular normal-equations matrix: pivot {pivot_index} is {pivot!r}"
        )
        self.pivot_index = pivot_index
        self.pivot = pivot


__all__ = [
    "CandlesError",
    "ConfigError",
    "DataSourceError",
    "DataValidationError",
    "ColumnNotFoundError",
    "MalformedReadingError",
    "InvalidYearKeyError",
    "EmptyInputError",
    "SingularMatrixError",
]
