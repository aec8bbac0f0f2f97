"""Table sources that load raw readings for aggregation.

This module provides an abstract interface for table sources and a CSV
implementation. A table is a header row followed by data rows, all cells
kept as strings; numeric parsing is left to the aggregator.
"""

from __future__ import annotations

import csv
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from candles.exceptions import DataSourceError

logger = logging.getLogger(__name__)


class TableSource(ABC):
    """Abstract base class for table sources.

    All table source implementations must inherit from this class and
    implement the `load_table` method.
    """

    @abstractmethod
    def load_table(self) -> list[list[str]]:
        """Load the full table.

        :returns: Header row followed by data rows; empty if there is no data.
        :raises DataSourceError: If loading fails.
        """
        ...


class CSVTableSource(TableSource):
    """Table source that reads a CSV file.

    Expected CSV format: a header row whose first column is the timestamp,
    followed by one column per observed metric, e.g.
    ``utc_timestamp,AT_temperature,BE_temperature``.

    :param source_params: Required parameters:
        - file_path: Path to the CSV file.
        Optional parameters:
        - delimiter: CSV delimiter (default: ",")
    """

    def __init__(self, source_params: dict[str, Any] | None = None) -> None:
        """Initialize CSV table source.

        :param source_params: Configuration with file_path and optional delimiter.
        :raises DataSourceError: If file_path is not provided.
        """
        self.params = source_params or {}
        self.file_path = self.params.get("file_path")
        if not self.file_path:
            raise DataSourceError("CSVTableSource requires 'file_path' in source_params")
        self.delimiter = self.params.get("delimiter", ",")

    def load_table(self) -> list[list[str]]:
        """Read every non-empty row of the CSV file.

        :returns: Header row followed by data rows.
        :raises DataSourceError: If the file is missing or unreadable.
        """
        path = Path(self.file_path)
        if not path.exists():
            raise DataSourceError(f"CSV file not found: {self.file_path}")

        try:
            with open(path, newline="", encoding="utf-8") as f:
                reader = csv.reader(f, delimiter=self.delimiter)
                table = [row for row in reader if row]
        except csv.Error as e:
            raise DataSourceError(f"CSV parsing error: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise DataSourceError(f"Failed to read CSV file: {e}") from e

        logger.info("Loaded %d rows from %s", max(len(table) - 1, 0), path)
        return table
