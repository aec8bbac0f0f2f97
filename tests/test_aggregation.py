"""Tests for aggregation of table readings into bars."""

import logging

import pytest

from candles.analysis.aggregation import (aggregate, bucket_readings,
                                          find_column, parse_granularity,
                                          value_column)
from candles.exceptions import ColumnNotFoundError, DataValidationError
from candles.types import Bar, Granularity

HEADER = ["utc_timestamp", "AT_temperature", "BE_temperature"]


@pytest.fixture
def table() -> list[list[str]]:
    """Hourly readings spanning two months of 2000 and one day of 2001."""
    return [
        HEADER,
        ["2000-01-01T00:00:00Z", "-1.5", "3.0"],
        ["2000-01-01T01:00:00Z", "0.5", "2.0"],
        ["2000-01-02T00:00:00Z", "2.0", "1.0"],
        ["2000-02-01T00:00:00Z", "4.0", "0.0"],
        ["2000-02-01T01:00:00Z", "3.0", "5.0"],
        ["2001-01-01T00:00:00Z", "7.0", "6.0"],
    ]


class TestValueColumn:
    """Tests for column naming and lookup."""

    def test_value_column_default_metric(self) -> None:
        """Column names follow the <PREFIX>_<metric> convention."""
        assert value_column("AT") == "AT_temperature"
        assert value_column("DE", "radiation_direct_horizontal") == (
            "DE_radiation_direct_horizontal"
        )

    def test_find_column_exact_match(self) -> None:
        """Lookup uses exact header matches."""
        assert find_column(HEADER, "BE_temperature") == 2

    def test_find_column_missing_raises(self) -> None:
        """A missing column raises ColumnNotFoundError."""
        with pytest.raises(ColumnNotFoundError, match="XX_temperature"):
            find_column(HEADER, "XX_temperature")

    def test_parse_granularity_rejects_unknown(self) -> None:
        """Unknown granularity names raise DataValidationError."""
        assert parse_granularity("day") is Granularity.DAY
        with pytest.raises(DataValidationError, match="Invalid granularity"):
            parse_granularity("week")


class TestAggregate:
    """Tests for the aggregate function."""

    def test_scenario_by_year(self) -> None:
        """Readings of one year collapse into a single bar."""
        table = [
            ["timestamp", "AT_temperature"],
            ["2000-01-01", "5.0"],
            ["2000-06-01", "9.0"],
            ["2001-01-01", "2.0"],
        ]

        bars = aggregate(table, "AT_temperature", "year")

        assert bars == [
            Bar(key="2000", open=5.0, high=9.0, low=5.0, close=9.0),
            Bar(key="2001", open=2.0, high=2.0, low=2.0, close=2.0),
        ]

    def test_bucket_completeness_by_month(self, table: list[list[str]]) -> None:
        """Each distinct key yields one bar with the true extremes."""
        bars = aggregate(table, "AT_temperature", Granularity.MONTH)

        assert [bar.key for bar in bars] == ["2000-01", "2000-02", "2001-01"]
        assert (bars[0].low, bars[0].high) == (-1.5, 2.0)
        assert (bars[1].low, bars[1].high) == (3.0, 4.0)

    def test_open_and_close_follow_row_order(self, table: list[list[str]]) -> None:
        """Open is the first reading of a bucket and close the last."""
        bars = aggregate(table, "BE_temperature", Granularity.YEAR)

        assert bars[0].open == 3.0
        assert bars[0].close == 5.0
        assert bars[0].low == 0.0

    def test_day_granularity(self, table: list[list[str]]) -> None:
        """Day buckets use the first ten timestamp characters."""
        bars = aggregate(table, "AT_temperature", Granularity.DAY)

        assert [bar.key for bar in bars] == [
            "2000-01-01",
            "2000-01-02",
            "2000-02-01",
            "2001-01-01",
        ]

    def test_output_sorted_by_key(self) -> None:
        """Bars come out in ascending key order even for unsorted rows."""
        table = [
            ["timestamp", "AT_temperature"],
            ["2001-03-01", "1.0"],
            ["1999-03-01", "2.0"],
            ["2000-03-01", "3.0"],
        ]

        bars = aggregate(table, "AT_temperature")

        assert [bar.key for bar in bars] == ["1999", "2000", "2001"]

    def test_ohlc_invariant_holds(self, table: list[list[str]]) -> None:
        """Every bar keeps open and close between low and high."""
        for granularity in Granularity:
            for bar in aggregate(table, "AT_temperature", granularity):
                assert bar.low <= bar.open <= bar.high
                assert bar.low <= bar.close <= bar.high

    def test_malformed_rows_are_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        """Unparseable, non-finite and short rows are logged and dropped."""
        table = [
            ["timestamp", "AT_temperature"],
            ["2000-01-01", "1.0"],
            ["2000-02-01", "n/a"],
            ["2000-03-01", ""],
            ["2000-04-01", "nan"],
            ["2000-05-01"],
            ["2000-06-01", "4.0"],
        ]

        with caplog.at_level(logging.WARNING, logger="candles.analysis.aggregation"):
            bars = aggregate(table, "AT_temperature")

        assert bars == [Bar(key="2000", open=1.0, high=4.0, low=1.0, close=4.0)]
        assert len(caplog.records) == 4
        assert "row 2" in caplog.records[0].getMessage()

    def test_header_only_table_returns_empty(self) -> None:
        """A table with no data rows aggregates to nothing."""
        assert aggregate([HEADER], "AT_temperature") == []
        assert aggregate([], "AT_temperature") == []

    def test_missing_column_raises(self, table: list[list[str]]) -> None:
        """Aggregation fails only when the column is absent."""
        with pytest.raises(ColumnNotFoundError):
            aggregate(table, "XX_temperature")

    def test_bucket_readings_preserve_order(self, table: list[list[str]]) -> None:
        """Buckets keep readings in original row order."""
        buckets = bucket_readings(table, "AT_temperature", "month")

        assert buckets["2000-01"] == [-1.5, 0.5, 2.0]
        assert buckets["2000-02"] == [4.0, 3.0]
