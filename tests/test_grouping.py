"""Tests for decade grouping."""

import pytest

from candles.analysis.grouping import bar_year, decade_of, group_by_decade
from candles.exceptions import InvalidYearKeyError
from candles.types import Bar


def _bar(key: str) -> Bar:
    return Bar(key=key, open=1.0, high=2.0, low=0.0, close=1.0)


class TestGroupByDecade:
    """Tests for group_by_decade."""

    def test_groups_contiguous_decades(self) -> None:
        """Bars split at each decade boundary."""
        bars = [_bar(str(year)) for year in (1988, 1989, 1990, 1999, 2000)]

        groups = group_by_decade(bars)

        assert [[bar.key for bar in group] for group in groups] == [
            ["1988", "1989"],
            ["1990", "1999"],
            ["2000"],
        ]

    def test_concatenation_reproduces_input(self) -> None:
        """Flattening the groups gives back the input in order."""
        bars = [_bar(str(year)) for year in range(1975, 2012)]

        groups = group_by_decade(bars)

        assert [bar for group in groups for bar in group] == bars

    def test_trusts_input_order(self) -> None:
        """Unsorted input yields a new group on every decade change."""
        bars = [_bar("1991"), _bar("2003"), _bar("1995")]

        groups = group_by_decade(bars)

        assert [[bar.key for bar in group] for group in groups] == [
            ["1991"],
            ["2003"],
            ["1995"],
        ]

    def test_empty_input(self) -> None:
        """No bars means no groups."""
        assert group_by_decade([]) == []

    def test_month_keys_rejected(self) -> None:
        """Non-year keys raise InvalidYearKeyError."""
        with pytest.raises(InvalidYearKeyError, match="2000-01"):
            group_by_decade([_bar("2000-01")])


def test_bar_year_and_decade() -> None:
    """Year keys parse to integers and floor to their decade."""
    assert bar_year(_bar("2019")) == 2019
    assert decade_of(2019) == 2010
    assert decade_of(2020) == 2020
