"""Table loading and dataset summaries."""

from candles.data.countries import COUNTRY_NAMES, country_name
from candles.data.sources import CSVTableSource, TableSource
from candles.data.summary import available_prefixes, date_span, value_range

__all__ = [
    "TableSource",
    "CSVTableSource",
    "COUNTRY_NAMES",
    "country_name",
    "available_prefixes",
    "date_span",
    "value_range",
]
