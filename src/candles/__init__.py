"""Candles package root."""

from candles.exceptions import CandlesError
from candles.types import Bar, Granularity

__all__ = ["Bar", "CandlesError", "Granularity"]
