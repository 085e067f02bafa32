"""Pydantic view-state models for the Currency Tracker."""

from .constants import (
    CURRENCY_NAMES,
    DASHBOARD_BASE_CURRENCIES,
    CONVERTER_CURRENCIES,
    CHART_CURRENCIES,
    PERIODS,
)  # re-export
from .currency import CurrencyRow
from .conversion import ConversionOut, is_valid_amount, parse_amount
from .history import HistoryPoint, HistoricalSeries

__all__ = [
    "CURRENCY_NAMES",
    "DASHBOARD_BASE_CURRENCIES",
    "CONVERTER_CURRENCIES",
    "CHART_CURRENCIES",
    "PERIODS",
    "CurrencyRow",
    "ConversionOut",
    "is_valid_amount",
    "parse_amount",
    "HistoryPoint",
    "HistoricalSeries",
]
