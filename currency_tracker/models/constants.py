"""Currency lists, display names and fixed values shared by the views.

Kept as plain module constants; the three views intentionally offer
different currency sets.
"""

import re
from typing import Dict, List, Pattern

CURRENCY_NAMES: Dict[str, str] = {
    "USD": "US Dollar",
    "EUR": "Euro",
    "GBP": "British Pound",
    "JPY": "Japanese Yen",
    "CAD": "Canadian Dollar",
    "AUD": "Australian Dollar",
    "CHF": "Swiss Franc",
    "CNY": "Chinese Yuan",
    "TRY": "Turkish Lira",
}

# Base currencies offered by the dashboard selector
DASHBOARD_BASE_CURRENCIES: List[str] = ["USD", "EUR", "GBP", "JPY"]
CONVERTER_CURRENCIES: List[str] = [
    "USD",
    "EUR",
    "GBP",
    "JPY",
    "CAD",
    "AUD",
    "CHF",
    "CNY",
    "TRY",
]
CHART_CURRENCIES: List[str] = ["USD", "EUR", "GBP", "JPY", "TRY", "CAD", "AUD", "CNY"]

DEFAULT_BASE_CURRENCY = "USD"
DEFAULT_FROM_CURRENCY = "USD"
DEFAULT_TO_CURRENCY = "EUR"
DEFAULT_AMOUNT = "1"

# Chart periods -> number of days back from today
PERIODS: Dict[str, int] = {"7d": 7, "30d": 30}
DEFAULT_PERIOD = "7d"

DASHBOARD_VIEWS: List[str] = ["all", "favorites"]
HOME_TABS: List[str] = ["dashboard", "converter", "charts"]

# Non-negative decimal as typed by a user: digits, at most one dot, all optional
AMOUNT_PATTERN: Pattern[str] = re.compile(r"^\d*\.?\d*$")

FALLBACK_WARNING = "Unable to fetch current rates. Using fallback data."
