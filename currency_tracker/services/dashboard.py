from __future__ import annotations

"""Dashboard view state.

Rows start from fixed mock quotes against USD. Toggling a favorite is the only
mutation unless live refresh is enabled, in which case a refresh replaces each
row's rate with the latest quote for the selected base currency.
"""
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

from currency_tracker.core.errors import ExchangeRateError
from currency_tracker.models.constants import (
    DASHBOARD_BASE_CURRENCIES,
    DASHBOARD_VIEWS,
    DEFAULT_BASE_CURRENCY,
)
from currency_tracker.models.currency import CurrencyRow
from currency_tracker.services.exchange_rates import ExchangeRateSource

logger = logging.getLogger("currency_tracker.dashboard")

NO_MATCH_MESSAGE = "No currencies found matching your search."
NO_FAVORITES_MESSAGE = (
    "No favorite currencies yet. Click the star icon on any currency to add it "
    "to favorites."
)
REFRESH_FAILED_MESSAGE = "Unable to refresh live rates. Showing last known values."

_MOCK_ROWS = (
    ("EUR", "Euro", 0.91, -0.2, True),
    ("GBP", "British Pound", 0.78, 0.1, True),
    ("JPY", "Japanese Yen", 151.72, 0.5, False),
    ("CAD", "Canadian Dollar", 1.36, -0.3, False),
    ("AUD", "Australian Dollar", 1.51, -0.1, False),
    ("CHF", "Swiss Franc", 0.90, 0.2, False),
    ("CNY", "Chinese Yuan", 7.23, -0.4, False),
    ("TRY", "Turkish Lira", 32.15, -1.2, True),
)


def mock_rows() -> List[CurrencyRow]:
    return [
        CurrencyRow(code=c, name=n, rate=r, change=ch, is_favorite=fav)
        for c, n, r, ch, fav in _MOCK_ROWS
    ]


class DashboardState:
    def __init__(
        self,
        rows: Optional[List[CurrencyRow]] = None,
        live_rates: bool = False,
    ):
        self.rows: List[CurrencyRow] = rows if rows is not None else mock_rows()
        self.base_currency: str = DEFAULT_BASE_CURRENCY
        self.live_rates = live_rates
        self.dark_mode: bool = False
        self.last_refreshed: Optional[datetime] = None
        self.warning: Optional[str] = None

    # Queries --------------------------------------------------
    def get_row(self, code: str) -> CurrencyRow:
        code = code.upper()
        for row in self.rows:
            if row.code == code:
                return row
        raise KeyError(code)

    def filtered_rows(self, query: str = "") -> List[CurrencyRow]:
        query = query.strip()
        if not query:
            return list(self.rows)
        return [r for r in self.rows if r.matches(query)]

    def favorite_rows(self) -> List[CurrencyRow]:
        return [r for r in self.rows if r.is_favorite]

    def view(self, query: str = "", view: str = "all") -> Dict[str, object]:
        """Rows and empty-state message for one of the two dashboard tabs."""
        if view not in DASHBOARD_VIEWS:
            raise ValueError(f"Unknown dashboard view '{view}'")
        if view == "favorites":
            rows = self.favorite_rows()
            empty = NO_FAVORITES_MESSAGE
        else:
            rows = self.filtered_rows(query)
            empty = NO_MATCH_MESSAGE
        return {
            "base_currency": self.base_currency,
            "view": view,
            "query": query,
            "rows": rows,
            "favorites_count": len(self.favorite_rows()),
            "empty_message": None if rows else empty,
            "warning": self.warning,
            "last_refreshed": self.last_refreshed,
        }

    # Mutators -------------------------------------------------
    def toggle_favorite(self, code: str) -> CurrencyRow:
        row = self.get_row(code)
        row.is_favorite = not row.is_favorite
        return row

    def set_base_currency(self, code: str) -> None:
        code = code.upper()
        if code not in DASHBOARD_BASE_CURRENCIES:
            raise ValueError(f"Unsupported base currency '{code}'")
        self.base_currency = code

    def toggle_dark_mode(self) -> bool:
        self.dark_mode = not self.dark_mode
        return self.dark_mode

    def refresh(self, client: ExchangeRateSource) -> None:
        self.last_refreshed = datetime.now(timezone.utc)
        self.warning = None
        if not self.live_rates:
            return
        try:
            data = client.get_latest_rates(self.base_currency)
        except ExchangeRateError:
            self.warning = REFRESH_FAILED_MESSAGE
            return
        quotes = data.get("quotes") or {}
        updated = 0
        for row in self.rows:
            quote = quotes.get(f"{self.base_currency}{row.code}")
            if quote:
                row.rate = float(quote)
                updated += 1
        logger.info(
            "refreshed %d of %d rows against %s",
            updated,
            len(self.rows),
            self.base_currency,
        )
