from __future__ import annotations

"""Client for the exchangerate.host style API.

Three stateless GET wrappers (live, convert, timeframe). Each returns the
parsed payload untouched when ``success`` is true; otherwise raises
ExchangeRateApiError with the API's ``error.info``. Transport failures surface
as HttpError. Failures are logged and re-raised so callers decide the fallback.
"""
import logging
from datetime import date
from typing import Any, Callable, Dict, Protocol

from currency_tracker.core.config import Settings
from currency_tracker.core.errors import ExchangeRateApiError, ExchangeRateError
from currency_tracker.services.http_client import build_url, get_json

logger = logging.getLogger("currency_tracker.exchange_rates")

JsonFetcher = Callable[..., Dict[str, Any]]


class ExchangeRateSource(Protocol):
    def get_latest_rates(self, base_currency: str = "USD") -> Dict[str, Any]: ...

    def convert(
        self, from_currency: str, to_currency: str, amount: float
    ) -> Dict[str, Any]: ...

    def get_historical_rates(
        self,
        base_currency: str,
        target_currency: str,
        start_date: date | str,
        end_date: date | str,
    ) -> Dict[str, Any]: ...


class ExchangeRateClient:
    def __init__(
        self,
        base_url: str,
        access_key: str | None = None,
        *,
        timeout: float = 5.0,
        fetcher: JsonFetcher = get_json,
    ):
        self._base_url = base_url
        self._access_key = access_key
        self._timeout = timeout
        self._fetch = fetcher

    @classmethod
    def from_settings(cls, settings: Settings) -> "ExchangeRateClient":
        return cls(
            settings.api_base_url,
            settings.exchange_api_key,
            timeout=settings.http_timeout_seconds,
        )

    # Internal --------------------------------------------------
    def _request(self, path: str, what: str, **params: Any) -> Dict[str, Any]:
        url = build_url(
            self._base_url, path, {"access_key": self._access_key, **params}
        )
        try:
            data = self._fetch(url, timeout=self._timeout)
            if not data.get("success"):
                error = data.get("error") or {}
                info = error.get("info") if isinstance(error, dict) else None
                raise ExchangeRateApiError(
                    info or "Unknown API error",
                    code=error.get("code") if isinstance(error, dict) else None,
                )
            return data
        except ExchangeRateError as e:
            logger.error("Error %s: %s", what, e)
            raise

    # Public API -----------------------------------------------
    def get_latest_rates(self, base_currency: str = "USD") -> Dict[str, Any]:
        """Latest quotes for ``base_currency`` keyed "<BASE><TARGET>"."""
        return self._request(
            "live", "fetching latest rates", source=base_currency.upper()
        )

    def convert(
        self, from_currency: str, to_currency: str, amount: float
    ) -> Dict[str, Any]:
        return self._request(
            "convert",
            "converting currency",
            **{"from": from_currency.upper(), "to": to_currency.upper()},
            amount=amount,
        )

    def get_historical_rates(
        self,
        base_currency: str,
        target_currency: str,
        start_date: date | str,
        end_date: date | str,
    ) -> Dict[str, Any]:
        return self._request(
            "timeframe",
            "fetching historical rates",
            source=base_currency.upper(),
            currencies=target_currency.upper(),
            start_date=_iso(start_date),
            end_date=_iso(end_date),
        )


def _iso(d: date | str) -> str:
    return d.isoformat() if isinstance(d, date) else d
