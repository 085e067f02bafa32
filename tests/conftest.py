from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from currency_tracker.core.config import Settings
from currency_tracker.core.errors import ExchangeRateApiError, HttpError


class FakeRateClient:
    """In-process stand-in for ExchangeRateClient.

    Each endpoint either returns its canned payload or raises the configured
    error. Calls are recorded for assertions.
    """

    def __init__(
        self,
        quotes: Optional[Dict[str, float]] = None,
        convert_rate: Optional[float] = None,
        timeframe: Optional[Dict[str, Any]] = None,
        fail_convert: bool = False,
        fail_live: bool = False,
        fail_timeframe: bool = False,
    ):
        self.quotes = quotes or {}
        self.convert_rate = convert_rate
        self.timeframe = timeframe
        self.fail_convert = fail_convert
        self.fail_live = fail_live
        self.fail_timeframe = fail_timeframe
        self.calls: List[tuple] = []

    def get_latest_rates(self, base_currency: str = "USD") -> Dict[str, Any]:
        self.calls.append(("live", base_currency))
        if self.fail_live:
            raise HttpError("API error: 500")
        return {
            "success": True,
            "source": base_currency,
            "quotes": {k: v for k, v in self.quotes.items() if k.startswith(base_currency)},
        }

    def convert(self, from_currency: str, to_currency: str, amount: float) -> Dict[str, Any]:
        self.calls.append(("convert", from_currency, to_currency, amount))
        if self.fail_convert or self.convert_rate is None:
            raise ExchangeRateApiError("You have exceeded your monthly usage limit.")
        return {
            "success": True,
            "info": {"rate": self.convert_rate},
            "result": amount * self.convert_rate,
        }

    def get_historical_rates(self, base_currency, target_currency, start_date, end_date):
        self.calls.append(("timeframe", base_currency, target_currency, start_date, end_date))
        if self.fail_timeframe or self.timeframe is None:
            raise HttpError("timed out")
        return self.timeframe


@pytest.fixture
def settings() -> Settings:
    return Settings(exchange_api_key="test-key", fallback_rate=1.08, history_source="mock")


@pytest.fixture
def fake_client() -> FakeRateClient:
    return FakeRateClient(quotes={"USDEUR": 0.92, "USDGBP": 0.79, "EURUSD": 1.09})


@pytest.fixture
def failing_client() -> FakeRateClient:
    return FakeRateClient(fail_convert=True, fail_live=True, fail_timeframe=True)


@pytest.fixture
def make_client(settings):
    from currency_tracker.main import create_app

    def _make(rate_client, **overrides) -> TestClient:
        s = settings.model_copy(update=overrides) if overrides else settings
        return TestClient(create_app(settings_override=s, rate_client=rate_client))

    return _make


@pytest.fixture
def client(make_client, fake_client) -> TestClient:
    return make_client(fake_client)
