from __future__ import annotations

"""Historical series for the charts tab.

Mock synthesis is a drifting random walk: a start value in [0.8, 1.3) and, for
each day, a fresh fluctuation in [-0.025, 0.025) scaled by the distance from
the first day. The timeframe endpoint can be used instead; any failure there
falls back to synthesis.
"""
import logging
import random
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from currency_tracker.core.errors import ExchangeRateError
from currency_tracker.models.constants import CHART_CURRENCIES, PERIODS
from currency_tracker.models.history import HistoricalSeries, HistoryPoint
from currency_tracker.services.exchange_rates import ExchangeRateSource

logger = logging.getLogger("currency_tracker.history")


def period_days(period: str) -> int:
    try:
        return PERIODS[period]
    except KeyError:
        raise ValueError(
            f"Unknown period '{period}'. Allowed: {sorted(PERIODS)}"
        ) from None


def generate_mock_series(
    base_currency: str,
    target_currency: str,
    period: str = "7d",
    today: Optional[date] = None,
    rng: Optional[random.Random] = None,
) -> HistoricalSeries:
    days = period_days(period)
    today = today or date.today()
    rng = rng or random.Random()

    start_value = rng.random() * 0.5 + 0.8
    points: List[HistoryPoint] = []
    for i in range(days, -1, -1):
        fluctuation = (rng.random() - 0.5) * 0.05
        rate = start_value + fluctuation * (days - i)
        points.append(
            HistoryPoint(date=today - timedelta(days=i), rate=round(rate, 4))
        )

    return HistoricalSeries(
        base_currency=base_currency.upper(),
        target_currency=target_currency.upper(),
        period=period,
        days=days,
        source="mock",
        points=points,
    )


def parse_timeframe_payload(
    payload: Dict[str, Any], base_currency: str, target_currency: str
) -> List[HistoryPoint]:
    """Read ``quotes: {"YYYY-MM-DD": {"<BASE><TARGET>": rate}}`` into ascending points."""
    pair = f"{base_currency.upper()}{target_currency.upper()}"
    quotes = payload.get("quotes") or {}
    points: List[HistoryPoint] = []
    if not isinstance(quotes, dict):
        return points
    for day in sorted(quotes):
        entry = quotes[day]
        if not isinstance(entry, dict):
            continue
        rate = entry.get(pair)
        if rate:
            points.append(HistoryPoint(date=date.fromisoformat(day), rate=float(rate)))
    return points


class HistoryService:
    def __init__(
        self,
        client: ExchangeRateSource,
        source: str = "mock",
        rng: Optional[random.Random] = None,
    ):
        self._client = client
        self._source = source
        self._rng = rng or random.Random()

    def get_series(
        self,
        base_currency: str,
        target_currency: str,
        period: str = "7d",
        today: Optional[date] = None,
    ) -> HistoricalSeries:
        for code in (base_currency, target_currency):
            if code.upper() not in CHART_CURRENCIES:
                raise ValueError(f"Unsupported currency '{code.upper()}'")
        days = period_days(period)
        today = today or date.today()

        if self._source == "api":
            try:
                payload = self._client.get_historical_rates(
                    base_currency, target_currency, today - timedelta(days=days), today
                )
                points = parse_timeframe_payload(payload, base_currency, target_currency)
            except (ExchangeRateError, ValueError) as e:
                logger.warning("historical rates unavailable, using mock data: %s", e)
            else:
                if points:
                    return HistoricalSeries(
                        base_currency=base_currency.upper(),
                        target_currency=target_currency.upper(),
                        period=period,
                        days=days,
                        source="api",
                        points=points,
                    )
                logger.warning(
                    "timeframe response had no %s%s quotes", base_currency, target_currency
                )

        return generate_mock_series(
            base_currency, target_currency, period, today=today, rng=self._rng
        )
