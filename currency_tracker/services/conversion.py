from __future__ import annotations

"""Conversion with a two-tier fallback.

Order:
    1. direct /convert call
    2. /live quotes for the source currency, multiplied manually
    3. fixed fallback rate plus a user-visible warning

There is no retry count or backoff; each tier is tried once.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from currency_tracker.core.errors import ExchangeRateApiError, ExchangeRateError
from currency_tracker.models.constants import FALLBACK_WARNING
from currency_tracker.models.conversion import parse_amount

logger = logging.getLogger("currency_tracker.conversion")


class SupportsConversion(Protocol):
    def convert(self, from_currency: str, to_currency: str, amount: float) -> dict: ...

    def get_latest_rates(self, base_currency: str = "USD") -> dict: ...


@dataclass(frozen=True)
class ConversionResult:
    amount: float
    from_currency: str
    to_currency: str
    rate: float
    result: float
    source: str
    error: Optional[str] = None


def convert_with_fallback(
    amount_text: str,
    from_currency: str,
    to_currency: str,
    client: SupportsConversion,
    fallback_rate: float,
) -> ConversionResult:
    from_currency = from_currency.upper()
    to_currency = to_currency.upper()
    amount = parse_amount(amount_text)

    try:
        try:
            data = client.convert(from_currency, to_currency, amount)
            return ConversionResult(
                amount=amount,
                from_currency=from_currency,
                to_currency=to_currency,
                rate=float(data["info"]["rate"]),
                result=float(data["result"]),
                source="convert",
            )
        except (ExchangeRateError, KeyError, TypeError, ValueError) as e:
            logger.info("Direct conversion failed, falling back to rates: %s", e)

        rate = _live_quote(client, from_currency, to_currency)
        return ConversionResult(
            amount=amount,
            from_currency=from_currency,
            to_currency=to_currency,
            rate=rate,
            result=amount * rate,
            source="live",
        )
    except (ExchangeRateError, KeyError, TypeError, ValueError) as e:
        logger.warning("Error fetching conversion rate: %s", e)
        return ConversionResult(
            amount=amount,
            from_currency=from_currency,
            to_currency=to_currency,
            rate=fallback_rate,
            result=amount * fallback_rate,
            source="fallback",
            error=FALLBACK_WARNING,
        )


def _live_quote(client: SupportsConversion, from_currency: str, to_currency: str) -> float:
    data = client.get_latest_rates(from_currency)
    quote = (data.get("quotes") or {}).get(f"{from_currency}{to_currency}")
    if not quote:
        raise ExchangeRateApiError(
            f"Rate not available for {from_currency} to {to_currency}"
        )
    return float(quote)
