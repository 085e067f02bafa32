from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel

from .constants import AMOUNT_PATTERN

ConversionSource = Literal["convert", "live", "fallback"]


class ConversionOut(BaseModel):
    """Conversion result as returned by the JSON API."""

    from_currency: str
    to_currency: str
    amount: float
    rate: float
    result: float
    source: ConversionSource
    error: Optional[str] = None


def is_valid_amount(value: str) -> bool:
    return AMOUNT_PATTERN.fullmatch(value) is not None


def parse_amount(value: str) -> float:
    """Numeric value of a user-entered amount; 0.0 when it does not parse ("" or ".")."""
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0
