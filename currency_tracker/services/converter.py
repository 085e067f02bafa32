from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from currency_tracker.models.constants import (
    CONVERTER_CURRENCIES,
    DEFAULT_AMOUNT,
    DEFAULT_FROM_CURRENCY,
    DEFAULT_TO_CURRENCY,
)
from currency_tracker.models.conversion import is_valid_amount, parse_amount
from currency_tracker.services.conversion import (
    SupportsConversion,
    convert_with_fallback,
)

logger = logging.getLogger("currency_tracker.converter")


class ConverterState:
    """In-memory state of the converter tab.

    Changing the amount or either currency recomputes the conversion through
    the fallback chain. Result and rate reflect the last resolved request, or
    the fallback constant when every lookup failed.
    """

    def __init__(
        self,
        client: SupportsConversion,
        fallback_rate: float,
        currencies: Iterable[str] = CONVERTER_CURRENCIES,
    ):
        self._client = client
        self._fallback_rate = fallback_rate
        self.currencies: List[str] = list(currencies)
        self.amount: str = DEFAULT_AMOUNT
        self.from_currency: str = DEFAULT_FROM_CURRENCY
        self.to_currency: str = DEFAULT_TO_CURRENCY
        self.result: Optional[float] = None
        self.rate: Optional[float] = None
        self.error: Optional[str] = None
        self.source: Optional[str] = None

    # Mutators -------------------------------------------------
    def set_amount(self, value: str) -> bool:
        """Accept ``value`` only if it is empty or a non-negative decimal."""
        if not is_valid_amount(value):
            logger.debug("rejected amount input %r", value)
            return False
        if value != self.amount:
            self.amount = value
            self.recompute()
        return True

    def set_from(self, code: str) -> None:
        code = self._check_code(code)
        if code != self.from_currency:
            self.from_currency = code
            self.recompute()

    def set_to(self, code: str) -> None:
        code = self._check_code(code)
        if code != self.to_currency:
            self.to_currency = code
            self.recompute()

    def swap(self) -> None:
        self.from_currency, self.to_currency = self.to_currency, self.from_currency
        self.recompute()

    def update(
        self,
        amount: Optional[str] = None,
        from_currency: Optional[str] = None,
        to_currency: Optional[str] = None,
    ) -> bool:
        """Apply a form submission with a single recompute.

        Returns False if the amount was rejected; the currencies still apply.
        """
        before = (self.amount, self.from_currency, self.to_currency)
        accepted = True
        new_from = self._check_code(from_currency) if from_currency else None
        new_to = self._check_code(to_currency) if to_currency else None
        if new_from:
            self.from_currency = new_from
        if new_to:
            self.to_currency = new_to
        if amount is not None:
            if is_valid_amount(amount):
                self.amount = amount
            else:
                logger.debug("rejected amount input %r", amount)
                accepted = False
        if (self.amount, self.from_currency, self.to_currency) != before:
            self.recompute()
        return accepted

    def ensure_computed(self) -> None:
        if self.source is None and self.amount:
            self.recompute()

    def recompute(self) -> None:
        self.error = None
        if not (self.amount and self.from_currency and self.to_currency):
            self.result = None
            self.rate = None
            self.source = None
            return
        outcome = convert_with_fallback(
            self.amount,
            self.from_currency,
            self.to_currency,
            self._client,
            self._fallback_rate,
        )
        self.rate = outcome.rate
        self.result = outcome.result
        self.error = outcome.error
        self.source = outcome.source

    # Display --------------------------------------------------
    @property
    def headline(self) -> str:
        if self.result is None:
            return "Enter an amount to convert"
        return (
            f"{_plain(parse_amount(self.amount))} {self.from_currency} = "
            f"{self.result:.4f} {self.to_currency}"
        )

    @property
    def rate_line(self) -> Optional[str]:
        if self.rate is None:
            return None
        return f"1 {self.from_currency} = {self.rate:.6f} {self.to_currency}"

    def as_dict(self) -> dict:
        return {
            "amount": self.amount,
            "from_currency": self.from_currency,
            "to_currency": self.to_currency,
            "result": self.result,
            "rate": self.rate,
            "error": self.error,
            "source": self.source,
            "headline": self.headline,
            "rate_line": self.rate_line,
        }

    # Internal --------------------------------------------------
    def _check_code(self, code: str) -> str:
        code = code.upper()
        if code not in self.currencies:
            raise ValueError(f"Unsupported currency '{code}'")
        return code


def _plain(value: float) -> str:
    # 1.0 -> "1", 2.50 -> "2.5"
    text = f"{value:.8f}".rstrip("0").rstrip(".")
    return text or "0"
