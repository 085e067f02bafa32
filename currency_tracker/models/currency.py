from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class CurrencyRow(BaseModel):
    """One currency card on the dashboard, quoted against the base currency."""

    code: str = Field(..., min_length=3, max_length=3)
    name: str
    rate: float
    change: float = 0.0
    is_favorite: bool = False

    @field_validator("code")
    @classmethod
    def upper_code(cls, v: str) -> str:
        return v.upper()

    @property
    def formatted_rate(self) -> str:
        return f"{self.rate:.4f}"

    @property
    def formatted_change(self) -> str:
        sign = "+" if self.change > 0 else ""
        return f"{sign}{self.change:.2f}%"

    @property
    def direction(self) -> str:
        if self.change > 0:
            return "up"
        if self.change < 0:
            return "down"
        return "flat"

    @property
    def flag_emoji(self) -> str:
        # Regional indicator symbols for the first two letters (USD -> US)
        return "".join(chr(ord(ch) + 127397) for ch in self.code[:2].upper())

    def matches(self, query: str) -> bool:
        q = query.lower()
        return q in self.code.lower() or q in self.name.lower()
