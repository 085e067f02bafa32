from __future__ import annotations

import datetime as dt
from typing import List, Literal

from pydantic import BaseModel, Field

HistorySource = Literal["mock", "api"]


class HistoryPoint(BaseModel):
    date: dt.date
    rate: float = Field(..., gt=0)


class HistoricalSeries(BaseModel):
    base_currency: str
    target_currency: str
    period: str
    days: int
    source: HistorySource
    points: List[HistoryPoint] = Field(default_factory=list)

    @property
    def period_label(self) -> str:
        return f"{self.days} days"

    @property
    def caption(self) -> str:
        return (
            f"Showing historical exchange rates for 1 {self.base_currency} "
            f"to {self.target_currency} over the past {self.period_label}"
        )
