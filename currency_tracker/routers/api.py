from __future__ import annotations

"""JSON API mirroring the dashboard, converter and charts views.

Endpoints that reach the upstream API are plain ``def`` so FastAPI runs the
blocking urllib calls in its threadpool.
"""
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from currency_tracker.core.config import Settings
from currency_tracker.core.errors import ExchangeRateError
from currency_tracker.models.constants import CONVERTER_CURRENCIES, DASHBOARD_VIEWS
from currency_tracker.models.conversion import ConversionOut, is_valid_amount
from currency_tracker.models.currency import CurrencyRow
from currency_tracker.models.history import HistoricalSeries
from currency_tracker.routers.deps import (
    get_app_settings,
    get_dashboard,
    get_history_service,
    get_rate_client,
)
from currency_tracker.services.conversion import convert_with_fallback
from currency_tracker.services.dashboard import DashboardState
from currency_tracker.services.exchange_rates import ExchangeRateSource
from currency_tracker.services.history import HistoryService

router = APIRouter(prefix="/api", tags=["api"])


class DashboardOut(BaseModel):
    base_currency: str
    view: str
    query: str
    rows: List[CurrencyRow]
    favorites_count: int
    empty_message: Optional[str] = None
    warning: Optional[str] = None


@router.get("/dashboard", response_model=DashboardOut, summary="Dashboard rows")
async def dashboard(
    q: str = Query("", description="Case-insensitive code/name filter"),
    view: str = Query("all", description="all | favorites"),
    state: DashboardState = Depends(get_dashboard),
):
    if view not in DASHBOARD_VIEWS:
        raise HTTPException(status_code=400, detail=f"view must be one of {DASHBOARD_VIEWS}")
    return state.view(query=q, view=view)


@router.post(
    "/dashboard/favorites/{code}",
    response_model=CurrencyRow,
    summary="Toggle a currency's favorite flag",
)
async def toggle_favorite(code: str, state: DashboardState = Depends(get_dashboard)):
    try:
        return state.toggle_favorite(code)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"currency {code.upper()} not on dashboard") from None


@router.get("/rates/live", summary="Latest quotes for a base currency")
def live_rates(
    base: str = Query("USD", min_length=3, max_length=3),
    client: ExchangeRateSource = Depends(get_rate_client),
) -> Dict[str, Any]:
    try:
        return client.get_latest_rates(base.upper())
    except ExchangeRateError as e:
        raise HTTPException(status_code=502, detail=str(e)) from e


@router.get("/convert", response_model=ConversionOut, summary="Convert an amount")
def convert(
    from_currency: str = Query("USD", alias="from"),
    to_currency: str = Query("EUR", alias="to"),
    amount: str = Query("1"),
    client: ExchangeRateSource = Depends(get_rate_client),
    settings: Settings = Depends(get_app_settings),
):
    if not amount or not is_valid_amount(amount):
        raise HTTPException(status_code=400, detail="amount must be a non-negative decimal number")
    for code in (from_currency, to_currency):
        if code.upper() not in CONVERTER_CURRENCIES:
            raise HTTPException(status_code=400, detail=f"Unsupported currency '{code.upper()}'")
    outcome = convert_with_fallback(
        amount, from_currency, to_currency, client, settings.fallback_rate
    )
    return ConversionOut(
        from_currency=outcome.from_currency,
        to_currency=outcome.to_currency,
        amount=outcome.amount,
        rate=outcome.rate,
        result=outcome.result,
        source=outcome.source,
        error=outcome.error,
    )


@router.get("/history", response_model=HistoricalSeries, summary="Historical series")
def history(
    base: str = Query("USD"),
    target: str = Query("EUR"),
    period: str = Query("7d", description="7d | 30d"),
    service: HistoryService = Depends(get_history_service),
):
    try:
        return service.get_series(base, target, period)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
