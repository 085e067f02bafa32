from pathlib import Path
from typing import Any, Dict, Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Form, HTTPException, Query, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from currency_tracker.core.config import Settings
from currency_tracker.models.constants import (
    CHART_CURRENCIES,
    CURRENCY_NAMES,
    DASHBOARD_BASE_CURRENCIES,
    DASHBOARD_VIEWS,
    DEFAULT_FROM_CURRENCY,
    DEFAULT_PERIOD,
    DEFAULT_TO_CURRENCY,
    HOME_TABS,
    PERIODS,
)
from currency_tracker.routers.deps import (
    get_app_settings,
    get_converter,
    get_dashboard,
    get_history_service,
    get_rate_client,
)
from currency_tracker.services.charts import build_line_chart
from currency_tracker.services.converter import ConverterState
from currency_tracker.services.dashboard import DashboardState
from currency_tracker.services.exchange_rates import ExchangeRateSource
from currency_tracker.services.history import HistoryService

router = APIRouter(tags=["ui"])

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

AMOUNT_REJECTED_MESSAGE = "Amount must be a non-negative number."


def _base_context(settings: Settings, dashboard: DashboardState, tab: str) -> Dict[str, Any]:
    return {
        "app_name": settings.app_name,
        "version": settings.version,
        "dark_mode": dashboard.dark_mode,
        "active_tab": tab,
        "tabs": HOME_TABS,
        "currency_names": CURRENCY_NAMES,
    }


def _back(request: Request, fallback: str) -> str:
    # Only same-site relative targets are honoured
    referer = request.headers.get("referer") or ""
    base = str(request.base_url)
    if referer.startswith(base):
        return "/" + referer[len(base):]
    return fallback


@router.get("/ui", response_class=HTMLResponse)
def ui_home(
    request: Request,
    tab: str = Query("dashboard"),
    settings: Settings = Depends(get_app_settings),
    dashboard: DashboardState = Depends(get_dashboard),
    converter: ConverterState = Depends(get_converter),
    history: HistoryService = Depends(get_history_service),
):
    """Home page with the Dashboard / Converter / Charts tabs."""
    if tab not in HOME_TABS:
        raise HTTPException(status_code=400, detail=f"tab must be one of {HOME_TABS}")
    if tab == "converter":
        return _render_converter(request, settings, dashboard, converter)
    if tab == "charts":
        return _render_charts(
            request,
            settings,
            dashboard,
            history,
            DEFAULT_FROM_CURRENCY,
            DEFAULT_TO_CURRENCY,
            DEFAULT_PERIOD,
        )
    return _render_dashboard(request, settings, dashboard, "", "all")


# Dashboard ------------------------------------------------------------------


@router.get("/ui/dashboard", response_class=HTMLResponse)
def ui_dashboard(
    request: Request,
    q: str = Query(""),
    view: str = Query("all"),
    settings: Settings = Depends(get_app_settings),
    dashboard: DashboardState = Depends(get_dashboard),
):
    return _render_dashboard(request, settings, dashboard, q, view)


def _render_dashboard(
    request: Request,
    settings: Settings,
    dashboard: DashboardState,
    q: str,
    view: str,
) -> HTMLResponse:
    if view not in DASHBOARD_VIEWS:
        view = "all"
    context = _base_context(settings, dashboard, "dashboard")
    context.update(dashboard.view(query=q, view=view))
    context["base_currencies"] = DASHBOARD_BASE_CURRENCIES
    context["return_to"] = "/ui/dashboard?" + urlencode({"q": q, "view": view})
    return templates.TemplateResponse(request, "dashboard.html", context)


@router.post("/ui/dashboard/base")
async def ui_set_base(
    base_currency: str = Form(...),
    dashboard: DashboardState = Depends(get_dashboard),
):
    try:
        dashboard.set_base_currency(base_currency)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return RedirectResponse(url="/ui/dashboard", status_code=status.HTTP_303_SEE_OTHER)


@router.post("/ui/dashboard/favorites/{code}")
async def ui_toggle_favorite(
    code: str,
    return_to: Optional[str] = Form(None),
    dashboard: DashboardState = Depends(get_dashboard),
):
    try:
        dashboard.toggle_favorite(code)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"currency {code.upper()} not on dashboard") from None
    target = return_to if return_to and return_to.startswith("/ui") else "/ui/dashboard"
    return RedirectResponse(url=target, status_code=status.HTTP_303_SEE_OTHER)


@router.post("/ui/dashboard/refresh")
def ui_refresh(
    dashboard: DashboardState = Depends(get_dashboard),
    client: ExchangeRateSource = Depends(get_rate_client),
):
    dashboard.refresh(client)
    return RedirectResponse(url="/ui/dashboard", status_code=status.HTTP_303_SEE_OTHER)


# Converter ------------------------------------------------------------------


@router.get("/ui/converter", response_class=HTMLResponse)
def ui_converter(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    dashboard: DashboardState = Depends(get_dashboard),
    converter: ConverterState = Depends(get_converter),
):
    return _render_converter(request, settings, dashboard, converter)


def _render_converter(
    request: Request,
    settings: Settings,
    dashboard: DashboardState,
    converter: ConverterState,
    notice: Optional[str] = None,
) -> HTMLResponse:
    converter.ensure_computed()
    context = _base_context(settings, dashboard, "converter")
    context.update(
        {
            "converter": converter,
            "currencies": converter.currencies,
            "notice": notice,
        }
    )
    return templates.TemplateResponse(request, "converter.html", context)


@router.post("/ui/converter", response_class=HTMLResponse)
def ui_convert(
    request: Request,
    amount: str = Form(""),
    from_currency: Optional[str] = Form(None),
    to_currency: Optional[str] = Form(None),
    settings: Settings = Depends(get_app_settings),
    dashboard: DashboardState = Depends(get_dashboard),
    converter: ConverterState = Depends(get_converter),
):
    try:
        accepted = converter.update(amount, from_currency, to_currency)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    notice = None if accepted else AMOUNT_REJECTED_MESSAGE
    return _render_converter(request, settings, dashboard, converter, notice=notice)


@router.post("/ui/converter/swap")
def ui_swap(converter: ConverterState = Depends(get_converter)):
    converter.swap()
    return RedirectResponse(url="/ui/converter", status_code=status.HTTP_303_SEE_OTHER)


# Charts ---------------------------------------------------------------------


@router.get("/ui/charts", response_class=HTMLResponse)
def ui_charts(
    request: Request,
    base: str = Query(DEFAULT_FROM_CURRENCY),
    target: str = Query(DEFAULT_TO_CURRENCY),
    period: str = Query(DEFAULT_PERIOD),
    settings: Settings = Depends(get_app_settings),
    dashboard: DashboardState = Depends(get_dashboard),
    history: HistoryService = Depends(get_history_service),
):
    return _render_charts(request, settings, dashboard, history, base, target, period)


def _render_charts(
    request: Request,
    settings: Settings,
    dashboard: DashboardState,
    history: HistoryService,
    base: str,
    target: str,
    period: str,
) -> HTMLResponse:
    try:
        series = history.get_series(base, target, period)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    context = _base_context(settings, dashboard, "charts")
    context.update(
        {
            "series": series,
            "chart": build_line_chart(series),
            "currencies": CHART_CURRENCIES,
            "periods": list(PERIODS),
        }
    )
    return templates.TemplateResponse(request, "charts.html", context)


# Theme ----------------------------------------------------------------------


@router.post("/ui/theme")
async def ui_toggle_theme(
    request: Request, dashboard: DashboardState = Depends(get_dashboard)
):
    dashboard.toggle_dark_mode()
    return RedirectResponse(url=_back(request, "/ui"), status_code=status.HTTP_303_SEE_OTHER)
