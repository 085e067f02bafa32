import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core import errors
from .core.config import Settings, get_settings
from .core.logging import init_logging, request_context_middleware
from .routers import api, health, ui
from .services.converter import ConverterState
from .services.dashboard import DashboardState
from .services.exchange_rates import ExchangeRateClient, ExchangeRateSource
from .services.history import HistoryService


def create_app(
    settings_override: Settings | None = None,
    rate_client: ExchangeRateSource | None = None,
) -> FastAPI:
    """Application factory.

    settings_override: pass an already constructed Settings instance for tests
    to isolate environment. Falls back to cached get_settings().
    rate_client: replaces the upstream API client (tests use an in-process fake).
    """
    settings = settings_override or get_settings()
    # Initialize logging early
    init_logging(debug=settings.debug)

    app = FastAPI(
        title=settings.app_name, debug=settings.debug, version=settings.version
    )

    # View state lives for the lifetime of the app instance
    client = rate_client or ExchangeRateClient.from_settings(settings)
    if not settings.exchange_api_key and rate_client is None:
        logging.getLogger("currency_tracker").warning(
            "EXCHANGE_API_KEY not set; upstream calls will fail and fallback data is shown"
        )
    app.state.settings = settings
    app.state.rate_client = client
    app.state.dashboard = DashboardState(live_rates=settings.dashboard_live_rates)
    app.state.converter = ConverterState(client, settings.fallback_rate)
    app.state.history = HistoryService(client, source=settings.history_source)

    # Middleware (request id / structured logging)
    app.middleware("http")(request_context_middleware)

    # Error handlers
    app.add_exception_handler(StarletteHTTPException, errors.http_error_handler)
    app.add_exception_handler(RequestValidationError, errors.validation_error_handler)
    app.add_exception_handler(Exception, errors.server_error_handler)

    # Routers
    app.include_router(health.router)
    app.include_router(api.router)
    app.include_router(ui.router)

    @app.get("/", include_in_schema=False)
    async def root():
        return RedirectResponse(url="/ui", status_code=307)

    return app


app = create_app()
