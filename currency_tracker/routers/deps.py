"""Dependency helpers resolving per-app state built in create_app()."""
from fastapi import Request

from currency_tracker.core.config import Settings
from currency_tracker.services.converter import ConverterState
from currency_tracker.services.dashboard import DashboardState
from currency_tracker.services.exchange_rates import ExchangeRateSource
from currency_tracker.services.history import HistoryService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_rate_client(request: Request) -> ExchangeRateSource:
    return request.app.state.rate_client


def get_dashboard(request: Request) -> DashboardState:
    return request.app.state.dashboard


def get_converter(request: Request) -> ConverterState:
    return request.app.state.converter


def get_history_service(request: Request) -> HistoryService:
    return request.app.state.history
