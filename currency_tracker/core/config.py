from functools import lru_cache
from typing import Optional

from pydantic import AnyHttpUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., APP_NAME, DEBUG,
    EXCHANGE_API_KEY, FALLBACK_RATE, HISTORY_SOURCE).
    """

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Basic app metadata
    app_name: str = "Currency Tracker"
    debug: bool = False
    version: str = "0.1.0"

    # Upstream exchange rate API (exchangerate.host style endpoints)
    exchange_api_base_url: AnyHttpUrl = "https://api.exchangerate.host"
    exchange_api_key: Optional[str] = None
    http_timeout_seconds: float = 5.0

    # Substituted when both the convert and live lookups fail
    fallback_rate: float = 1.08

    # Allowed: 'mock' (synthetic random walk), 'api' (timeframe endpoint, mock on failure)
    history_source: str = "mock"

    # When enabled the dashboard refresh button pulls live quotes for the base currency
    dashboard_live_rates: bool = False

    @field_validator("fallback_rate")
    @classmethod
    def positive_fallback(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("fallback_rate must be positive")
        return v

    @field_validator("history_source")
    @classmethod
    def known_history_source(cls, v: str) -> str:
        allowed = {"mock", "api"}
        if v not in allowed:
            raise ValueError(f"Unsupported history_source '{v}'. Allowed: {allowed}")
        return v

    @property
    def api_base_url(self) -> str:
        return str(self.exchange_api_base_url).rstrip("/")


@lru_cache
def get_settings() -> Settings:
    return Settings()
