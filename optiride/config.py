"""Centralized configuration using Pydantic Settings.

This module provides a single source of truth for all configuration:
geocoding client settings, the fare schedule, HTTP server settings and
logging.

Configuration can be overridden via environment variables:
- OPTIRIDE_GEO_USER_AGENT=my-app/1.0
- OPTIRIDE_PRICING_PROVIDERS='["Lyft"]'
- OPTIRIDE_API_PORT=9000
- OPTIRIDE_LOG_STRUCTURED=true
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GeocodingConfig(BaseSettings):
    """Geocoding configuration.

    Environment variables prefixed with OPTIRIDE_GEO_.
    """

    model_config = SettingsConfigDict(env_prefix="OPTIRIDE_GEO_")

    user_agent: str = "ride-compare/0.1"
    domain: str = "nominatim.openstreetmap.org"
    scheme: str = "https"
    timeout_seconds: int = 10
    language: Optional[str] = None
    reverse_zoom: int = 16


class PricingConfig(BaseSettings):
    """Fare schedule and enabled providers.

    Environment variables prefixed with OPTIRIDE_PRICING_.
    """

    model_config = SettingsConfigDict(env_prefix="OPTIRIDE_PRICING_")

    base_fare: float = Field(default=2.0, ge=0)
    per_km_rate: float = Field(default=1.2, ge=0)
    booking_fee: float = Field(default=1.0, ge=0)
    min_eta_minutes: int = Field(default=2, ge=0)
    currency: str = "USD"
    providers: list[str] = Field(default_factory=lambda: ["Uber", "Lyft"])


class ApiConfig(BaseSettings):
    """HTTP server configuration.

    Environment variables prefixed with OPTIRIDE_API_.
    """

    model_config = SettingsConfigDict(env_prefix="OPTIRIDE_API_")

    host: str = "127.0.0.1"
    port: int = 8000
    ui_path: str = "/ui"
    resolve_concurrently: bool = True


class ObservabilityConfig(BaseSettings):
    """Logging and observability configuration.

    Environment variables prefixed with OPTIRIDE_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="OPTIRIDE_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False  # Set True for JSON logging


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

    Sub-configurations can be accessed via attributes:

        config = get_config()
        print(config.pricing.base_fare)
        print(config.geocoding.user_agent)

    Environment variables prefixed with OPTIRIDE_.
    """

    model_config = SettingsConfigDict(env_prefix="OPTIRIDE_")

    geocoding: GeocodingConfig = Field(default_factory=GeocodingConfig)
    pricing: PricingConfig = Field(default_factory=PricingConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Returns:
        The application configuration instance.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()
