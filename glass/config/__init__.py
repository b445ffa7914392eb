"""Configuration loading and validation package."""

from .loader import load_app_config, resolve_config_path
from .models import (
    AppConfig,
    CoinGeckoSourceConfig,
    HttpConfig,
    HyperliquidSourceConfig,
    NewsSourceConfig,
    PolymarketSourceConfig,
    SourcesConfig,
    TeamConfig,
    TelemetryConfig,
)

__all__ = [
    "AppConfig",
    "CoinGeckoSourceConfig",
    "HttpConfig",
    "HyperliquidSourceConfig",
    "NewsSourceConfig",
    "PolymarketSourceConfig",
    "SourcesConfig",
    "TeamConfig",
    "TelemetryConfig",
    "load_app_config",
    "resolve_config_path",
]
