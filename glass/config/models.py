"""Typed configuration models for the dashboard core.

The config subsystem relies on pydantic to validate ``config/app.yml`` and to
provide strongly-typed objects to the rest of the runtime. Every section has
defaults matching the public endpoints, so an empty file is a valid config.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator


class HttpConfig(BaseModel):
    """Shared transport settings for the ``httpx.AsyncClient``."""

    timeout_sec: float = Field(10.0, gt=0)
    user_agent: str = Field("glass-dashboard/0.1", min_length=1)


class _SourceConfig(BaseModel):
    """Common base for source sections; ``base_url`` is stored without a trailing slash."""

    base_url: str

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL: {value}")
        return value.rstrip("/")


class CoinGeckoSourceConfig(_SourceConfig):
    """Spot-crypto market listing query (``/api/v3/coins/markets``)."""

    base_url: str = "https://api.coingecko.com"
    vs_currency: str = "usd"
    order: str = "market_cap_desc"
    per_page: int = Field(50, ge=1, le=250)
    page: PositiveInt = 1


class HyperliquidSourceConfig(_SourceConfig):
    """Perpetuals info endpoint (``POST /info``)."""

    base_url: str = "https://api.hyperliquid.xyz"


class PolymarketSourceConfig(_SourceConfig):
    """Gamma market listing filters."""

    base_url: str = "https://gamma-api.polymarket.com"
    limit: PositiveInt = 10
    active: bool = True
    closed: bool = False


class NewsSourceConfig(_SourceConfig):
    """CryptoCompare news feed. ``success_type`` is the ``Type`` code of a good response."""

    base_url: str = "https://min-api.cryptocompare.com"
    lang: str = "EN"
    success_type: int = 100


class SourcesConfig(BaseModel):
    """Endpoints and query parameters for the four market sources."""

    coingecko: CoinGeckoSourceConfig = Field(default_factory=CoinGeckoSourceConfig)
    hyperliquid: HyperliquidSourceConfig = Field(default_factory=HyperliquidSourceConfig)
    polymarket: PolymarketSourceConfig = Field(default_factory=PolymarketSourceConfig)
    news: NewsSourceConfig = Field(default_factory=NewsSourceConfig)


class TeamConfig(BaseModel):
    """Team selection limits."""

    capacity: PositiveInt = Field(5, description="Maximum number of distinct assets in a team")


class TelemetryConfig(BaseModel):
    """Logging and diagnostic event switches."""

    log_level: str = Field("INFO")
    logs_dir: str = Field("data/logs")
    events_enabled: bool = True

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unsupported log level: {value}")
        return level


class AppConfig(BaseModel):
    """Runtime config composed of transport, sources, team and telemetry."""

    http: HttpConfig = Field(default_factory=HttpConfig)
    sources: SourcesConfig = Field(default_factory=SourcesConfig)
    team: TeamConfig = Field(default_factory=TeamConfig)
    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)
    name: Optional[str] = None

    model_config = ConfigDict(frozen=True)
