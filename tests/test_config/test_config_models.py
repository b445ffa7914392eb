from __future__ import annotations

import pytest
from pydantic import ValidationError

from glass.config.models import AppConfig, CoinGeckoSourceConfig, TeamConfig, TelemetryConfig


def test_app_config_should_default_every_section() -> None:
    config = AppConfig()
    assert config.http.timeout_sec == 10.0
    assert config.sources.coingecko.base_url == "https://api.coingecko.com"
    assert config.sources.polymarket.active is True
    assert config.sources.polymarket.closed is False
    assert config.team.capacity == 5


def test_app_config_should_be_frozen() -> None:
    config = AppConfig()
    with pytest.raises(ValidationError):
        config.name = "changed"


def test_team_config_should_require_positive_capacity() -> None:
    with pytest.raises(ValidationError):
        TeamConfig(capacity=0)


def test_source_config_should_require_http_url() -> None:
    with pytest.raises(ValidationError):
        CoinGeckoSourceConfig(base_url="ftp://api.coingecko.com")


def test_source_config_should_bound_page_size() -> None:
    with pytest.raises(ValidationError):
        CoinGeckoSourceConfig(per_page=500)


def test_telemetry_config_should_reject_unknown_level() -> None:
    with pytest.raises(ValidationError):
        TelemetryConfig(log_level="verbose")
