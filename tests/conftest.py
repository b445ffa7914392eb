from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict

import httpx
import pytest

from glass.config.models import AppConfig, TelemetryConfig
from glass.core.types import AssetId
from glass.data_feed.spot import CryptoAsset
from glass.telemetry.events import TelemetryEvent


@pytest.fixture(autouse=True)
def restore_glass_logger():
    logger = logging.getLogger("glass")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.fixture
def coin_markets_payload() -> list[dict[str, Any]]:
    return [
        {"id": "bitcoin", "name": "Bitcoin", "symbol": "btc", "current_price": 64250.5, "price_change_percentage_24h": 2.345},
        {"id": "ethereum", "name": "Ethereum", "symbol": "eth", "current_price": 3120.12, "price_change_percentage_24h": -1.2},
        {"id": "solana", "name": "Solana", "symbol": "sol", "current_price": 145.3, "price_change_percentage_24h": 0.0},
        {"id": "dogecoin", "name": "Dogecoin", "symbol": "doge", "current_price": 0.12, "price_change_percentage_24h": 5.5},
        {"id": "cardano", "name": "Cardano", "symbol": "ada", "current_price": 0.45, "price_change_percentage_24h": -3.1},
        {"id": "ripple", "name": "XRP", "symbol": "xrp", "current_price": 0.52, "price_change_percentage_24h": 1.1},
        {"id": "tron", "name": "TRON", "symbol": "trx", "current_price": 0.11, "price_change_percentage_24h": 0.4},
    ]


@pytest.fixture
def perp_mids_payload() -> dict[str, str]:
    return {"BTC": "64210.5", "ETH": "3119.9", "SOL": "145.21"}


@pytest.fixture
def perp_meta_payload() -> dict[str, Any]:
    return {
        "universe": [
            {"name": "BTC", "szDecimals": 5, "maxLeverage": 50},
            {"name": "ETH", "szDecimals": 4, "maxLeverage": 25},
            {"name": "SOL", "szDecimals": 2, "maxLeverage": 20},
        ]
    }


@pytest.fixture
def perp_contexts_payload(perp_meta_payload) -> list[Any]:
    return [
        perp_meta_payload,
        [
            {"markPx": "100", "prevDayPx": "80", "dayNtlVlm": "500000", "funding": "0.0001", "openInterest": "2000"},
            {"markPx": "3119.9", "prevDayPx": "0", "dayNtlVlm": "1234.5", "funding": "-0.00002", "openInterest": "10"},
            {"markPx": "145.21", "prevDayPx": "150", "dayNtlVlm": "not-a-number", "funding": None, "openInterest": "7.25"},
        ],
    ]


@pytest.fixture
def gamma_markets_payload() -> list[dict[str, Any]]:
    return [
        {
            "id": "501",
            "question": "Will BTC close above $100k this year?",
            "category": "Crypto",
            "volumeNum": 2_500_000,
            "outcomes": '["Yes", "No"]',
            "outcomePrices": '["0.62", "0.38"]',
            "image": "https://example.com/btc.png",
        },
        {
            "id": "502",
            "question": "Who wins the final?",
            "category": "Sports",
            "volumeNum": 12_340,
            "outcomes": '["Team A", "Team B", "Draw"]',
            "outcomePrices": '["0.5", "0.3", "0.2"]',
            "image": None,
        },
    ]


@pytest.fixture
def news_payload() -> dict[str, Any]:
    return {
        "Type": 100,
        "Message": "News list successfully returned",
        "Data": [
            {
                "title": "Bitcoin rallies",
                "body": "BTC moved higher overnight.",
                "url": "https://news.example.com/1",
                "imageurl": "https://news.example.com/1.png",
                "published_on": 1_700_000_000,
                "source_info": {"name": "CoinDesk"},
            },
            {
                "title": "Ether upgrade",
                "body": "Developers scheduled the upgrade.",
                "url": "https://news.example.com/2",
                "imageurl": "",
                "published_on": "1700003600",
                "source_info": {"name": "The Block"},
            },
        ],
    }


@pytest.fixture
def app_config(tmp_path) -> AppConfig:
    return AppConfig(telemetry=TelemetryConfig(logs_dir=str(tmp_path / "logs"), events_enabled=False))


@pytest.fixture
def asset_factory() -> Callable[..., CryptoAsset]:
    def _factory(asset_id: str, **overrides: Any) -> CryptoAsset:
        payload: Dict[str, Any] = {
            "id": AssetId(asset_id),
            "name": overrides.pop("name", asset_id.title()),
            "symbol": overrides.pop("symbol", asset_id[:3].upper()),
            "price_usd": overrides.pop("price_usd", 1.0),
            "change_pct_24h": overrides.pop("change_pct_24h", 0.0),
        }
        payload.update(overrides)
        return CryptoAsset(**payload)

    return _factory


class RecordingEventSink:
    def __init__(self) -> None:
        self.events: list[TelemetryEvent] = []

    def append_event(self, event: TelemetryEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: str) -> list[TelemetryEvent]:
        return [event for event in self.events if event.event_type == event_type]


@pytest.fixture
def event_sink() -> RecordingEventSink:
    return RecordingEventSink()


Route = Callable[[httpx.Request], httpx.Response]


class FakeSources:
    """Routes requests for the four sources to canned responses."""

    def __init__(self) -> None:
        self.routes: Dict[str, Route] = {}
        self.requests: list[httpx.Request] = []

    def json(self, key: str, payload: Any, status_code: int = 200) -> None:
        self.routes[key] = lambda request: httpx.Response(status_code, json=payload)

    def fail(self, key: str, status_code: int = 500) -> None:
        self.routes[key] = lambda request: httpx.Response(status_code, json={"error": "boom"})

    def raise_error(self, key: str) -> None:
        def _route(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        self.routes[key] = _route

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = request.url.path
        if request.method == "POST" and request.url.path == "/info":
            key = f"/info:{json.loads(request.content)['type']}"
        route = self.routes.get(key)
        if route is None:
            return httpx.Response(404, json={"error": f"no route for {key}"})
        return route(request)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def count(self, path: str) -> int:
        return sum(1 for request in self.requests if request.url.path == path)


@pytest.fixture
def fake_sources(
    coin_markets_payload,
    perp_mids_payload,
    perp_meta_payload,
    perp_contexts_payload,
    gamma_markets_payload,
    news_payload,
) -> FakeSources:
    sources = FakeSources()
    sources.json("/api/v3/coins/markets", coin_markets_payload)
    sources.json("/info:allMids", perp_mids_payload)
    sources.json("/info:meta", perp_meta_payload)
    sources.json("/info:metaAndAssetCtxs", perp_contexts_payload)
    sources.json("/markets", gamma_markets_payload)
    sources.json("/data/v2/news/", news_payload)
    return sources
