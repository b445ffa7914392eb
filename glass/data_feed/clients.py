"""Source clients for the four external market data providers.

Each client performs the request(s) for one source through :class:`SourceHttp`
and hands the raw payload to that source's normalizer. The clients expose a
single ``fetch_*`` coroutine, which is exactly the callable a
:class:`glass.sources.fetcher.SourceFetcher` is configured with.

* ``GET /api/v3/coins/markets`` (CoinGecko) for spot prices;
* ``POST /info`` (Hyperliquid) with ``allMids``, ``meta`` and
  ``metaAndAssetCtxs`` issued concurrently; any sub-query failing fails the
  whole fetch;
* ``GET /markets`` (Polymarket Gamma) for active prediction markets;
* ``GET /data/v2/news/`` (CryptoCompare) for the news feed.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import List

from glass.config.models import (
    CoinGeckoSourceConfig,
    HyperliquidSourceConfig,
    NewsSourceConfig,
    PolymarketSourceConfig,
    SourcesConfig,
)
from glass.core.enums import SourceName

from .http import SourceHttp
from .news import NewsArticle, parse_news_response
from .perps import PerpMarket, parse_perp_markets
from .prediction_markets import PredictionMarket, parse_prediction_markets
from .spot import CryptoAsset, parse_markets_response

LOGGER = logging.getLogger("glass.data_feed.clients")


def _flag(value: bool) -> str:
    return "true" if value else "false"


class CoinGeckoClient:
    """Spot crypto listing ordered by market cap."""

    source = SourceName.CRYPTO.value

    def __init__(self, http: SourceHttp, config: CoinGeckoSourceConfig) -> None:
        self._http = http
        self._config = config

    async def fetch_assets(self) -> List[CryptoAsset]:
        params = {
            "vs_currency": self._config.vs_currency,
            "order": self._config.order,
            "per_page": self._config.per_page,
            "page": self._config.page,
            "sparkline": "false",
        }
        result = await self._http.get_json(self.source, f"{self._config.base_url}/api/v3/coins/markets", params=params)
        return parse_markets_response(result.data)


class HyperliquidClient:
    """Perpetuals snapshot built from three info queries."""

    source = SourceName.PERPS.value

    def __init__(self, http: SourceHttp, config: HyperliquidSourceConfig) -> None:
        self._http = http
        self._config = config

    async def _info(self, request_type: str):
        result = await self._http.post_json(self.source, f"{self._config.base_url}/info", {"type": request_type})
        return result.data

    async def fetch_markets(self) -> List[PerpMarket]:
        results = await asyncio.gather(
            self._info("allMids"),
            self._info("meta"),
            self._info("metaAndAssetCtxs"),
            return_exceptions=True,
        )
        failures = [item for item in results if isinstance(item, BaseException)]
        if failures:
            if len(failures) > 1:
                LOGGER.debug("Multiple perp info queries failed", extra={"n_failed": len(failures)})
            raise failures[0]
        mids, meta, asset_contexts = results
        return parse_perp_markets(mids, meta, asset_contexts)


class PolymarketClient:
    """Active, open prediction markets from the Gamma API."""

    source = SourceName.PREDICTION.value

    def __init__(self, http: SourceHttp, config: PolymarketSourceConfig) -> None:
        self._http = http
        self._config = config

    async def fetch_markets(self) -> List[PredictionMarket]:
        params = {
            "active": _flag(self._config.active),
            "closed": _flag(self._config.closed),
            "limit": self._config.limit,
        }
        result = await self._http.get_json(self.source, f"{self._config.base_url}/markets", params=params)
        return parse_prediction_markets(result.data)


class CryptoNewsClient:
    """Language-filtered crypto news feed."""

    source = SourceName.NEWS.value

    def __init__(self, http: SourceHttp, config: NewsSourceConfig) -> None:
        self._http = http
        self._config = config

    async def fetch_articles(self) -> List[NewsArticle]:
        result = await self._http.get_json(
            self.source,
            f"{self._config.base_url}/data/v2/news/",
            params={"lang": self._config.lang},
        )
        return parse_news_response(result.data, success_type=self._config.success_type)


@dataclass(slots=True)
class SourceClients:
    """The four source clients sharing one :class:`SourceHttp`."""

    crypto: CoinGeckoClient
    perps: HyperliquidClient
    prediction: PolymarketClient
    news: CryptoNewsClient


def build_source_clients(http: SourceHttp, config: SourcesConfig) -> SourceClients:
    """Instantiate every source client from the ``sources`` config section."""

    return SourceClients(
        crypto=CoinGeckoClient(http, config.coingecko),
        perps=HyperliquidClient(http, config.hyperliquid),
        prediction=PolymarketClient(http, config.polymarket),
        news=CryptoNewsClient(http, config.news),
    )


__all__ = [
    "CoinGeckoClient",
    "CryptoNewsClient",
    "HyperliquidClient",
    "PolymarketClient",
    "SourceClients",
    "build_source_clients",
]
