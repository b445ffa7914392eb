"""Source fetcher factory: one :class:`SourceFetcher` per external source."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Mapping

from glass.core.enums import SourceName
from glass.data_feed.clients import SourceClients
from glass.data_feed.news import NewsArticle
from glass.data_feed.perps import PerpMarket
from glass.data_feed.prediction_markets import PredictionMarket
from glass.data_feed.spot import CryptoAsset
from glass.telemetry.storage import EventSink

from .fetcher import FetchState, SourceFetcher

logger = logging.getLogger("glass.sources")

ERROR_MESSAGES: Mapping[SourceName, str] = {
    SourceName.CRYPTO: "Failed to fetch crypto prices. Please try again.",
    SourceName.PERPS: "Failed to fetch Hyperliquid data. Please try again.",
    SourceName.PREDICTION: "Failed to fetch Polymarket data. Please try again.",
    SourceName.NEWS: "Failed to fetch crypto news. Please try again.",
}


@dataclass(slots=True)
class SourceFetchers:
    """The per-source fetchers of one application context."""

    crypto: SourceFetcher[CryptoAsset]
    perps: SourceFetcher[PerpMarket]
    prediction: SourceFetcher[PredictionMarket]
    news: SourceFetcher[NewsArticle]

    def by_name(self) -> Dict[SourceName, SourceFetcher]:
        return {
            SourceName.CRYPTO: self.crypto,
            SourceName.PERPS: self.perps,
            SourceName.PREDICTION: self.prediction,
            SourceName.NEWS: self.news,
        }

    def get(self, name: SourceName | str) -> SourceFetcher:
        """Return the fetcher for ``name``; raise ``KeyError`` if unknown."""

        try:
            return self.by_name()[SourceName(name)]
        except ValueError as exc:
            raise KeyError(f"Source {name} is not registered") from exc

    def dispose(self) -> None:
        for fetcher in self.by_name().values():
            fetcher.dispose()


def build_source_fetchers(clients: SourceClients, *, events: EventSink | None = None) -> SourceFetchers:
    """Instantiate one fetcher per source, each bound to its client's fetch coroutine."""

    def _make(name: SourceName, fetch) -> SourceFetcher:
        return SourceFetcher(
            name.value,
            fetch,
            error_message=ERROR_MESSAGES[name],
            events=events,
            logger=logging.getLogger(f"glass.sources.{name.value}"),
        )

    fetchers = SourceFetchers(
        crypto=_make(SourceName.CRYPTO, clients.crypto.fetch_assets),
        perps=_make(SourceName.PERPS, clients.perps.fetch_markets),
        prediction=_make(SourceName.PREDICTION, clients.prediction.fetch_markets),
        news=_make(SourceName.NEWS, clients.news.fetch_articles),
    )
    logger.info("Built source fetchers", extra={"sources": [name.value for name in fetchers.by_name()]})
    return fetchers


async def load_all(fetchers: Iterable[SourceFetcher], *, refresh: bool = False) -> list[FetchState]:
    """Load (or refresh) several fetchers concurrently.

    Each fetcher settles independently; a slow or failing source never stalls
    or alters another one.
    """

    selected = list(fetchers)
    if refresh:
        return list(await asyncio.gather(*(fetcher.refresh() for fetcher in selected)))
    return list(await asyncio.gather(*(fetcher.load() for fetcher in selected)))


__all__ = ["ERROR_MESSAGES", "SourceFetchers", "build_source_fetchers", "load_all"]
