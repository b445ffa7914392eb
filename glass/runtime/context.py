"""Explicitly constructed application context.

``AppContext`` replaces module-level singletons: it owns the shared
``httpx.AsyncClient``, the source clients, one fetcher per source, the
selection engine and the telemetry sink, and is closed explicitly. Build
order is config -> logging (by the caller) -> context -> fetchers -> engine.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import httpx

from glass.config.models import AppConfig
from glass.data_feed.clients import SourceClients, build_source_clients
from glass.data_feed.http import SourceHttp, build_http_client
from glass.sources.registry import SourceFetchers, build_source_fetchers
from glass.team.selection_engine import SelectionEngine
from glass.telemetry.storage import EventSink, default_storage

LOGGER = logging.getLogger("glass.runtime")


@dataclass(slots=True)
class AppContext:
    """Process-wide collaborators for one dashboard session."""

    config: AppConfig
    http_client: httpx.AsyncClient
    clients: SourceClients
    fetchers: SourceFetchers
    selection: SelectionEngine
    events: Optional[EventSink] = None
    closed: bool = False

    async def aclose(self) -> None:
        """Dispose the fetchers and close the HTTP client (idempotent)."""

        if self.closed:
            return
        self.closed = True
        self.fetchers.dispose()
        await self.http_client.aclose()
        LOGGER.info("Context closed")

    async def __aenter__(self) -> "AppContext":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()


def create_context(
    config: AppConfig,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    events: EventSink | None = None,
    logs_dir: Path | None = None,
) -> AppContext:
    """Wire the context from ``config``.

    ``transport`` replaces the network layer (tests); ``events`` replaces the
    JSONL telemetry storage, which is otherwise created under ``logs_dir`` (or
    ``telemetry.logs_dir``) when ``telemetry.events_enabled`` is set.
    """

    if events is None and config.telemetry.events_enabled:
        events = default_storage(logs_dir or Path(config.telemetry.logs_dir))
    http_client = build_http_client(config.http, transport=transport)
    clients = build_source_clients(SourceHttp(http_client), config.sources)
    fetchers = build_source_fetchers(clients, events=events)
    selection = SelectionEngine(
        config.team.capacity,
        asset_provider=lambda: fetchers.crypto.state.data,
        events=events,
    )
    LOGGER.info(
        "Context created",
        extra={"team_capacity": config.team.capacity, "events_enabled": events is not None},
    )
    return AppContext(
        config=config,
        http_client=http_client,
        clients=clients,
        fetchers=fetchers,
        selection=selection,
        events=events,
    )


__all__ = ["AppContext", "create_context"]
