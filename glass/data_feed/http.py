"""Async HTTP transport shared by the source clients.

``SourceHttp`` wraps one :class:`httpx.AsyncClient` and performs a single
request/response exchange per call. Latency is measured for every request
as ``(response_time - request_time)`` in milliseconds and logged at debug
level. Failures are translated into the fetch error taxonomy:

* network errors and non-2xx statuses -> :class:`TransportFailure`;
* bodies that are not valid JSON -> :class:`SchemaFailure`.

There is no retry loop here: retries are user-initiated through the source
fetcher.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Generic, Mapping, Optional, TypeVar

import httpx

from glass.config.models import HttpConfig
from glass.core.errors import SchemaFailure, TransportFailure

LOGGER = logging.getLogger("glass.data_feed.http")

T = TypeVar("T")


@dataclass(slots=True)
class DataWithLatency(Generic[T]):
    """Container used by request helpers to propagate measured latency."""

    data: T
    latency_ms: float


def build_http_client(config: HttpConfig, transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    """Create the process-wide async client (``transport`` is for tests)."""

    return httpx.AsyncClient(
        timeout=config.timeout_sec,
        headers={"User-Agent": config.user_agent, "Accept": "application/json"},
        transport=transport,
    )


class SourceHttp:
    """Thin JSON request helper bound to a shared :class:`httpx.AsyncClient`."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    async def get_json(
        self,
        source: str,
        url: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
    ) -> DataWithLatency[Any]:
        return await self._request(source, "GET", url, params=params)

    async def post_json(
        self,
        source: str,
        url: str,
        body: Mapping[str, Any],
    ) -> DataWithLatency[Any]:
        return await self._request(source, "POST", url, body=body)

    async def _request(
        self,
        source: str,
        method: str,
        url: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        body: Optional[Mapping[str, Any]] = None,
    ) -> DataWithLatency[Any]:
        start = time.perf_counter()
        try:
            response = await self._client.request(
                method,
                url,
                params=dict(params) if params else None,
                json=dict(body) if body is not None else None,
            )
        except httpx.HTTPError as exc:
            raise TransportFailure(source, f"{method} {url} failed: {exc}") from exc
        latency_ms = (time.perf_counter() - start) * 1_000.0
        if not response.is_success:
            raise TransportFailure(
                source,
                f"{method} {url} returned HTTP {response.status_code}",
                status_code=response.status_code,
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise SchemaFailure(source, f"{method} {url} returned invalid JSON") from exc
        LOGGER.debug(
            "Source request completed",
            extra={"source": source, "method": method, "url": url, "latency_ms": round(latency_ms, 2)},
        )
        return DataWithLatency(payload, latency_ms)


__all__ = ["DataWithLatency", "SourceHttp", "build_http_client"]
