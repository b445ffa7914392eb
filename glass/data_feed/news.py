"""Crypto news feed normalization (CryptoCompare ``/data/v2/news``).

The feed wraps articles in an envelope whose ``Type`` field reports success;
any other ``Type`` is a source-reported failure even on HTTP 200.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, List, Mapping

from glass.core.errors import SchemaFailure, SourceReportedFailure

from .numbers import to_int

SOURCE = "news"
SUCCESS_TYPE = 100
# 9999-12-31T23:59:59Z, the last second a datetime can hold
MAX_PUBLISHED_ON = 253_402_300_799


@dataclass(frozen=True, slots=True)
class NewsArticle:
    """Canonical article. ``id`` is the fetch-order index, not a stable source id."""

    id: str
    title: str
    body: str
    url: str
    source_name: str
    published_on: int
    image_url: str | None = None

    @property
    def published_at(self) -> datetime:
        return datetime.fromtimestamp(self.published_on, tz=timezone.utc)


def _published_on(value: Any) -> int:
    seconds = to_int(value)
    if seconds < 0 or seconds > MAX_PUBLISHED_ON:
        return 0
    return seconds


def normalize_article(raw: Any, index: int) -> NewsArticle:
    """Map one feed entry to :class:`NewsArticle`. Never raises."""

    item: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}
    source_info = item.get("source_info")
    source_name = ""
    if isinstance(source_info, Mapping):
        source_name = str(source_info.get("name") or "")
    if not source_name:
        source_name = str(item.get("source") or "")
    image = item.get("imageurl")
    return NewsArticle(
        id=str(index),
        title=str(item.get("title") or ""),
        body=str(item.get("body") or ""),
        url=str(item.get("url") or ""),
        source_name=source_name,
        published_on=_published_on(item.get("published_on")),
        image_url=str(image) if image else None,
    )


def parse_news_response(payload: Any, *, success_type: int = SUCCESS_TYPE) -> List[NewsArticle]:
    """Validate the envelope and convert ``Data`` into articles.

    Raises :class:`SourceReportedFailure` when ``Type`` differs from
    ``success_type`` and :class:`SchemaFailure` when the envelope or ``Data``
    has the wrong shape.
    """

    if not isinstance(payload, Mapping):
        raise SchemaFailure(SOURCE, "news envelope is not an object")
    if payload.get("Type") != success_type:
        message = payload.get("Message") or "Failed to fetch news"
        raise SourceReportedFailure(SOURCE, f"Type={payload.get('Type')!r}: {message}")
    data = payload.get("Data")
    if data is None:
        return []
    if not isinstance(data, list):
        raise SchemaFailure(SOURCE, "news Data is not a list")
    return [normalize_article(raw, index) for index, raw in enumerate(data)]


__all__ = ["NewsArticle", "normalize_article", "parse_news_response"]
