"""Per-source fetch lifecycle package."""

from .fetcher import FetchState, SourceFetcher
from .registry import ERROR_MESSAGES, SourceFetchers, build_source_fetchers, load_all

__all__ = [
    "ERROR_MESSAGES",
    "FetchState",
    "SourceFetcher",
    "SourceFetchers",
    "build_source_fetchers",
    "load_all",
]
