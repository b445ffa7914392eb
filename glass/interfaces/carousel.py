"""News slideshow navigation."""
from __future__ import annotations

from typing import Callable, Sequence

from glass.data_feed.news import NewsArticle
from glass.sources.fetcher import FetchState, SourceFetcher


class NewsCarousel:
    """Cyclic cursor over the latest articles.

    ``next``/``previous`` wrap around. When the article list is replaced the
    cursor is kept if still in range and reset to the first article otherwise.
    """

    def __init__(self, articles: Sequence[NewsArticle] = ()) -> None:
        self._articles: tuple[NewsArticle, ...] = tuple(articles)
        self._index = 0

    def __len__(self) -> int:
        return len(self._articles)

    @property
    def index(self) -> int:
        return self._index

    @property
    def current(self) -> NewsArticle | None:
        if not self._articles:
            return None
        return self._articles[self._index]

    def update(self, articles: Sequence[NewsArticle]) -> None:
        self._articles = tuple(articles)
        if self._index >= len(self._articles):
            self._index = 0

    def next(self) -> NewsArticle | None:
        if self._articles:
            self._index = (self._index + 1) % len(self._articles)
        return self.current

    def previous(self) -> NewsArticle | None:
        if self._articles:
            self._index = (self._index - 1 + len(self._articles)) % len(self._articles)
        return self.current

    def bind(self, fetcher: SourceFetcher[NewsArticle]) -> Callable[[], None]:
        """Follow ``fetcher``'s data; returns the unsubscribe callable."""

        def _on_state(state: FetchState[NewsArticle]) -> None:
            if state.data != self._articles:
                self.update(state.data)

        self.update(fetcher.state.data)
        return fetcher.subscribe(_on_state)


__all__ = ["NewsCarousel"]
