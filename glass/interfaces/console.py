"""Plain-text screens for a terminal.

Each ``render_*`` function turns one source's :class:`FetchState` into the
text a screen shows: a loading line, the error with a retry hint above any
stale rows, an empty-state line, or the rows themselves.
"""
from __future__ import annotations

from typing import Iterable, List

from glass.core.enums import Direction
from glass.data_feed.news import NewsArticle
from glass.data_feed.numbers import format_grouped, to_float
from glass.data_feed.perps import PerpMarket
from glass.data_feed.prediction_markets import PredictionMarket
from glass.data_feed.spot import CryptoAsset
from glass.sources.fetcher import FetchState
from glass.team.selection_engine import SelectionEngine
from glass.team.summary import Notice

from .carousel import NewsCarousel

RETRY_HINT = "Run again (or retry) to reload."

_DIRECTION_MARKERS = {Direction.UP: "[UP]", Direction.DOWN: "[DOWN]"}


def render_banner(state: FetchState, *, loading_text: str, empty_text: str) -> List[str]:
    """Status lines shared by every screen."""

    if state.loading:
        return [loading_text]
    lines: List[str] = []
    if state.refreshing:
        lines.append("Refreshing...")
    if state.error is not None:
        lines.extend([state.error, RETRY_HINT])
    elif state.has_loaded and state.is_empty:
        lines.append(empty_text)
    return lines


def format_crypto_row(asset: CryptoAsset, direction: Direction | None = None) -> str:
    arrow = "↑" if asset.is_rising else "↓"
    marker = _DIRECTION_MARKERS.get(direction, "") if direction else ""
    row = f"{asset.name} ({asset.symbol})  ${format_grouped(asset.price_usd)}  {arrow} {abs(asset.change_pct_24h):.2f}%"
    return f"{row}  {marker}" if marker else row


def format_perp_row(market: PerpMarket) -> str:
    sign = "+" if market.is_rising else ""
    return (
        f"{market.display_name} {market.max_leverage}x  ${format_grouped(market.mark_price)}  "
        f"{sign}{market.change_24h}%  Volume: ${market.volume_24h}  "
        f"Funding: {market.funding_rate}%  OI: ${market.open_interest}"
    )


def format_prediction_card(market: PredictionMarket) -> List[str]:
    outcomes = "  ".join(f"{outcome.label}: {outcome.probability_pct}%" for outcome in market.outcomes)
    header = f"{market.category} | {market.volume_formatted}" if market.category else market.volume_formatted
    return [market.question, f"  {header}", f"  {outcomes}"]


def format_article(article: NewsArticle, position: int, total: int) -> List[str]:
    published = article.published_at.strftime("%Y-%m-%d")
    return [
        f"[{position}/{total}] {article.title}",
        f"  {article.body[:280]}",
        f"  {article.source_name} | {published}",
    ]


def render_crypto_screen(state: FetchState[CryptoAsset], selection: SelectionEngine | None = None) -> str:
    lines = ["== Crypto =="]
    lines.extend(render_banner(state, loading_text="Loading crypto data...", empty_text="No crypto data available."))
    if not state.loading:
        for asset in state.data:
            direction = selection.direction_of(asset.id) if selection else None
            lines.append(format_crypto_row(asset, direction))
    if selection is not None:
        lines.append(f"Team {selection.size}/{selection.capacity}")
    return "\n".join(lines)


def render_perps_screen(state: FetchState[PerpMarket]) -> str:
    lines = ["== Hyperliquid =="]
    lines.extend(render_banner(state, loading_text="Loading Hyperliquid data...", empty_text="No markets available."))
    if not state.loading:
        lines.extend(format_perp_row(market) for market in state.data)
    return "\n".join(lines)


def render_prediction_screen(state: FetchState[PredictionMarket]) -> str:
    lines = ["== Polymarket =="]
    lines.extend(render_banner(state, loading_text="Loading Polymarket data...", empty_text="No markets available."))
    if not state.loading:
        for market in state.data:
            lines.extend(format_prediction_card(market))
    return "\n".join(lines)


def render_news_screen(state: FetchState[NewsArticle], carousel: NewsCarousel) -> str:
    lines = ["== Crypto News =="]
    lines.extend(
        render_banner(state, loading_text="Loading crypto news...", empty_text="No crypto news available at the moment.")
    )
    article = carousel.current
    if not state.loading and article is not None:
        lines.extend(format_article(article, carousel.index + 1, len(carousel)))
    return "\n".join(lines)


def render_notice(notice: Notice) -> str:
    return f"{notice.title}\n{notice.message}"


def render_screens(blocks: Iterable[str]) -> str:
    return "\n\n".join(block for block in blocks if block)


__all__ = [
    "format_article",
    "format_crypto_row",
    "format_perp_row",
    "format_prediction_card",
    "render_banner",
    "render_crypto_screen",
    "render_news_screen",
    "render_notice",
    "render_perps_screen",
    "render_prediction_screen",
    "render_screens",
]
