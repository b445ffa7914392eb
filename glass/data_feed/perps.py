"""Perpetual futures normalization.

The perps screen combines three info queries: current mid prices keyed by
asset name, the universe metadata (name and max leverage) and per-asset
contexts (mark price, previous-day price, volume, funding, open interest).

Contexts are matched to universe entries by name when the context response
carries its own universe (``[meta, contexts]``), and by position otherwise. A
universe entry without a matching context still yields a record with every
context-derived field at its default. The 24h change is ``"0.00"`` when the
previous-day price is zero or missing: a display default, not a market fact.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, List, Mapping, Sequence

from glass.core.errors import SchemaFailure

from .numbers import format_fixed, format_grouped, to_float, to_int

LOGGER = logging.getLogger("glass.data_feed.perps")

SOURCE = "perps"

DEFAULT_CHANGE = "0.00"
DEFAULT_VOLUME = "0"
DEFAULT_FUNDING = "0.0000"
DEFAULT_OPEN_INTEREST = "0"


@dataclass(frozen=True, slots=True)
class PerpMarket:
    """Canonical perpetual market row. Derived fields are display strings."""

    id: str
    name: str
    mark_price: float
    change_24h: str
    volume_24h: str
    funding_rate: str
    open_interest: str
    max_leverage: int

    @property
    def display_name(self) -> str:
        return f"{self.name}-PERP"

    @property
    def is_rising(self) -> bool:
        return to_float(self.change_24h) >= 0


def compute_change_pct(mark_px: Any, prev_day_px: Any) -> str:
    """``(mark - prev) / prev * 100`` with two decimals.

    ``"0.00"`` when prev is 0 or either price is missing or unparseable.
    """

    prev = to_float(prev_day_px)
    mark = to_float(mark_px, math.nan)
    if prev == 0 or math.isnan(mark):
        return DEFAULT_CHANGE
    return format_fixed((mark - prev) / prev * 100, 2)


def normalize_perp(asset: Any, context: Any, mid_price: Any = None) -> PerpMarket:
    """Build a :class:`PerpMarket` from one universe entry and its context. Never raises."""

    meta: Mapping[str, Any] = asset if isinstance(asset, Mapping) else {}
    name = str(meta.get("name") or "")
    leverage = to_int(meta.get("maxLeverage"), 1)
    if leverage < 1:
        leverage = 1
    if not isinstance(context, Mapping):
        return PerpMarket(
            id=name,
            name=name,
            mark_price=to_float(mid_price),
            change_24h=DEFAULT_CHANGE,
            volume_24h=DEFAULT_VOLUME,
            funding_rate=DEFAULT_FUNDING,
            open_interest=DEFAULT_OPEN_INTEREST,
            max_leverage=leverage,
        )
    return PerpMarket(
        id=name,
        name=name,
        mark_price=to_float(mid_price),
        change_24h=compute_change_pct(context.get("markPx"), context.get("prevDayPx")),
        volume_24h=format_grouped(to_float(context.get("dayNtlVlm"))),
        funding_rate=format_fixed(to_float(context.get("funding")) * 100, 4),
        open_interest=format_grouped(to_float(context.get("openInterest"))),
        max_leverage=leverage,
    )


def _universe(payload: Any) -> Sequence[Any]:
    if isinstance(payload, Mapping):
        universe = payload.get("universe")
        if isinstance(universe, list):
            return universe
    raise SchemaFailure(SOURCE, "meta response has no universe list")


def _split_contexts(payload: Any) -> tuple[Sequence[Any] | None, Sequence[Any]]:
    """Return ``(context_universe, contexts)`` from the asset-context response.

    Accepts ``[meta, contexts]`` (contexts carry their own universe) or a bare
    list of contexts.
    """

    if isinstance(payload, list) and len(payload) == 2 and isinstance(payload[0], Mapping) and isinstance(payload[1], list):
        ctx_universe = payload[0].get("universe")
        return (ctx_universe if isinstance(ctx_universe, list) else None), payload[1]
    if isinstance(payload, Mapping) and isinstance(payload.get("contexts"), list):
        return None, payload["contexts"]
    if isinstance(payload, list):
        return None, payload
    raise SchemaFailure(SOURCE, "asset context response is not a list")


def parse_perp_markets(mids: Any, meta: Any, asset_contexts: Any) -> List[PerpMarket]:
    """Join mids, universe and contexts into :class:`PerpMarket` rows.

    Only the top-level shapes are enforced (:class:`SchemaFailure`); every
    per-asset field degrades to its default.
    """

    if mids is None:
        mids = {}
    if not isinstance(mids, Mapping):
        raise SchemaFailure(SOURCE, "mids response is not a mapping")
    universe = _universe(meta)
    ctx_universe, contexts = _split_contexts(asset_contexts)

    by_name: dict[str, Any] | None = None
    if ctx_universe is not None and len(ctx_universe) == len(contexts):
        by_name = {}
        for entry, ctx in zip(ctx_universe, contexts):
            if isinstance(entry, Mapping) and entry.get("name"):
                by_name[str(entry["name"])] = ctx
    elif len(universe) != len(contexts):
        LOGGER.warning(
            "Perp universe and contexts are misaligned; missing contexts use defaults",
            extra={"n_universe": len(universe), "n_contexts": len(contexts)},
        )

    markets: List[PerpMarket] = []
    for index, asset in enumerate(universe):
        name = str(asset.get("name") or "") if isinstance(asset, Mapping) else ""
        if by_name is not None:
            context = by_name.get(name)
        else:
            context = contexts[index] if index < len(contexts) else None
        markets.append(normalize_perp(asset, context, mids.get(name)))
    return markets


__all__ = ["PerpMarket", "compute_change_pct", "normalize_perp", "parse_perp_markets"]
