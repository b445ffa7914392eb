"""Prediction market (Polymarket Gamma) normalization.

Gamma returns ``outcomes`` and ``outcomePrices`` as JSON-encoded strings.
They are decoded, paired by position and truncated to the first two pairs;
anything that does not decode to a list falls back to ``Yes``/``No`` at 0%.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, List, Mapping, Sequence

from glass.core.errors import SchemaFailure

from .numbers import format_compact_volume, round_half_up, to_float

SOURCE = "prediction"

DEFAULT_OUTCOMES: tuple[str, str] = ("Yes", "No")
DEFAULT_PRICES: tuple[float, float] = (0.0, 0.0)
MAX_SURFACED_OUTCOMES = 2


@dataclass(frozen=True, slots=True)
class Outcome:
    """One outcome label with its implied probability in whole percent."""

    label: str
    probability_pct: int


@dataclass(frozen=True, slots=True)
class PredictionMarket:
    """Canonical prediction market card."""

    id: str
    question: str
    category: str
    volume_formatted: str
    outcomes: tuple[Outcome, ...]
    image_url: str | None = None


def _decode_list(value: Any) -> list | None:
    if isinstance(value, list):
        return value
    if isinstance(value, str):
        try:
            decoded = json.loads(value)
        except ValueError:
            return None
        return decoded if isinstance(decoded, list) else None
    return None


def parse_outcomes(value: Any) -> List[str]:
    """Decode the outcome labels, defaulting to ``["Yes", "No"]``."""

    decoded = _decode_list(value)
    if decoded is None:
        return list(DEFAULT_OUTCOMES)
    return [str(label) for label in decoded]


def parse_prices(value: Any) -> List[float]:
    """Decode outcome prices, defaulting to ``[0, 0]``; bad entries become 0."""

    decoded = _decode_list(value)
    if decoded is None:
        return list(DEFAULT_PRICES)
    return [to_float(price) for price in decoded]


def implied_probability_pct(price: float) -> int:
    """Whole-percent probability of a ``[0, 1]`` price, clamped to ``0..100``."""

    return min(100, max(0, round_half_up(price * 100)))


def pair_outcomes(labels: Sequence[str], prices: Sequence[float]) -> tuple[Outcome, ...]:
    """Pair labels with prices by position, keeping the first two pairs."""

    pairs: list[Outcome] = []
    for index, label in enumerate(labels[:MAX_SURFACED_OUTCOMES]):
        price = prices[index] if index < len(prices) else 0.0
        pairs.append(Outcome(label=label, probability_pct=implied_probability_pct(price)))
    return tuple(pairs)


def normalize_prediction_market(raw: Any) -> PredictionMarket:
    """Map one Gamma market to :class:`PredictionMarket`. Never raises."""

    item: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}
    image = item.get("image")
    return PredictionMarket(
        id=str(item.get("id") or ""),
        question=str(item.get("question") or ""),
        category=str(item.get("category") or ""),
        volume_formatted=format_compact_volume(to_float(item.get("volumeNum"))),
        outcomes=pair_outcomes(parse_outcomes(item.get("outcomes")), parse_prices(item.get("outcomePrices"))),
        image_url=str(image) if image else None,
    )


def parse_prediction_markets(payload: Any) -> List[PredictionMarket]:
    """Convert the Gamma ``/markets`` payload. Raises :class:`SchemaFailure` if not a list."""

    if payload is None:
        return []
    if not isinstance(payload, list):
        raise SchemaFailure(SOURCE, f"expected a list of markets, got {type(payload).__name__}")
    return [normalize_prediction_market(raw) for raw in payload]


__all__ = [
    "Outcome",
    "PredictionMarket",
    "implied_probability_pct",
    "normalize_prediction_market",
    "pair_outcomes",
    "parse_outcomes",
    "parse_prediction_markets",
    "parse_prices",
]
