"""Spot crypto market listing normalization.

CoinGecko's ``/coins/markets`` returns a list of coin objects; only the fields
the home screen and the team engine need survive normalization.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Sequence

from glass.core.errors import SchemaFailure
from glass.core.types import AssetId

from .numbers import to_float

SOURCE = "crypto"


@dataclass(frozen=True, slots=True)
class CryptoAsset:
    """Canonical spot asset. ``price_usd`` is never negative."""

    id: AssetId
    name: str
    symbol: str
    price_usd: float
    change_pct_24h: float

    @property
    def is_rising(self) -> bool:
        return self.change_pct_24h >= 0


def normalize_asset(raw: Any) -> CryptoAsset:
    """Map one ``/coins/markets`` entry to :class:`CryptoAsset`. Never raises."""

    item: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}
    asset_id = str(item.get("id") or "")
    symbol = str(item.get("symbol") or "").upper()
    return CryptoAsset(
        id=AssetId(asset_id),
        name=str(item.get("name") or symbol or asset_id),
        symbol=symbol,
        price_usd=max(0.0, to_float(item.get("current_price"))),
        change_pct_24h=to_float(item.get("price_change_percentage_24h")),
    )


def parse_markets_response(payload: Any) -> List[CryptoAsset]:
    """Convert the listing payload into assets, dropping entries without an id.

    Raises :class:`SchemaFailure` when the payload is not a list at all.
    """

    if payload is None:
        return []
    if not isinstance(payload, list):
        raise SchemaFailure(SOURCE, f"expected a list of markets, got {type(payload).__name__}")
    assets: List[CryptoAsset] = []
    seen: set[str] = set()
    for raw in payload:
        asset = normalize_asset(raw)
        # ids key the team selection, so they must be present and unique
        if not asset.id or asset.id in seen:
            continue
        seen.add(asset.id)
        assets.append(asset)
    return assets


def find_asset(assets: Sequence[CryptoAsset], asset_id: str) -> CryptoAsset | None:
    """Return the asset with ``asset_id`` or ``None``."""

    for asset in assets:
        if asset.id == asset_id:
            return asset
    return None


__all__ = ["CryptoAsset", "find_asset", "normalize_asset", "parse_markets_response"]
