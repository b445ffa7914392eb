"""Team selection models.

``SelectionEntry`` is one asset/direction pair owned by the selection engine;
the Team is the insertion-ordered tuple of entries. ``SelectionDecision`` is
what a toggle returns: either the applied action or a rejection with a reason
(a usage rejection, not an error).
"""
from __future__ import annotations

from dataclasses import dataclass

from glass.core.enums import Direction, SelectionAction
from glass.core.types import AssetId
from glass.data_feed.spot import CryptoAsset

REASON_CAPACITY_EXCEEDED = "capacity_exceeded"
REASON_UNKNOWN_ASSET = "unknown_asset"


@dataclass(frozen=True, slots=True)
class SelectionEntry:
    """One selected asset and its predicted direction."""

    asset_id: AssetId
    direction: Direction


@dataclass(frozen=True, slots=True)
class TeamMember:
    """Selection entry resolved against the current crypto list."""

    asset: CryptoAsset
    direction: Direction


@dataclass(frozen=True, slots=True)
class SelectionDecision:
    """Result of :meth:`SelectionEngine.toggle`."""

    asset_id: AssetId
    direction: Direction
    action: SelectionAction
    team_size: int
    capacity: int
    reason: str | None = None

    @property
    def accepted(self) -> bool:
        return self.action is not SelectionAction.REJECTED

    @property
    def is_rejected(self) -> bool:
        return not self.accepted


__all__ = [
    "REASON_CAPACITY_EXCEEDED",
    "REASON_UNKNOWN_ASSET",
    "SelectionDecision",
    "SelectionEntry",
    "TeamMember",
]
