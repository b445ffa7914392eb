"""Capacity-limited team selection with toggle semantics.

The engine keeps an insertion-ordered mapping ``asset_id -> Direction``.
``toggle`` is synchronous and has no suspension point, so two toggles can
never interleave. The capacity check counts distinct selected assets: moving
a selected asset from Up to Down never hits the limit, only a new asset
beyond ``capacity`` does, and such a toggle leaves the state untouched.
"""
from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, Optional, Sequence

from glass.core.enums import Direction, SelectionAction
from glass.core.errors import TelemetryError
from glass.core.types import AssetId
from glass.data_feed.spot import CryptoAsset, find_asset
from glass.telemetry.events import SELECTION_REJECTED, TelemetryEvent
from glass.telemetry.storage import EventSink

from .models import (
    REASON_CAPACITY_EXCEEDED,
    REASON_UNKNOWN_ASSET,
    SelectionDecision,
    SelectionEntry,
    TeamMember,
)

DEFAULT_CAPACITY = 5

AssetProvider = Callable[[], Sequence[CryptoAsset]]


class SelectionEngine:
    """Owns the selected assets and enforces the team capacity."""

    def __init__(
        self,
        capacity: int = DEFAULT_CAPACITY,
        *,
        asset_provider: Optional[AssetProvider] = None,
        events: EventSink | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        if capacity < 1:
            raise ValueError("capacity must be a positive integer")
        self._capacity = capacity
        self._asset_provider = asset_provider
        self._events = events
        self._logger = logger or logging.getLogger("glass.team")
        self._selected: Dict[AssetId, Direction] = {}

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------
    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def size(self) -> int:
        return len(self._selected)

    @property
    def remaining(self) -> int:
        return self._capacity - len(self._selected)

    @property
    def is_full(self) -> bool:
        return len(self._selected) >= self._capacity

    def direction_of(self, asset_id: str) -> Direction | None:
        return self._selected.get(AssetId(asset_id))

    def team(self) -> tuple[SelectionEntry, ...]:
        """Selected entries in insertion order."""

        return tuple(SelectionEntry(asset_id=asset_id, direction=direction) for asset_id, direction in self._selected.items())

    def roster(self, assets: Iterable[CryptoAsset] | None = None) -> tuple[TeamMember, ...]:
        """Team entries joined with ``assets``; entries without a matching asset are skipped."""

        if assets is None:
            assets = self._asset_provider() if self._asset_provider else ()
        by_id = {asset.id: asset for asset in assets}
        members: list[TeamMember] = []
        for asset_id, direction in self._selected.items():
            asset = by_id.get(asset_id)
            if asset is not None:
                members.append(TeamMember(asset=asset, direction=direction))
        return tuple(members)

    # ------------------------------------------------------------------
    # Write side
    # ------------------------------------------------------------------
    def toggle(self, asset_id: str, direction: Direction | str) -> SelectionDecision:
        """Select, switch or deselect ``asset_id``.

        * same asset and direction already selected -> removed;
        * asset selected in the other direction -> switched in place;
        * new asset while the team is full -> rejected, state unchanged;
        * otherwise -> added at the end of the team.
        """

        key = AssetId(asset_id)
        wanted = Direction(direction)
        current = self._selected.get(key)

        if current is wanted:
            del self._selected[key]
            return self._decision(key, wanted, SelectionAction.REMOVED)
        if current is not None:
            self._selected[key] = wanted
            return self._decision(key, wanted, SelectionAction.SWITCHED)
        if self._asset_provider is not None and find_asset(self._asset_provider(), key) is None:
            return self._reject(key, wanted, REASON_UNKNOWN_ASSET)
        if len(self._selected) >= self._capacity:
            return self._reject(key, wanted, REASON_CAPACITY_EXCEEDED)
        self._selected[key] = wanted
        return self._decision(key, wanted, SelectionAction.ADDED)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _decision(
        self,
        asset_id: AssetId,
        direction: Direction,
        action: SelectionAction,
        reason: str | None = None,
    ) -> SelectionDecision:
        return SelectionDecision(
            asset_id=asset_id,
            direction=direction,
            action=action,
            team_size=len(self._selected),
            capacity=self._capacity,
            reason=reason,
        )

    def _reject(self, asset_id: AssetId, direction: Direction, reason: str) -> SelectionDecision:
        decision = self._decision(asset_id, direction, SelectionAction.REJECTED, reason)
        self._logger.info(
            "Selection rejected",
            extra={"asset_id": asset_id, "direction": direction.value, "reason": reason, "team_size": decision.team_size},
        )
        if self._events is not None:
            event = TelemetryEvent(
                event_type=SELECTION_REJECTED,
                payload={"reason": reason, "team_size": decision.team_size, "capacity": self._capacity},
                context={"asset_id": asset_id, "direction": direction.value},
            )
            try:
                self._events.append_event(event)
            except TelemetryError as exc:
                self._logger.warning("Failed to record selection telemetry: %s", exc)
        return decision


__all__ = ["AssetProvider", "DEFAULT_CAPACITY", "SelectionEngine"]
