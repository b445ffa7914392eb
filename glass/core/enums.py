"""Enumerations shared across subsystems."""
from __future__ import annotations

from enum import Enum


class Direction(str, Enum):
    """Direction of a team bet on an asset."""

    UP = "up"
    DOWN = "down"

    @property
    def opposite(self) -> "Direction":
        return Direction.DOWN if self is Direction.UP else Direction.UP


class SourceName(str, Enum):
    """Identifiers of the external market data sources."""

    CRYPTO = "crypto"
    PERPS = "perps"
    PREDICTION = "prediction"
    NEWS = "news"


class FetchMode(str, Enum):
    """Trigger path of a fetch (initial load vs. pull-to-refresh)."""

    LOAD = "load"
    REFRESH = "refresh"


class SelectionAction(str, Enum):
    """Outcome of a selection toggle."""

    ADDED = "added"
    SWITCHED = "switched"
    REMOVED = "removed"
    REJECTED = "rejected"
