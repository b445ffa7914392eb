"""Structured diagnostic events.

Events describe what happened to a fetch or a selection (kind of failure,
status code, rejection reason). They never carry fetched records or the team
itself; neither is persisted.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict

FETCH_SUCCEEDED = "fetch_succeeded"
FETCH_FAILED = "fetch_failed"
SELECTION_REJECTED = "selection_rejected"


@dataclass(slots=True)
class TelemetryEvent:
    """Generic event used by JSON-line logs under ``logs/events_YYYYMMDD.jsonl``."""

    event_type: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(tz=timezone.utc))
    level: str = "INFO"
    payload: Dict[str, Any] = field(default_factory=dict)
    context: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["timestamp"] = self.timestamp.isoformat()
        return data


__all__ = ["FETCH_FAILED", "FETCH_SUCCEEDED", "SELECTION_REJECTED", "TelemetryEvent"]
