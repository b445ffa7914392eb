"""Helpers for persisting diagnostic telemetry events."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Protocol

from glass.core.errors import TelemetryError
from glass.telemetry.events import TelemetryEvent


class EventSink(Protocol):
    """Anything that accepts telemetry events (storage, test recorders)."""

    def append_event(self, event: TelemetryEvent) -> object:
        ...


class TelemetryStorage:
    """Write :class:`TelemetryEvent` objects as JSON lines.

    One instance is created by the application context and handed to every
    source fetcher and the selection engine.
    """

    def __init__(self, *, logs_dir: Path) -> None:
        self._logs_dir = logs_dir
        self._logs_dir.mkdir(parents=True, exist_ok=True)

    @property
    def logs_dir(self) -> Path:
        return self._logs_dir

    def append_event(self, event: TelemetryEvent) -> Path:
        """Append ``event`` as JSON to ``logs/events_YYYYMMDD.jsonl``."""

        date_str = event.timestamp.strftime("%Y%m%d")
        path = self._logs_dir / f"events_{date_str}.jsonl"
        try:
            with path.open("a", encoding="utf-8") as handle:
                json.dump(event.to_dict(), handle, ensure_ascii=False)
                handle.write("\n")
        except OSError as exc:  # pragma: no cover - filesystem errors are rare
            raise TelemetryError(f"Failed to write telemetry event: {exc}") from exc
        return path


def default_storage(base_dir: Path) -> TelemetryStorage:
    """Factory returning storage rooted under ``base_dir``."""

    return TelemetryStorage(logs_dir=base_dir)


__all__ = ["EventSink", "TelemetryStorage", "default_storage"]
