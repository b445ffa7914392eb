"""Telemetry and logging subsystem package."""
from .events import FETCH_FAILED, FETCH_SUCCEEDED, SELECTION_REJECTED, TelemetryEvent
from .logging_setup import JsonFormatter, configure_logging
from .storage import EventSink, TelemetryStorage, default_storage

__all__ = [
    "EventSink",
    "FETCH_FAILED",
    "FETCH_SUCCEEDED",
    "JsonFormatter",
    "SELECTION_REJECTED",
    "TelemetryEvent",
    "TelemetryStorage",
    "configure_logging",
    "default_storage",
]
