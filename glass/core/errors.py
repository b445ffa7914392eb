"""Error hierarchy shared by the subsystems.

Fetch failures are split into three kinds so that logs and telemetry can tell
them apart. Callers above the source fetcher never see them: the fetcher
collapses every failure into a single human-readable ``error`` string.
"""
from __future__ import annotations


class CoreError(Exception):
    """Base class for all custom exceptions in the application."""


class ConfigurationError(CoreError):
    """Raised when configuration files are missing or invalid."""


class FetchError(CoreError):
    """Base class for failures while fetching or parsing source data."""

    kind = "fetch"

    def __init__(self, source: str, message: str) -> None:
        super().__init__(f"{source}: {message}")
        self.source = source
        self.message = message


class TransportFailure(FetchError):
    """Network error or non-success HTTP status."""

    kind = "transport"

    def __init__(self, source: str, message: str, status_code: int | None = None) -> None:
        super().__init__(source, message)
        self.status_code = status_code


class SchemaFailure(FetchError):
    """Payload was delivered but its shape cannot be normalized."""

    kind = "schema"


class SourceReportedFailure(FetchError):
    """Payload itself reports failure (e.g. a status flag inside a 200 body)."""

    kind = "source_reported"


class TelemetryError(CoreError):
    """Raised for telemetry/logging persistence issues."""
