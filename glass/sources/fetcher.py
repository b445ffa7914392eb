"""Generic per-source fetch lifecycle.

``SourceFetcher`` owns one external source's asynchronous round-trip and its
:class:`FetchState`. It is parametrised by the fetch coroutine (a source
client method returning canonical records) and a human-readable error
message, and is instantiated once per source instead of duplicating the
loading/refreshing/error bookkeeping on every screen.

Lifecycle rules:

* ``load()`` and ``refresh()`` are not reentrant. A call arriving while a
  fetch is in flight issues no new request; it awaits the in-flight fetch and
  receives the same terminal state.
* ``loading`` / ``refreshing`` are cleared when a fetch settles, whatever the
  outcome, including cancellation.
* A failure sets ``error`` and keeps the previous ``data`` (stale but valid).
* After :meth:`SourceFetcher.dispose` a late result is dropped; there is no
  cancellation of the request itself.
"""
from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Awaitable, Callable, Generic, List, Optional, Sequence, TypeVar

from glass.core.enums import FetchMode
from glass.core.errors import FetchError, TelemetryError
from glass.telemetry.events import FETCH_FAILED, FETCH_SUCCEEDED, TelemetryEvent
from glass.telemetry.storage import EventSink

T = TypeVar("T")

FetchCallable = Callable[[], Awaitable[Sequence[T]]]


@dataclass(frozen=True, slots=True)
class FetchState(Generic[T]):
    """Immutable snapshot of one source's state as rendered by a screen."""

    data: tuple[T, ...] = ()
    loading: bool = False
    refreshing: bool = False
    error: str | None = None
    has_loaded: bool = False
    updated_at: datetime | None = None

    @property
    def is_busy(self) -> bool:
        return self.loading or self.refreshing

    @property
    def can_retry(self) -> bool:
        return self.error is not None

    @property
    def is_empty(self) -> bool:
        return not self.data


StateListener = Callable[[FetchState[T]], None]


class SourceFetcher(Generic[T]):
    """Owns the async fetch lifecycle and :class:`FetchState` of one source."""

    def __init__(
        self,
        name: str,
        fetch: FetchCallable[T],
        *,
        error_message: str,
        events: EventSink | None = None,
        logger: logging.Logger | None = None,
        now_fn: Callable[[], datetime] | None = None,
    ) -> None:
        self._name = name
        self._fetch = fetch
        self._error_message = error_message
        self._events = events
        self._logger = logger or logging.getLogger(f"glass.sources.{name}")
        self._now = now_fn or (lambda: datetime.now(tz=timezone.utc))
        self._state: FetchState[T] = FetchState()
        self._inflight: Optional[asyncio.Future[FetchState[T]]] = None
        self._listeners: List[StateListener[T]] = []
        self._disposed = False

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def name(self) -> str:
        return self._name

    @property
    def state(self) -> FetchState[T]:
        return self._state

    @property
    def in_flight(self) -> bool:
        return self._inflight is not None and not self._inflight.done()

    @property
    def can_retry(self) -> bool:
        return self._state.can_retry

    @property
    def disposed(self) -> bool:
        return self._disposed

    async def load(self) -> FetchState[T]:
        """Initial/explicit load; sets ``loading`` while in flight."""

        return await self._trigger(FetchMode.LOAD)

    async def refresh(self) -> FetchState[T]:
        """Pull-to-refresh; sets ``refreshing`` and keeps current data visible."""

        return await self._trigger(FetchMode.REFRESH)

    async def retry(self) -> FetchState[T]:
        """Re-run :meth:`load` from the error state; no-op when there is no error."""

        if not self._state.can_retry:
            self._logger.debug("Retry ignored without error", extra={"source": self._name})
            return self._state
        return await self.load()

    def subscribe(self, listener: StateListener[T]) -> Callable[[], None]:
        """Register ``listener`` for every state change; returns an unsubscribe callable."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def dispose(self) -> None:
        """Detach the owner: late results are ignored and listeners dropped."""

        self._disposed = True
        self._listeners.clear()

    # ------------------------------------------------------------------
    # Lifecycle internals
    # ------------------------------------------------------------------
    async def _trigger(self, mode: FetchMode) -> FetchState[T]:
        if self._disposed:
            self._logger.debug("Fetch ignored for disposed source", extra={"source": self._name})
            return self._state
        if self._inflight is not None and not self._inflight.done():
            self._logger.debug(
                "Fetch already in flight; joining",
                extra={"source": self._name, "mode": mode.value},
            )
            return await asyncio.shield(self._inflight)
        if mode is FetchMode.LOAD:
            self._publish(replace(self._state, loading=True, refreshing=False))
        else:
            self._publish(replace(self._state, loading=False, refreshing=True))
        self._inflight = asyncio.ensure_future(self._execute(mode))
        return await asyncio.shield(self._inflight)

    async def _execute(self, mode: FetchMode) -> FetchState[T]:
        start = time.perf_counter()
        records: tuple[T, ...] | None = None
        failure: BaseException | None = None
        try:
            records = tuple(await self._fetch())
        except FetchError as exc:
            failure = exc
            self._logger.warning(
                "Source fetch failed",
                extra={
                    "source": self._name,
                    "mode": mode.value,
                    "kind": exc.kind,
                    "status_code": getattr(exc, "status_code", None),
                    "error": str(exc),
                },
            )
        except Exception as exc:
            failure = exc
            self._logger.exception("Unexpected error while fetching source", extra={"source": self._name})
        finally:
            if self._disposed:
                self._logger.debug("Discarding result for disposed source", extra={"source": self._name})
            else:
                self._publish(self._settle(records, failure))
        elapsed_ms = (time.perf_counter() - start) * 1_000.0
        self._record_outcome(mode, records, failure, elapsed_ms)
        return self._state

    def _settle(self, records: tuple[T, ...] | None, failure: BaseException | None) -> FetchState[T]:
        settled = replace(self._state, loading=False, refreshing=False)
        if records is not None:
            return replace(settled, data=records, error=None, has_loaded=True, updated_at=self._now())
        if failure is not None:
            return replace(settled, error=self._error_message)
        return settled

    def _publish(self, state: FetchState[T]) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                self._logger.exception("State listener failed", extra={"source": self._name})

    def _record_outcome(
        self,
        mode: FetchMode,
        records: tuple[T, ...] | None,
        failure: BaseException | None,
        elapsed_ms: float,
    ) -> None:
        if self._events is None:
            return
        if records is not None:
            event = TelemetryEvent(
                event_type=FETCH_SUCCEEDED,
                payload={"n_records": len(records), "elapsed_ms": round(elapsed_ms, 2)},
                context={"source": self._name, "mode": mode.value},
            )
        elif failure is not None:
            event = TelemetryEvent(
                event_type=FETCH_FAILED,
                level="WARNING",
                payload={
                    "kind": getattr(failure, "kind", "unexpected"),
                    "status_code": getattr(failure, "status_code", None),
                    "error": str(failure),
                    "elapsed_ms": round(elapsed_ms, 2),
                },
                context={"source": self._name, "mode": mode.value},
            )
        else:
            return
        try:
            self._events.append_event(event)
        except TelemetryError as exc:
            self._logger.warning("Failed to record fetch telemetry: %s", exc)


__all__ = ["FetchCallable", "FetchState", "SourceFetcher", "StateListener"]
