#!/usr/bin/env python3
"""
Performance/event log.

Append-only record of timestamped events emitted while probing providers,
selecting one, installing the compatibility shim and serving facade calls.
Offsets are milliseconds since the log was created. The log is unbounded
within a run: runs are short-lived sessions, not long-running services.

Appends take a lock so that parallel probing keeps each entry atomic.
"""
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class EventKind(Enum):
    INIT_START = "init-start"
    PROBE_START = "probe-start"
    PROBE_RESULT = "probe-result"
    SELECTED = "selected"
    DEGRADED = "degraded"
    SHIM_INSTALLED = "shim-installed"
    SHIM_SKIPPED = "shim-skipped"
    SHIM_USED = "shim-used"
    FACADE_ERROR = "facade-error"
    INIT_COMPLETE = "init-complete"
    REPROBE = "reprobe"


@dataclass(frozen=True)
class PerformanceEvent:
    offset_ms: float
    kind: EventKind
    payload: dict = field(default_factory=dict)

    def as_dict(self) -> dict:
        return {
            "offset_ms": round(self.offset_ms, 3),
            "event": self.kind.value,
            "payload": dict(self.payload),
        }


class EventLog:
    """
    Process-wide append-only event log.

    Args:
        enabled: When False, ``record`` is a no-op (monitoring disabled)
        logger: Optional JsonLogger; events are echoed at debug level
    """

    def __init__(self, enabled: bool = True, logger=None):
        self.enabled = enabled
        self.logger = logger
        self._start = time.monotonic()
        self._events: list[PerformanceEvent] = []
        self._lock = threading.Lock()

    def elapsed_ms(self) -> float:
        return (time.monotonic() - self._start) * 1000.0

    def record(self, kind: EventKind, **payload: object) -> Optional[PerformanceEvent]:
        if not self.enabled:
            return None

        with self._lock:
            event = PerformanceEvent(self.elapsed_ms(), kind, payload)
            self._events.append(event)

        if self.logger is not None:
            self.logger.debug(f"event: {kind.value}", offset_ms=round(event.offset_ms, 3), **payload)
        return event

    @property
    def events(self) -> tuple[PerformanceEvent, ...]:
        """Snapshot of recorded events, oldest first."""
        with self._lock:
            return tuple(self._events)

    def of_kind(self, kind: EventKind) -> list[PerformanceEvent]:
        return [e for e in self.events if e.kind is kind]

    def snapshot(self) -> list[dict]:
        return [e.as_dict() for e in self.events]

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)
