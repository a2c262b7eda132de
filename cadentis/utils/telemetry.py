"""Per-request telemetry for verse analysis workflows.

A trace collects phase timings, counters and metadata for one request. The
service keeps the latest snapshot so callers can inspect how the last
analysis was spent; listeners receive every event as it happens.
"""

from __future__ import annotations

import logging
import threading
import time
from contextlib import contextmanager
from copy import deepcopy
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from .observability import get_logger

TelemetryListener = Callable[[str, Dict[str, Any]], None]


@dataclass
class TimingStats:
    """Aggregated durations recorded under one timer name."""

    count: int = 0
    total: float = 0.0
    min: float = 0.0
    max: float = 0.0

    def add(self, duration: float) -> None:
        self.min = duration if self.count == 0 else min(self.min, duration)
        self.max = max(self.max, duration)
        self.count += 1
        self.total += duration

    @property
    def avg(self) -> float:
        return self.total / self.count if self.count else 0.0

    def as_dict(self) -> Dict[str, float]:
        return {
            "count": self.count,
            "total": self.total,
            "min": self.min,
            "max": self.max,
            "avg": self.avg,
        }


class StructuredTelemetry:
    """Thread-safe collector of timings, counters and metadata for one trace."""

    def __init__(
        self,
        time_fn: Optional[Callable[[], float]] = None,
        *,
        max_events: int = 256,
        listeners: Optional[Iterable[TelemetryListener]] = None,
    ) -> None:
        self._time_fn = time_fn or time.perf_counter
        self._max_events = max(1, int(max_events))
        self._lock = threading.RLock()
        self._trace_id = 0
        self._latest_snapshot: Dict[str, Any] = {}
        self._listeners: List[TelemetryListener] = list(listeners or [])
        self._clear()

    def _clear(self) -> None:
        self._timings: Dict[str, TimingStats] = {}
        self._counters: Dict[str, float] = {}
        self._events: List[Dict[str, Any]] = []
        self._metadata: Dict[str, Any] = {}
        self._trace_name: Optional[str] = None

    def _snapshot_locked(self) -> Dict[str, Any]:
        return {
            "trace_id": self._trace_id,
            "name": self._trace_name,
            "timings": {key: stats.as_dict() for key, stats in self._timings.items()},
            "counters": dict(self._counters),
            "events": [dict(event) for event in self._events],
            "metadata": dict(self._metadata),
        }

    def _publish_locked(self) -> None:
        self._latest_snapshot = deepcopy(self._snapshot_locked())

    def _emit(self, event_type: str, payload: Dict[str, Any]) -> None:
        with self._lock:
            listeners: Tuple[TelemetryListener, ...] = tuple(self._listeners)
        for listener in listeners:
            try:
                listener(event_type, dict(payload))
            except Exception:
                # A broken listener must not fail the analysis it observes.
                continue

    def now(self) -> float:
        return float(self._time_fn())

    def start_trace(self, name: str) -> int:
        """Discard the previous trace and start recording ``name``."""

        with self._lock:
            self._trace_id += 1
            self._clear()
            self._trace_name = name
            self._metadata["trace_name"] = name
            self._metadata["start_time"] = self.now()
            self._publish_locked()
            trace_id = self._trace_id

        self._emit("trace_started", {"trace_id": trace_id, "name": name})
        return trace_id

    def record_timing(
        self,
        name: str,
        duration: float,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        duration = max(0.0, float(duration))
        details = dict(metadata) if metadata else {}
        with self._lock:
            self._timings.setdefault(name, TimingStats()).add(duration)
            event: Dict[str, Any] = {"name": name, "duration": duration}
            if details:
                event["metadata"] = dict(details)
            self._events.append(event)
            del self._events[: -self._max_events]
            self._publish_locked()

        self._emit("timing", {"name": name, "duration": duration, "metadata": details})

    @contextmanager
    def timer(
        self,
        name: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Iterator[Dict[str, Any]]:
        """Time the enclosed block; the yielded dict is stored as event metadata."""

        details: Dict[str, Any] = dict(metadata) if metadata else {}
        start = self.now()
        self._emit("timer_started", {"name": name, "metadata": dict(details)})
        try:
            yield details
        finally:
            self.record_timing(name, self.now() - start, details)

    def increment(self, name: str, amount: float = 1.0) -> None:
        delta = float(amount)
        with self._lock:
            value = self._counters.get(name, 0.0) + delta
            self._counters[name] = value
            self._publish_locked()

        self._emit("counter", {"name": name, "delta": delta, "value": value})

    def annotate(self, key: str, value: Any) -> None:
        with self._lock:
            self._metadata[key] = value
            self._publish_locked()

        self._emit("metadata", {"key": key, "value": value})

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            current = self._snapshot_locked()
            self._latest_snapshot = deepcopy(current)
            return current

    def latest_snapshot(self) -> Dict[str, Any]:
        """Return a copy of the last published snapshot, or ``{}`` before any trace."""

        with self._lock:
            return deepcopy(self._latest_snapshot) if self._latest_snapshot else {}

    def add_listener(self, listener: TelemetryListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: TelemetryListener) -> None:
        with self._lock:
            self._listeners = [entry for entry in self._listeners if entry is not listener]


class TelemetryLogger:
    """Listener that forwards telemetry events to the structured logger."""

    def __init__(
        self,
        *,
        logger: Optional[logging.LoggerAdapter] = None,
        level: int = logging.INFO,
        level_map: Optional[Dict[str, int]] = None,
    ) -> None:
        self._logger = logger or get_logger(__name__).bind(component="telemetry")
        self._default_level = level
        self._level_map = dict(level_map or {})

    def __call__(self, event_type: str, payload: Dict[str, Any]) -> None:
        level = self._level_map.get(event_type, self._default_level)
        if not self._logger.isEnabledFor(level):
            return

        context: Dict[str, Any] = {"telemetry.event": event_type}
        context.update({str(key): value for key, value in payload.items()})
        label = payload.get("name") or payload.get("key") or payload.get("trace_id") or "event"
        self._logger.log(level, f"Telemetry {event_type}: {label}", context=context)


__all__ = ["StructuredTelemetry", "TelemetryListener", "TelemetryLogger", "TimingStats"]
