"""Structured logging, Prometheus metrics and OpenTelemetry tracing helpers.

Every analysis entry point goes through these wrappers so log lines, metric
names and span attributes stay consistent across the core and the service
layer.
"""

from __future__ import annotations

import json
import logging
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, Optional

from opentelemetry import trace as otel_trace
from prometheus_client import REGISTRY, Counter, Histogram

TRACER_NAME = "cadentis"


class StructuredLoggerAdapter(logging.LoggerAdapter):
    """Adapter that appends bound and per-call context to messages as JSON."""

    def bind(self, **context: Any) -> "StructuredLoggerAdapter":
        merged = dict(self.extra)
        merged.update(context)
        return StructuredLoggerAdapter(self.logger, merged)

    def process(self, msg: str, kwargs: Dict[str, Any]):
        event_context: Dict[str, Any] = dict(self.extra)
        provided = kwargs.pop("context", None)
        if isinstance(provided, dict):
            event_context.update(provided)
        if event_context:
            try:
                payload = json.dumps(event_context, sort_keys=True, default=str)
            except TypeError:
                payload = json.dumps({str(k): str(v) for k, v in event_context.items()})
            msg = f"{msg} | {payload}"
        return msg, kwargs


def get_logger(name: str, **context: Any) -> StructuredLoggerAdapter:
    """Return a project logger with optional bound context."""

    return StructuredLoggerAdapter(logging.getLogger(name), context)


class CounterHandle:
    """Thin wrapper giving Prometheus counters a uniform ``labels``/``inc`` API."""

    def __init__(self, impl: Any) -> None:
        self._impl = impl

    def labels(self, **labels: Any) -> "CounterHandle":
        return CounterHandle(self._impl.labels(**labels))

    def inc(self, amount: float = 1.0) -> None:
        self._impl.inc(amount)


class HistogramHandle:
    """Wrapper around Prometheus histograms with a ``time()`` context manager."""

    def __init__(self, impl: Any) -> None:
        self._impl = impl

    def labels(self, **labels: Any) -> "HistogramHandle":
        return HistogramHandle(self._impl.labels(**labels))

    def observe(self, value: float) -> None:
        self._impl.observe(value)

    @contextmanager
    def time(self) -> Iterator[None]:
        start = time.perf_counter()
        try:
            yield
        finally:
            self.observe(time.perf_counter() - start)


def _registered_collector(name: str) -> Any:
    # prometheus_client strips the ``_total`` suffix from counter names.
    collectors = REGISTRY._names_to_collectors  # type: ignore[attr-defined]
    collector = collectors.get(name)
    if collector is None and name.endswith("_total"):
        collector = collectors.get(name[: -len("_total")])
    return collector


def create_counter(
    name: str,
    documentation: str,
    label_names: Optional[Iterable[str]] = None,
) -> CounterHandle:
    """Create a counter, reusing the registered one on duplicate registration."""

    try:
        impl = Counter(name, documentation, labelnames=tuple(label_names or ()))
    except ValueError:
        impl = _registered_collector(name)
        if impl is None:
            raise
    return CounterHandle(impl)


def create_histogram(
    name: str,
    documentation: str,
    label_names: Optional[Iterable[str]] = None,
) -> HistogramHandle:
    """Create a histogram, reusing the registered one on duplicate registration."""

    try:
        impl = Histogram(name, documentation, labelnames=tuple(label_names or ()))
    except ValueError:
        impl = _registered_collector(name)
        if impl is None:
            raise
    return HistogramHandle(impl)


@contextmanager
def start_span(name: str, attributes: Optional[Dict[str, Any]] = None):
    """Start an OpenTelemetry span on the project tracer."""

    tracer = otel_trace.get_tracer(TRACER_NAME)
    with tracer.start_as_current_span(name) as span:
        if attributes:
            add_span_attributes(span, attributes)
        yield span


def add_span_attributes(span: Any, attributes: Dict[str, Any]) -> None:
    """Attach ``attributes`` to ``span``, skipping non-string keys."""

    if span is None:
        return
    for key, value in attributes.items():
        if not isinstance(key, str) or value is None:
            continue
        span.set_attribute(key, value)


def record_exception(span: Any, error: BaseException) -> None:
    """Record ``error`` on ``span`` and flag the span as failed."""

    if span is None:
        return
    span.record_exception(error)
    span.set_attribute("error", True)


__all__ = [
    "CounterHandle",
    "HistogramHandle",
    "StructuredLoggerAdapter",
    "TRACER_NAME",
    "add_span_attributes",
    "create_counter",
    "create_histogram",
    "get_logger",
    "record_exception",
    "start_span",
]
