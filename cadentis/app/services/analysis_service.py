"""Analysis service orchestrating scansion, rhyme detection and instrumentation."""

from __future__ import annotations

import copy
import threading
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from typing import Any, Callable, Dict, Generator, Iterable, List, Optional, TypeVar, Union

from cadentis.core import (
    LineAnalysis,
    ProsodyAnalyzer,
    RhymeSchemeResult,
    RhymeType,
)

from ...utils.observability import (
    add_span_attributes,
    create_counter,
    create_histogram,
    get_logger,
    record_exception,
    start_span,
)
from ...utils.telemetry import StructuredTelemetry

T = TypeVar("T")

LinesInput = Union[str, Iterable[Any], None]


def _coerce_text(value: Any) -> str:
    return "" if value is None else str(value)


def _coerce_lines(text_or_lines: LinesInput) -> List[str]:
    if text_or_lines is None:
        return []
    if isinstance(text_or_lines, str):
        return text_or_lines.splitlines()
    return [_coerce_text(line) for line in text_or_lines]


def _positive_int(value: Any) -> Optional[int]:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


def _non_negative_float(value: Any) -> Optional[float]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if number >= 0 else None


class VerseAnalysisService:
    """Runs analysis requests with metrics, tracing, telemetry and backpressure."""

    def __init__(
        self,
        *,
        analyzer: Optional[ProsodyAnalyzer] = None,
        max_workers: Optional[int] = None,
        max_concurrent_requests: Optional[int] = None,
        request_timeout: Optional[float] = None,
        telemetry: Optional[StructuredTelemetry] = None,
    ) -> None:
        self.analyzer = analyzer or ProsodyAnalyzer()
        self.telemetry = telemetry or StructuredTelemetry()
        self._latest_trace: Dict[str, Any] = {}
        self._max_workers = _positive_int(max_workers) or 1
        self._request_timeout = (
            _non_negative_float(request_timeout) if request_timeout is not None else None
        )

        self._request_semaphore: Optional[threading.BoundedSemaphore] = None
        max_concurrent = _positive_int(max_concurrent_requests)
        if max_concurrent is not None:
            self._request_semaphore = threading.BoundedSemaphore(max_concurrent)

        self._logger = get_logger(__name__).bind(component="verse_analysis_service")

        self._metric_request_total = create_counter(
            "verse_analysis_requests_total",
            "Total verse analysis requests received.",
            label_names=("operation",),
        )
        self._metric_request_failures = create_counter(
            "verse_analysis_failures_total",
            "Total verse analysis requests that raised an exception.",
            label_names=("operation",),
        )
        self._metric_request_duration = create_histogram(
            "verse_analysis_request_seconds",
            "Latency of verse analysis requests.",
            label_names=("operation",),
        )

        self._logger.info(
            "Verse analysis service initialised",
            context={
                "max_workers": self._max_workers,
                "max_concurrent_requests": max_concurrent,
                "request_timeout": self._request_timeout,
            },
        )

    @property
    def max_workers(self) -> int:
        return self._max_workers

    def get_latest_telemetry(self) -> Dict[str, Any]:
        """Return the telemetry snapshot of the most recent request."""

        if not self._latest_trace:
            return self.telemetry.latest_snapshot()
        return copy.deepcopy(self._latest_trace)

    def clear_cached_results(self) -> None:
        self.analyzer.clear_cached_results()

    @contextmanager
    def _request_slot(self) -> Generator[None, None, None]:
        """Bound concurrent requests when a semaphore has been configured."""

        telemetry = self.telemetry
        semaphore = self._request_semaphore
        if semaphore is None:
            telemetry.increment("analysis.gate.bypass")
            yield
            return

        timeout = self._request_timeout
        with telemetry.timer("analysis.gate.wait"):
            if timeout is None:
                acquired = semaphore.acquire()
            else:
                acquired = semaphore.acquire(timeout=timeout)

        if not acquired:
            telemetry.increment("analysis.gate.timeout")
            raise TimeoutError("Analysis capacity exhausted; please retry later")

        telemetry.increment("analysis.gate.acquired")
        try:
            yield
        finally:
            semaphore.release()
            telemetry.increment("analysis.gate.released")

    def _run(
        self,
        operation: str,
        request_context: Dict[str, Any],
        work: Callable[[], T],
        summarize: Callable[[T], Dict[str, Any]],
    ) -> T:
        telemetry = self.telemetry
        telemetry.start_trace(operation)
        telemetry.increment("analysis.invoked")
        for key, value in request_context.items():
            telemetry.annotate(f"input.{key}", value)

        self._metric_request_total.labels(operation=operation).inc()
        self._logger.info(
            "Analysis request received",
            context={"operation": operation, **request_context},
        )

        span_attributes = {"analysis.operation": operation}
        with start_span(f"analysis.{operation}", span_attributes) as request_span:
            try:
                with self._metric_request_duration.labels(operation=operation).time():
                    with self._request_slot():
                        with telemetry.timer(f"analysis.{operation}"):
                            result = work()
            except Exception as exc:
                failure_context = {"operation": operation, **request_context}
                failure_context["error"] = str(exc)
                self._metric_request_failures.labels(operation=operation).inc()
                self._logger.error("Analysis request failed", context=failure_context)
                record_exception(request_span, exc)
                telemetry.increment("analysis.failed")
                self._latest_trace = telemetry.snapshot()
                raise

            summary = summarize(result)
            self._logger.info(
                "Analysis request completed",
                context={"operation": operation, **summary},
            )
            for key, value in summary.items():
                telemetry.annotate(f"result.{key}", value)
            telemetry.increment("analysis.completed")
            self._latest_trace = telemetry.snapshot()

            add_span_attributes(
                request_span,
                {"analysis.success": True, **{f"result.{k}": v for k, v in summary.items()}},
            )
            return result

    def _analyze_each(self, lines: List[str]) -> List[LineAnalysis]:
        if self._max_workers <= 1 or len(lines) <= 1:
            return [self.analyzer.analyze_line(line) for line in lines]
        with self.telemetry.timer("analysis.worker_pool", {"lines": len(lines)}):
            with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
                return list(executor.map(self.analyzer.analyze_line, lines))

    def analyze_line(self, text: Any) -> LineAnalysis:
        """Scan and classify a single line of verse."""

        line = _coerce_text(text)
        return self._run(
            "analyze_line",
            {"line": line},
            lambda: self.analyzer.analyze_line(line),
            lambda analysis: {
                "pattern": analysis.pattern,
                "verse_type": analysis.verse_type,
            },
        )

    def analyze_lines(self, text_or_lines: LinesInput) -> List[LineAnalysis]:
        """Scan every non-blank line, then mark distichs and rhyme labels."""

        raw_lines = _coerce_lines(text_or_lines)

        def work() -> List[LineAnalysis]:
            content = [line for line in raw_lines if line.strip()]
            analyses = self._analyze_each(content)
            with self.telemetry.timer("analysis.post_pass"):
                return self.analyzer.finalize_lines(raw_lines, analyses)

        return self._run(
            "analyze_lines",
            {"line_count": len(raw_lines), "max_workers": self._max_workers},
            work,
            lambda analyses: {
                "lines": len(analyses),
                "distichon_lines": sum(1 for item in analyses if item.is_distichon_part),
            },
        )

    def analyze_rhyme_scheme(self, text_or_lines: LinesInput) -> RhymeSchemeResult:
        raw_lines = _coerce_lines(text_or_lines)
        return self._run(
            "analyze_rhyme_scheme",
            {"line_count": len(raw_lines)},
            lambda: self.analyzer.analyze_rhyme_scheme(raw_lines),
            lambda scheme: {
                "scheme_name": scheme.scheme_name,
                "pattern": "".join(scheme.pattern),
            },
        )

    def classify_rhyme_type(self, first: Any, second: Any) -> RhymeType:
        left = _coerce_text(first)
        right = _coerce_text(second)
        return self._run(
            "classify_rhyme_type",
            {"first": left, "second": right},
            lambda: self.analyzer.classify_rhyme_type(left, right),
            lambda rhyme: {"rhyme_type": rhyme.label},
        )


__all__ = ["VerseAnalysisService"]
