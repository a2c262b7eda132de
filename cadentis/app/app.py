"""Application wiring for the Cadentis verse analyser."""

from __future__ import annotations

import os
from typing import Any, Dict, List, Mapping, Optional, Tuple

from cadentis.core import (
    DEFAULT_CACHE_SIZE,
    LineAnalysis,
    ProsodyAnalyzer,
    RhymeSchemeResult,
    RhymeType,
)
from cadentis.utils.observability import get_logger
from cadentis.utils.telemetry import StructuredTelemetry, TelemetryLogger

from cadentis.app.services.analysis_service import VerseAnalysisService
from cadentis.app.services.result_formatter import VerseResultFormatter

MAX_WORKERS_ENV = "CADENTIS_MAX_WORKERS"
MAX_CONCURRENT_ENV = "CADENTIS_MAX_CONCURRENT"
REQUEST_TIMEOUT_ENV = "CADENTIS_REQUEST_TIMEOUT"
CACHE_SIZE_ENV = "CADENTIS_CACHE_SIZE"


def _env_int(environ: Mapping[str, str], key: str) -> Optional[int]:
    raw = environ.get(key, "")
    if not str(raw).strip():
        return None
    try:
        number = int(str(raw).strip())
    except ValueError:
        return None
    return number if number > 0 else None


def _env_float(environ: Mapping[str, str], key: str) -> Optional[float]:
    raw = environ.get(key, "")
    if not str(raw).strip():
        return None
    try:
        number = float(str(raw).strip())
    except ValueError:
        return None
    return number if number >= 0 else None


class CadentisApp:
    """High-level facade bundling the analyzer, service and formatter.

    Keyword arguments take precedence over the ``CADENTIS_*`` environment
    variables; unparsable or non-positive environment values are ignored.
    """

    def __init__(
        self,
        *,
        analyzer: Optional[ProsodyAnalyzer] = None,
        service: Optional[VerseAnalysisService] = None,
        formatter: Optional[VerseResultFormatter] = None,
        max_workers: Optional[int] = None,
        max_concurrent_requests: Optional[int] = None,
        request_timeout: Optional[float] = None,
        cache_size: Optional[int] = None,
        log_telemetry: bool = False,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        env = os.environ if environ is None else environ
        self._logger = get_logger(__name__).bind(component="app_facade")

        if cache_size is None:
            cache_size = _env_int(env, CACHE_SIZE_ENV)
        if max_workers is None:
            max_workers = _env_int(env, MAX_WORKERS_ENV)
        if max_concurrent_requests is None:
            max_concurrent_requests = _env_int(env, MAX_CONCURRENT_ENV)
        if request_timeout is None:
            request_timeout = _env_float(env, REQUEST_TIMEOUT_ENV)

        self.config: Dict[str, Any] = {
            "cache_size": DEFAULT_CACHE_SIZE if cache_size is None else cache_size,
            "max_workers": max_workers,
            "max_concurrent_requests": max_concurrent_requests,
            "request_timeout": request_timeout,
        }
        self._logger.info("Initialising application facade", context=self.config)

        if service is None:
            telemetry = StructuredTelemetry()
            if log_telemetry:
                telemetry.add_listener(TelemetryLogger())
            service = VerseAnalysisService(
                analyzer=analyzer or ProsodyAnalyzer(cache_size=self.config["cache_size"]),
                max_workers=max_workers,
                max_concurrent_requests=max_concurrent_requests,
                request_timeout=request_timeout,
                telemetry=telemetry,
            )
        self.service = service
        self.analyzer = service.analyzer
        self.formatter = formatter or VerseResultFormatter()

    # Public API ------------------------------------------------------------
    def analyze_line(self, text: Any) -> LineAnalysis:
        return self.service.analyze_line(text)

    def analyze_lines(self, text_or_lines: Any) -> List[LineAnalysis]:
        return self.service.analyze_lines(text_or_lines)

    def analyze_rhyme_scheme(self, text_or_lines: Any) -> RhymeSchemeResult:
        return self.service.analyze_rhyme_scheme(text_or_lines)

    def classify_rhyme_type(self, first: Any, second: Any) -> RhymeType:
        return self.service.classify_rhyme_type(first, second)

    def analyze_poem(self, text: Any) -> Tuple[List[LineAnalysis], RhymeSchemeResult]:
        """Return per-line analyses together with the poem's rhyme scheme."""

        return self.analyze_lines(text), self.analyze_rhyme_scheme(text)

    def render_report(self, text: Any) -> str:
        analyses, scheme = self.analyze_poem(text)
        return self.formatter.format_analysis(analyses, scheme)

    def render_payload(self, text: Any) -> Dict[str, Any]:
        analyses, scheme = self.analyze_poem(text)
        return self.formatter.as_dict(analyses, scheme)

    def get_latest_telemetry(self) -> Dict[str, Any]:
        return self.service.get_latest_telemetry()


__all__ = [
    "CACHE_SIZE_ENV",
    "CadentisApp",
    "MAX_CONCURRENT_ENV",
    "MAX_WORKERS_ENV",
    "REQUEST_TIMEOUT_ENV",
]
