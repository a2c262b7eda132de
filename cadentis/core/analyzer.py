"""Prosody analysis facade composing scansion, form matching and rhyme."""

from __future__ import annotations

import threading
from collections import OrderedDict
from dataclasses import replace
from typing import Iterable, List, Optional, Sequence, Union

from cadentis.utils.observability import create_counter, get_logger

from .distichon import apply_distichon
from .meter import build_meter_pattern
from .models import LineAnalysis, RhymeSchemeResult, RhymeType, VerseFormCatalogEntry
from .rhyme_scheme import analyze_rhyme_scheme
from .rhyme_types import classify_rhyme_type
from .verse_forms import DEFAULT_CATALOG, match_verse_form

DEFAULT_CACHE_SIZE = 512

CACHE_EVENTS = create_counter(
    "verse_analysis_cache_events_total",
    "Per-line analysis cache lookups grouped by result.",
    label_names=("result",),
)


def _as_lines(text_or_lines: Union[str, Iterable[Optional[str]], None]) -> List[str]:
    if text_or_lines is None:
        return []
    if isinstance(text_or_lines, str):
        return text_or_lines.splitlines()
    return ["" if line is None else str(line) for line in text_or_lines]


class ProsodyAnalyzer:
    """Analyse lines of verse with a bounded cache of per-line results.

    Every result is immutable, so cached analyses are shared between callers
    without copying.
    """

    def __init__(
        self,
        catalog: Sequence[VerseFormCatalogEntry] = DEFAULT_CATALOG,
        *,
        strict_pentameter: bool = True,
        cache_size: int = DEFAULT_CACHE_SIZE,
    ) -> None:
        self.catalog = tuple(catalog)
        self.strict_pentameter = strict_pentameter
        self._max_cache_entries = int(cache_size)
        self._cache_lock = threading.RLock()
        self._line_cache: OrderedDict[str, LineAnalysis] = OrderedDict()
        self._logger = get_logger(__name__).bind(component="prosody_analyzer")
        self._logger.info(
            "Prosody analyzer initialised",
            context={
                "catalog_size": len(self.catalog),
                "strict_pentameter": strict_pentameter,
                "cache_size": self._max_cache_entries,
            },
        )

    def _trim_cache(self) -> None:
        if self._max_cache_entries <= 0:
            self._line_cache.clear()
            return
        while len(self._line_cache) > self._max_cache_entries:
            self._line_cache.popitem(last=False)

    def clear_cached_results(self) -> None:
        self._logger.info("Clearing prosody analyzer cache")
        with self._cache_lock:
            self._line_cache.clear()

    def analyze_line(self, text: Optional[str]) -> LineAnalysis:
        """Scan one line and match it against the verse-form catalog."""

        raw = "" if text is None else str(text)
        with self._cache_lock:
            cached = self._line_cache.get(raw)
            if cached is not None:
                self._line_cache.move_to_end(raw)
                CACHE_EVENTS.labels(result="hit").inc()
                return cached

        CACHE_EVENTS.labels(result="miss").inc()
        line = build_meter_pattern(raw)
        match = match_verse_form(
            line.pattern,
            self.catalog,
            strict_pentameter=self.strict_pentameter,
        )
        analysis = LineAnalysis(line=line, match=match, verse_type=match.display_name)

        with self._cache_lock:
            self._line_cache[raw] = analysis
            self._trim_cache()
        return analysis

    def finalize_lines(
        self,
        raw_lines: Sequence[str],
        analyses: Sequence[LineAnalysis],
    ) -> List[LineAnalysis]:
        """Apply the couplet post-pass and attach rhyme labels.

        ``raw_lines`` may contain blank stanza separators; ``analyses`` holds
        one entry per non-blank line in the same order.
        """

        paired = apply_distichon(analyses, strict_pentameter=self.strict_pentameter)
        scheme = analyze_rhyme_scheme(raw_lines)
        if len(scheme.pattern) != len(paired):
            return paired
        return [
            replace(analysis, rhyme_label=label)
            for analysis, label in zip(paired, scheme.pattern)
        ]

    def analyze_lines(
        self, text_or_lines: Union[str, Iterable[Optional[str]], None]
    ) -> List[LineAnalysis]:
        """Analyse every non-blank line, then detect couplets and rhymes."""

        raw_lines = _as_lines(text_or_lines)
        analyses = [self.analyze_line(line) for line in raw_lines if line.strip()]
        return self.finalize_lines(raw_lines, analyses)

    def analyze_rhyme_scheme(
        self, lines: Union[str, Iterable[Optional[str]], None]
    ) -> RhymeSchemeResult:
        return analyze_rhyme_scheme(lines)

    def classify_rhyme_type(self, first: Optional[str], second: Optional[str]) -> RhymeType:
        return classify_rhyme_type(first, second)


__all__ = ["CACHE_EVENTS", "DEFAULT_CACHE_SIZE", "ProsodyAnalyzer"]
