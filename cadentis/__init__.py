"""Cadentis: quantitative scansion and rhyme analysis for Hungarian verse."""

from __future__ import annotations

from typing import Any, List

from .core import (
    DEFAULT_CATALOG,
    LineAnalysis,
    MatchResult,
    MeterDirection,
    MeterPattern,
    ProsodyAnalyzer,
    RhymeSchemeResult,
    RhymeType,
    Syllable,
    SyllableWeight,
    VerseCategory,
    VerseFormCatalogEntry,
    classify_rhyme_type,
)
from .core import analyze_rhyme_scheme as _analyze_rhyme_scheme

__version__ = "0.1.0"

_default_analyzer = ProsodyAnalyzer()


def analyze_line(text: Any) -> LineAnalysis:
    """Scan one line with the shared default analyzer."""

    return _default_analyzer.analyze_line(text)


def analyze_lines(text_or_lines: Any) -> List[LineAnalysis]:
    """Scan a poem given as one string or a sequence of lines."""

    return _default_analyzer.analyze_lines(text_or_lines)


def analyze_rhyme_scheme(lines: Any) -> RhymeSchemeResult:
    return _analyze_rhyme_scheme(lines)


__all__ = [
    "DEFAULT_CATALOG",
    "LineAnalysis",
    "MatchResult",
    "MeterDirection",
    "MeterPattern",
    "ProsodyAnalyzer",
    "RhymeSchemeResult",
    "RhymeType",
    "Syllable",
    "SyllableWeight",
    "VerseCategory",
    "VerseFormCatalogEntry",
    "__version__",
    "analyze_line",
    "analyze_lines",
    "analyze_rhyme_scheme",
    "classify_rhyme_type",
]
