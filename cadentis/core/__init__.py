"""Scansion, verse-form and rhyme analysis for Hungarian verse."""

from .analyzer import DEFAULT_CACHE_SIZE, ProsodyAnalyzer
from .distichon import DISTICHON_HEXAMETER, DISTICHON_PENTAMETER, apply_distichon
from .meter import build_meter_pattern
from .models import (
    LineAnalysis,
    MatchResult,
    MeterDirection,
    MeterPattern,
    RhymeEnding,
    RhymeSchemeResult,
    RhymeType,
    StanzaScheme,
    Substitution,
    Syllable,
    SyllableWeight,
    UNKNOWN_FORM,
    VerseCategory,
    VerseFormCatalogEntry,
)
from .rhyme_scheme import analyze_rhyme_scheme, extract_rhyme_endings
from .rhyme_types import classify_rhyme_type
from .syllabifier import split_syllables, syllabify
from .verse_forms import (
    DEFAULT_CATALOG,
    find_substitutions,
    is_hexameter,
    is_pentameter,
    match_verse_form,
    meter_direction,
)
from .weight import classify_weight

__all__ = [
    "DEFAULT_CACHE_SIZE",
    "DEFAULT_CATALOG",
    "DISTICHON_HEXAMETER",
    "DISTICHON_PENTAMETER",
    "LineAnalysis",
    "MatchResult",
    "MeterDirection",
    "MeterPattern",
    "ProsodyAnalyzer",
    "RhymeEnding",
    "RhymeSchemeResult",
    "RhymeType",
    "StanzaScheme",
    "Substitution",
    "Syllable",
    "SyllableWeight",
    "UNKNOWN_FORM",
    "VerseCategory",
    "VerseFormCatalogEntry",
    "analyze_rhyme_scheme",
    "apply_distichon",
    "build_meter_pattern",
    "classify_rhyme_type",
    "classify_weight",
    "extract_rhyme_endings",
    "find_substitutions",
    "is_hexameter",
    "is_pentameter",
    "match_verse_form",
    "meter_direction",
    "split_syllables",
    "syllabify",
]
