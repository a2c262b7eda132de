"""Dataclasses and enumerations describing scansion and rhyme results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class SyllableWeight(Enum):
    """Metrical quantity of a syllable, valued by its pattern symbol."""

    LONG = "-"
    SHORT = "U"

    @property
    def mora(self) -> int:
        return 2 if self is SyllableWeight.LONG else 1

    @property
    def label(self) -> str:
        return "long" if self is SyllableWeight.LONG else "short"

    @classmethod
    def from_symbol(cls, symbol: str) -> Optional["SyllableWeight"]:
        """Return the weight for ``symbol`` or ``None`` for wildcard marks."""

        try:
            return cls(symbol)
        except ValueError:
            return None


class MeterDirection(Enum):
    RISING = "rising"
    FALLING = "falling"
    MIXED = "mixed"


class VerseCategory(Enum):
    FOOT = "foot"
    COLON = "colon"
    PERIOD = "period"


class RhymeType(Enum):
    """Pairwise rhyme categories of Hungarian poetics."""

    CLEAN = ("clean rhyme", "tiszta rím")
    GOAT = ("goat rhyme", "kecskerím")
    TORTURE = ("torture rhyme", "kínrím")
    ASSONANCE = ("assonance", "asszonánc")
    CROOKED = ("crooked rhyme", "kancsal rím")
    MASCULINE = ("masculine rhyme", "hímrím")
    FEMININE = ("feminine rhyme", "nőrím")
    NONE = ("no rhyme", "rímtelen")

    def __init__(self, label: str, hungarian: str) -> None:
        self.label = label
        self.hungarian = hungarian


@dataclass(frozen=True)
class Syllable:
    """A single syllable with exactly one vowel nucleus."""

    text: str
    nucleus: str
    weight: SyllableWeight
    position: int

    @property
    def mora(self) -> int:
        return self.weight.mora

    @property
    def symbol(self) -> str:
        return self.weight.value


@dataclass(frozen=True)
class MeterPattern:
    """Weight pattern of one line of verse."""

    text: str
    syllables: Tuple[Syllable, ...]
    pattern: str
    syllable_count: int
    mora_count: int

    def as_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "syllables": [syllable.text for syllable in self.syllables],
            "pattern": self.pattern,
            "syllable_count": self.syllable_count,
            "mora_count": self.mora_count,
        }


@dataclass(frozen=True)
class VerseFormCatalogEntry:
    """Named verse form; ``pattern`` may contain the ``x`` anceps wildcard."""

    name: str
    pattern: str
    mora_count: int
    category: VerseCategory


@dataclass(frozen=True)
class Substitution:
    """A position where the line departs from its matched form.

    ``position`` is zero based; :meth:`describe` renders it one based.
    """

    position: int
    expected: SyllableWeight
    actual: SyllableWeight

    def describe(self) -> str:
        return (
            f"{self.actual.label.capitalize()} instead of {self.expected.label} "
            f"at position {self.position + 1}"
        )


UNKNOWN_FORM = "unknown form"


@dataclass(frozen=True)
class MatchResult:
    form: Optional[VerseFormCatalogEntry]
    is_approximate: bool
    substitutions: Tuple[Substitution, ...]
    direction: MeterDirection
    score: float = 0.0

    @property
    def display_name(self) -> str:
        if self.form is None:
            return UNKNOWN_FORM
        prefix = "~" if self.is_approximate else "+"
        return f"{prefix}{self.form.name}"


@dataclass(frozen=True)
class LineAnalysis:
    """Scansion of one line together with its verse-form match."""

    line: MeterPattern
    match: MatchResult
    verse_type: str
    is_distichon_part: bool = False
    rhyme_label: str = ""

    @property
    def text(self) -> str:
        return self.line.text

    @property
    def pattern(self) -> str:
        return self.line.pattern

    @property
    def syllables(self) -> Tuple[Syllable, ...]:
        return self.line.syllables

    @property
    def syllable_count(self) -> int:
        return self.line.syllable_count

    @property
    def mora_count(self) -> int:
        return self.line.mora_count

    @property
    def direction(self) -> MeterDirection:
        return self.match.direction

    def as_dict(self) -> Dict[str, Any]:
        payload = self.line.as_dict()
        payload.update(
            {
                "verse_type": self.verse_type,
                "form": self.match.form.name if self.match.form else None,
                "is_approximate": self.match.is_approximate,
                "score": self.match.score,
                "substitutions": [sub.describe() for sub in self.match.substitutions],
                "direction": self.match.direction.value,
                "is_distichon_part": self.is_distichon_part,
                "rhyme_label": self.rhyme_label,
            }
        )
        return payload


@dataclass(frozen=True)
class RhymeEnding:
    line_index: int
    text: str


@dataclass(frozen=True)
class StanzaScheme:
    labels: Tuple[str, ...]
    scheme_name: str


@dataclass(frozen=True)
class RhymeSchemeResult:
    pattern: List[str]
    scheme_name: str
    stanzas: Tuple[StanzaScheme, ...] = field(default_factory=tuple)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "pattern": list(self.pattern),
            "scheme_name": self.scheme_name,
            "stanzas": [
                {"labels": list(stanza.labels), "scheme_name": stanza.scheme_name}
                for stanza in self.stanzas
            ],
        }


__all__ = [
    "LineAnalysis",
    "MatchResult",
    "MeterDirection",
    "MeterPattern",
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
]
