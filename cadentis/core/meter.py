"""Compose syllable weights into a line's meter pattern."""

from __future__ import annotations

from typing import Iterable, Sequence

from .models import MeterPattern, Syllable
from .syllabifier import syllabify


def pattern_from_syllables(syllables: Iterable[Syllable]) -> str:
    return "".join(syllable.symbol for syllable in syllables)


def build_meter_pattern(text: str, syllables: Sequence[Syllable] | None = None) -> MeterPattern:
    """Return the weight pattern, syllable count and mora total for ``text``."""

    raw = "" if text is None else str(text)
    if syllables is None:
        syllables = syllabify(raw)
    ordered = tuple(syllables)
    return MeterPattern(
        text=raw.strip(),
        syllables=ordered,
        pattern=pattern_from_syllables(ordered),
        syllable_count=len(ordered),
        mora_count=sum(syllable.mora for syllable in ordered),
    )


__all__ = ["build_meter_pattern", "pattern_from_syllables"]
