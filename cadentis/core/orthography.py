"""Hungarian orthography tables shared by the scansion and rhyme engines."""

from __future__ import annotations

import unicodedata
from functools import lru_cache
from typing import FrozenSet, List, Tuple


SHORT_VOWELS: FrozenSet[str] = frozenset("aeioöuü")
LONG_VOWELS: FrozenSet[str] = frozenset("áéíóőúű")
VOWELS: FrozenSet[str] = SHORT_VOWELS | LONG_VOWELS

# Multi-letter graphemes that spell a single consonant. Longest first so the
# tokenizer prefers ``dzs`` over ``dz``.
CONSONANT_GRAPHEMES: Tuple[str, ...] = (
    "dzs",
    "sz",
    "cs",
    "gy",
    "ny",
    "ty",
    "zs",
    "dz",
    "ly",
)

DIPHTHONGS: Tuple[str, ...] = ("ai", "au", "ei", "eu", "oi", "ou", "ui")

# Aspirated clusters borrowed from Greek names; they never lengthen a syllable.
NON_LENGTHENING_CLUSTERS: FrozenSet[str] = frozenset({"kh", "ph", "th"})

# Vowel pairs that differ only in length.
VOWEL_LENGTH_PAIRS: Tuple[Tuple[str, str], ...] = (
    ("a", "á"),
    ("e", "é"),
    ("i", "í"),
    ("o", "ó"),
    ("ö", "ő"),
    ("u", "ú"),
    ("ü", "ű"),
)


def is_vowel(char: str) -> bool:
    return char in VOWELS


def is_long_vowel(char: str) -> bool:
    return char in LONG_VOWELS


def normalize_text(text) -> str:
    """Compose accents (NFC) and lower-case ``text``.

    Decomposed input (``a`` plus U+0301) becomes a single ``á``.
    """

    if not text:
        return ""
    return unicodedata.normalize("NFC", str(text)).lower()


def letters_only(text: str) -> str:
    """Lower-case ``text`` and drop everything that is not a letter."""

    return "".join(char for char in normalize_text(text) if char.isalpha())


def vowel_skeleton(text: str) -> str:
    return "".join(char for char in normalize_text(text) if char in VOWELS)


def consonant_skeleton(text: str) -> str:
    return "".join(
        char for char in normalize_text(text) if char.isalpha() and char not in VOWELS
    )


def short_form(vowel: str) -> str:
    """Return the short counterpart of ``vowel`` (identity for short vowels)."""

    for short, long in VOWEL_LENGTH_PAIRS:
        if vowel == long:
            return short
    return vowel


def consonant_unit_at(text: str, index: int) -> str:
    """Return the consonant grapheme of ``text`` starting at ``index``."""

    for grapheme in CONSONANT_GRAPHEMES:
        if text.startswith(grapheme, index):
            return grapheme
    return text[index]


@lru_cache(maxsize=4096)
def _consonant_units_cached(cluster: str) -> Tuple[str, ...]:
    units: List[str] = []
    index = 0
    while index < len(cluster):
        unit = consonant_unit_at(cluster, index)
        units.append(unit)
        index += len(unit)
    return tuple(units)


def consonant_units(cluster: str) -> List[str]:
    """Split a run of consonant letters into single-sound units.

    >>> consonant_units("nyv")
    ['ny', 'v']
    """

    return list(_consonant_units_cached(cluster or ""))


__all__ = [
    "SHORT_VOWELS",
    "LONG_VOWELS",
    "VOWELS",
    "CONSONANT_GRAPHEMES",
    "DIPHTHONGS",
    "NON_LENGTHENING_CLUSTERS",
    "VOWEL_LENGTH_PAIRS",
    "consonant_skeleton",
    "consonant_unit_at",
    "consonant_units",
    "is_long_vowel",
    "is_vowel",
    "letters_only",
    "normalize_text",
    "short_form",
    "vowel_skeleton",
]
