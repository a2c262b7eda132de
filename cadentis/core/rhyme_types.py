"""Pairwise rhyme-type classification."""

from __future__ import annotations

from collections import Counter
from typing import List, Optional

from .models import RhymeType
from .orthography import (
    consonant_skeleton,
    is_long_vowel,
    is_vowel,
    letters_only,
    normalize_text,
    short_form,
    vowel_skeleton,
)

LONG_SHAPE = "-"
SHORT_SHAPE = "U"
MASCULINE_RHYTHM = SHORT_SHAPE + LONG_SHAPE
FEMININE_RHYTHM = LONG_SHAPE + SHORT_SHAPE


def _normalise(text: Optional[str]) -> str:
    return " ".join(normalize_text(text).split())


def _last_token(text: str) -> str:
    tokens = text.split()
    return tokens[-1] if tokens else ""


def split_rhyme_syllables(word: str) -> List[str]:
    """Split ``word`` into open syllables for rhythm comparison.

    Every vowel closes a syllable and consonants after the last vowel join
    the final one. This is coarser than the metrical syllabifier.

    >>> split_rhyme_syllables("madár")
    ['ma', 'dár']
    """

    letters = letters_only(word)
    syllables: List[str] = []
    current = ""
    for char in letters:
        current += char
        if is_vowel(char):
            syllables.append(current)
            current = ""
    if current and syllables:
        syllables[-1] += current
    return syllables


def _is_heavy(syllable: str) -> bool:
    last = syllable[-1]
    return not is_vowel(last) or is_long_vowel(last)


def rhyme_rhythm(word: str) -> str:
    """Return the rhythmic shape of ``word`` judged by its final syllable.

    A final syllable ending in a consonant or a long vowel is heavy and gives
    ``U-``; a light final gives ``-U``. Monosyllables give ``-`` or ``U`` and
    words without vowels give an empty string.

    >>> rhyme_rhythm("alma")
    '-U'
    """

    syllables = split_rhyme_syllables(word)
    if not syllables:
        return ""
    heavy = _is_heavy(syllables[-1])
    if len(syllables) == 1:
        return LONG_SHAPE if heavy else SHORT_SHAPE
    return MASCULINE_RHYTHM if heavy else FEMININE_RHYTHM


def rhyme_tail(word: str) -> str:
    """Return ``word`` from its second-to-last vowel onwards.

    Monosyllables are cut at their only vowel; words without vowels are
    returned whole.
    """

    letters = letters_only(word)
    positions = [index for index, char in enumerate(letters) if is_vowel(char)]
    if not positions:
        return letters
    return letters[positions[-2] if len(positions) > 1 else positions[-1] :]


def _last_vowel(text: str) -> str:
    vowels = vowel_skeleton(text)
    return short_form(vowels[-1]) if vowels else ""


def classify_rhyme_type(first: Optional[str], second: Optional[str]) -> RhymeType:
    """Classify the rhyme formed by two words or phrases.

    Rules are tried in order and the first one that applies wins: clean,
    goat, torture, assonance, crooked, then masculine/feminine.
    """

    left = _normalise(first)
    right = _normalise(second)
    if not left or not right:
        return RhymeType.NONE

    left_word = _last_token(left)
    right_word = _last_token(right)
    same_segmentation = len(left.split()) == len(right.split())

    if same_segmentation and rhyme_tail(left_word) == rhyme_tail(right_word):
        return RhymeType.CLEAN

    if len(left) == len(right) and left != right and Counter(left) == Counter(right):
        return RhymeType.GOAT

    if left != right and left.replace(" ", "") == right.replace(" ", ""):
        return RhymeType.TORTURE

    vowels_equal = vowel_skeleton(left) == vowel_skeleton(right)
    consonants_equal = consonant_skeleton(left) == consonant_skeleton(right)
    if vowels_equal and not consonants_equal:
        return RhymeType.ASSONANCE
    if consonants_equal and not vowels_equal:
        return RhymeType.CROOKED

    final_vowel = _last_vowel(left_word)
    if not final_vowel or final_vowel != _last_vowel(right_word):
        return RhymeType.NONE

    left_rhythm = rhyme_rhythm(left_word)
    right_rhythm = rhyme_rhythm(right_word)
    if left_rhythm == right_rhythm == MASCULINE_RHYTHM:
        return RhymeType.MASCULINE
    if left_rhythm == right_rhythm == FEMININE_RHYTHM:
        return RhymeType.FEMININE
    return RhymeType.NONE


__all__ = [
    "FEMININE_RHYTHM",
    "MASCULINE_RHYTHM",
    "classify_rhyme_type",
    "rhyme_rhythm",
    "rhyme_tail",
    "split_rhyme_syllables",
]
