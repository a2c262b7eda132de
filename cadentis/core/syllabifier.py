"""Metrical syllabification of Hungarian verse lines.

A line is scanned as one continuous stream of letters: spaces, punctuation
and digits are dropped first so that consonants at the end of one word and
the start of the next combine when deciding positional length, exactly as
quantitative verse is read aloud.

Boundary rules, applied at each vowel:

* a vowel directly followed by another vowel closes its syllable (hiatus);
* a vowel followed by a single consonant closes its syllable and the
  consonant opens the next one (``ta-lo``);
* a vowel followed by two or more consonants keeps the first consonant and
  hands the rest to the next syllable (``föl-djén``, ``köny-vek``);
* consonants after the last vowel stay with the last syllable.

Digraphs such as ``sz`` or ``gy`` and the trigraph ``dzs`` count as a single
consonant.
"""

from __future__ import annotations

from functools import lru_cache
from typing import List, Tuple

from .models import Syllable
from .orthography import consonant_units, is_vowel, letters_only
from .weight import classify_weight


@lru_cache(maxsize=2048)
def _split_cached(letters: str) -> Tuple[Tuple[str, str], ...]:
    """Return ``(syllable, following)`` pairs for a letter-only string.

    ``following`` holds the consonants between the syllable and the next
    nucleus, which the weight classifier needs for positional length.
    """

    chunks: List[str] = []
    current = ""
    index = 0
    length = len(letters)

    while index < length:
        char = letters[index]
        current += char
        index += 1
        if not is_vowel(char):
            continue

        run_end = index
        while run_end < length and not is_vowel(letters[run_end]):
            run_end += 1

        if run_end >= length:
            # Trailing consonants belong to the final syllable.
            current += letters[index:]
            index = length
            break

        units = consonant_units(letters[index:run_end])
        if len(units) >= 2:
            current += units[0]
            index += len(units[0])

        chunks.append(current)
        current = ""

    if current:
        chunks.append(current)

    syllables = [chunk for chunk in chunks if any(is_vowel(char) for char in chunk)]

    pairs: List[Tuple[str, str]] = []
    for position, syllable in enumerate(syllables):
        following = ""
        if position + 1 < len(syllables):
            following = _onset(syllables[position + 1])
        pairs.append((syllable, following))
    return tuple(pairs)


def _onset(syllable: str) -> str:
    for offset, char in enumerate(syllable):
        if is_vowel(char):
            return syllable[:offset]
    return syllable


def _nucleus(syllable: str) -> str:
    for char in syllable:
        if is_vowel(char):
            return char
    return ""


def split_syllables(text: str) -> List[str]:
    """Split ``text`` into metrical syllables.

    Empty input and input without vowels produce an empty list.
    """

    return [syllable for syllable, _ in _split_cached(letters_only(text))]


def syllabify(text: str) -> List[Syllable]:
    """Split ``text`` into :class:`Syllable` records with their weights."""

    pairs = _split_cached(letters_only(text))
    last = len(pairs) - 1
    return [
        Syllable(
            text=syllable,
            nucleus=_nucleus(syllable),
            weight=classify_weight(
                syllable,
                following=following,
                is_final=position == last,
            ),
            position=position,
        )
        for position, (syllable, following) in enumerate(pairs)
    ]


__all__ = ["split_syllables", "syllabify"]
