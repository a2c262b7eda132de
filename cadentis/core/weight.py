"""Long/short classification of metrical syllables."""

from __future__ import annotations

from .models import SyllableWeight
from .orthography import (
    DIPHTHONGS,
    NON_LENGTHENING_CLUSTERS,
    consonant_unit_at,
    is_long_vowel,
    is_vowel,
    normalize_text,
)


def count_lengthening_consonants(cluster: str) -> int:
    """Count consonant units in ``cluster`` that contribute to positional length.

    Digraphs count once; ``kh``, ``ph`` and ``th`` do not count at all.
    """

    count = 0
    index = 0
    while index < len(cluster):
        if cluster[index : index + 2] in NON_LENGTHENING_CLUSTERS:
            index += 2
            continue
        unit = consonant_unit_at(cluster, index)
        if unit.isalpha() and not is_vowel(unit):
            count += 1
        index += len(unit)
    return count


def classify_weight(
    syllable: str,
    *,
    following: str = "",
    is_final: bool = False,
) -> SyllableWeight:
    """Return the metrical weight of ``syllable``.

    ``following`` is the consonant onset of the next syllable; consonants are
    counted from the nucleus up to the next nucleus, across the syllable
    boundary. The final syllable of a line is always long.
    """

    if is_final:
        return SyllableWeight.LONG

    text = normalize_text(syllable)
    nucleus_index = next(
        (offset for offset, char in enumerate(text) if is_vowel(char)),
        None,
    )
    if nucleus_index is None:
        return SyllableWeight.SHORT

    if is_long_vowel(text[nucleus_index]):
        return SyllableWeight.LONG

    cluster = text[nucleus_index + 1 :] + normalize_text(following)
    if count_lengthening_consonants(cluster) >= 2:
        return SyllableWeight.LONG

    if any(diphthong in text for diphthong in DIPHTHONGS):
        return SyllableWeight.LONG

    return SyllableWeight.SHORT


__all__ = ["classify_weight", "count_lengthening_consonants"]
