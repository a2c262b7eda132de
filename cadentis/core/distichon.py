"""Relabel hexameter + pentameter couplets as elegiac distichs."""

from __future__ import annotations

from dataclasses import replace
from typing import List, Sequence

from .models import LineAnalysis
from .verse_forms import is_hexameter, is_pentameter

DISTICHON_HEXAMETER = "distichon (hexameter)"
DISTICHON_PENTAMETER = "distichon (pentameter)"


def apply_distichon(
    analyses: Sequence[LineAnalysis],
    *,
    strict_pentameter: bool = True,
) -> List[LineAnalysis]:
    """Return ``analyses`` with couplet pairs relabelled.

    Lines are paired as (0, 1), (2, 3), ...; a pair is relabelled only when
    the first line is a hexameter and the second a pentameter. Pairs are never
    re-examined across pair boundaries.
    """

    result = list(analyses)
    for index in range(0, len(result) - 1, 2):
        first, second = result[index], result[index + 1]
        if not is_hexameter(first.pattern):
            continue
        if not is_pentameter(second.pattern, strict_length=strict_pentameter):
            continue
        result[index] = replace(
            first, verse_type=DISTICHON_HEXAMETER, is_distichon_part=True
        )
        result[index + 1] = replace(
            second, verse_type=DISTICHON_PENTAMETER, is_distichon_part=True
        )
    return result


__all__ = ["DISTICHON_HEXAMETER", "DISTICHON_PENTAMETER", "apply_distichon"]
