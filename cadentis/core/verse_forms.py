"""Verse-form catalog and pattern matching.

Patterns use ``-`` for a long and ``U`` for a short position. Catalog
patterns may also contain ``x`` (anceps), which matches either weight. A
line pattern may carry one trailing ``x`` or ``?`` marking an indifferent
final position; it is removed before the hexameter and pentameter checks.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from .models import (
    MatchResult,
    MeterDirection,
    Substitution,
    SyllableWeight,
    VerseCategory,
    VerseFormCatalogEntry,
)

LONG = SyllableWeight.LONG.value
SHORT = SyllableWeight.SHORT.value
ANCEPS = "x"
DACTYL = "-UU"
SPONDEE = "--"

HEXAMETER = "hexameter"
PENTAMETER = "pentameter"

_INDIFFERENT_MARKS = ("x", "?")
_HEXAMETER_LENGTH_RANGE = (13, 17)
_HEXAMETER_CLOSINGS = ("--", "-U")

PENTAMETER_SECOND_HEMISTICH = "-UU-UU-"
# Every (-UU|--)(-UU|--)- shape of the first hemistich.
PENTAMETER_FIRST_HEMISTICHS: Tuple[str, ...] = (
    "-UU-UU-",
    "-UU---",
    "---UU-",
    "-----",
)
PENTAMETER_LENGTH = 14


def _mora_value(pattern: str) -> int:
    return sum(1 if symbol == SHORT else 2 for symbol in pattern)


def _entry(name: str, pattern: str, category: VerseCategory) -> VerseFormCatalogEntry:
    return VerseFormCatalogEntry(
        name=name,
        pattern=pattern,
        mora_count=_mora_value(pattern),
        category=category,
    )


_FOOT = VerseCategory.FOOT
_COLON = VerseCategory.COLON
_PERIOD = VerseCategory.PERIOD

DEFAULT_CATALOG: Tuple[VerseFormCatalogEntry, ...] = (
    # Feet
    _entry("iamb", "U-", _FOOT),
    _entry("trochee", "-U", _FOOT),
    _entry("spondee", "--", _FOOT),
    _entry("pyrrhic", "UU", _FOOT),
    _entry("dactyl", "-UU", _FOOT),
    _entry("anapaest", "UU-", _FOOT),
    _entry("amphibrach", "U-U", _FOOT),
    _entry("cretic", "-U-", _FOOT),
    _entry("bacchius", "U--", _FOOT),
    _entry("antibacchius", "--U", _FOOT),
    _entry("molossus", "---", _FOOT),
    _entry("tribrach", "UUU", _FOOT),
    _entry("choriamb", "-UU-", _FOOT),
    _entry("ionic a minore", "UU--", _FOOT),
    _entry("ionic a maiore", "--UU", _FOOT),
    _entry("antispast", "U--U", _FOOT),
    # Cola
    _entry("adonic", "-UU-x", _COLON),
    _entry("hemiepes", "-UU-UU-", _COLON),
    _entry("pherecratean", "xx-UU-x", _COLON),
    _entry("aristophanean", "-UU-U-x", _COLON),
    _entry("glyconic", "xx-UU-U-", _COLON),
    # Periods
    _entry(HEXAMETER, "-UU-UU-UU-UU-UU--", _PERIOD),
    _entry(PENTAMETER, "-UU-UU--UU-UU-", _PERIOD),
    _entry("sapphic hendecasyllable", "-U-x-UU-U-x", _PERIOD),
    _entry("alcaic hendecasyllable", "x-U-x-UU-U-", _PERIOD),
    _entry("alcaic enneasyllable", "x-U-x-U-x", _PERIOD),
    _entry("alcaic decasyllable", "-UU-UU-U-x", _PERIOD),
    _entry("phalaecian hendecasyllable", "xx-UU-U-U-x", _PERIOD),
    _entry("lesser asclepiad", "---UU--UU-Ux", _PERIOD),
    _entry("iambic trimeter", "x-U-x-U-x-U-", _PERIOD),
    _entry("trochaic tetrameter catalectic", "-U-x-U-x-U-x-U-", _PERIOD),
)


def catalog_entry(
    name: str,
    catalog: Iterable[VerseFormCatalogEntry] = DEFAULT_CATALOG,
) -> Optional[VerseFormCatalogEntry]:
    for entry in catalog:
        if entry.name == name:
            return entry
    return None


_HEXAMETER_ENTRY = catalog_entry(HEXAMETER)
_PENTAMETER_ENTRY = catalog_entry(PENTAMETER)


def _strip_indifferent(pattern: str) -> str:
    if pattern and pattern[-1] in _INDIFFERENT_MARKS:
        return pattern[:-1]
    return pattern


def _is_weight_string(pattern: str) -> bool:
    return bool(pattern) and set(pattern) <= {LONG, SHORT}


def scan_feet(segment: str) -> Optional[List[str]]:
    """Split ``segment`` into dactyls and spondees, or ``None`` if impossible."""

    feet: List[str] = []
    index = 0
    while index < len(segment):
        if segment.startswith(DACTYL, index):
            feet.append(DACTYL)
            index += len(DACTYL)
        elif segment.startswith(SPONDEE, index):
            feet.append(SPONDEE)
            index += len(SPONDEE)
        else:
            return None
    return feet


def is_hexameter(pattern: str) -> bool:
    """Return whether ``pattern`` scans as a dactylic hexameter.

    Four free feet (dactyl or spondee, at least one dactyl), a dactylic
    fifth foot and a closing ``--`` or ``-U``.
    """

    main = _strip_indifferent(pattern or "")
    low, high = _HEXAMETER_LENGTH_RANGE
    if not low <= len(main) <= high or not _is_weight_string(main):
        return False
    if main[-2:] not in _HEXAMETER_CLOSINGS:
        return False
    if main[-5:-2] != DACTYL:
        return False
    feet = scan_feet(main[:-5])
    return feet is not None and len(feet) == 4 and DACTYL in feet


def is_pentameter(pattern: str, *, strict_length: bool = True) -> bool:
    """Return whether ``pattern`` scans as an elegiac pentameter.

    The second hemistich is fixed; the first must be one of
    :data:`PENTAMETER_FIRST_HEMISTICHS`. With ``strict_length`` the whole
    line must also be :data:`PENTAMETER_LENGTH` positions long, which only
    the fully dactylic first hemistich satisfies.
    """

    main = _strip_indifferent(pattern or "")
    if not _is_weight_string(main) or not main.endswith(PENTAMETER_SECOND_HEMISTICH):
        return False
    if main[: -len(PENTAMETER_SECOND_HEMISTICH)] not in PENTAMETER_FIRST_HEMISTICHS:
        return False
    if strict_length:
        return len(main) == PENTAMETER_LENGTH
    return True


def pattern_similarity(pattern: str, canonical: str) -> float:
    """Share of positions where both patterns agree, over the longer length."""

    longest = max(len(pattern), len(canonical))
    if longest == 0:
        return 0.0
    matches = sum(
        1
        for actual, expected in zip(pattern, canonical)
        if actual == expected or ANCEPS in (actual, expected)
    )
    return matches / longest


def find_substitutions(
    pattern: str,
    form: Optional[VerseFormCatalogEntry],
) -> Tuple[Substitution, ...]:
    """List the positions where ``pattern`` departs from ``form``.

    Only positions present in both patterns are compared; anceps positions
    never produce a substitution.
    """

    if form is None:
        return ()
    substitutions: List[Substitution] = []
    for position, (actual_symbol, expected_symbol) in enumerate(zip(pattern, form.pattern)):
        if actual_symbol == expected_symbol:
            continue
        expected = SyllableWeight.from_symbol(expected_symbol)
        actual = SyllableWeight.from_symbol(actual_symbol)
        if expected is None or actual is None:
            continue
        substitutions.append(Substitution(position, expected, actual))
    return tuple(substitutions)


def meter_direction(pattern: str) -> MeterDirection:
    rising = (pattern or "").count(SHORT + LONG)
    falling = (pattern or "").count(LONG + SHORT)
    if rising > falling:
        return MeterDirection.RISING
    if falling > rising:
        return MeterDirection.FALLING
    return MeterDirection.MIXED


def match_verse_form(
    pattern: str,
    catalog: Sequence[VerseFormCatalogEntry] = DEFAULT_CATALOG,
    *,
    strict_pentameter: bool = True,
) -> MatchResult:
    """Classify ``pattern`` against the hexameter and pentameter rules, then the catalog."""

    pattern = pattern or ""
    direction = meter_direction(pattern)

    if is_hexameter(pattern):
        form = catalog_entry(HEXAMETER, catalog) or _HEXAMETER_ENTRY
        return MatchResult(form, False, (), direction, 1.0)
    if is_pentameter(pattern, strict_length=strict_pentameter):
        form = catalog_entry(PENTAMETER, catalog) or _PENTAMETER_ENTRY
        return MatchResult(form, False, (), direction, 1.0)

    best: Optional[VerseFormCatalogEntry] = None
    best_score = 0.0
    for entry in catalog:
        score = pattern_similarity(pattern, entry.pattern)
        if score > best_score:
            best = entry
            best_score = score

    if best is None:
        return MatchResult(None, False, (), direction, 0.0)

    return MatchResult(
        best,
        best_score < 1,
        find_substitutions(pattern, best),
        direction,
        best_score,
    )


__all__ = [
    "ANCEPS",
    "DACTYL",
    "DEFAULT_CATALOG",
    "HEXAMETER",
    "PENTAMETER",
    "PENTAMETER_FIRST_HEMISTICHS",
    "PENTAMETER_LENGTH",
    "PENTAMETER_SECOND_HEMISTICH",
    "SPONDEE",
    "catalog_entry",
    "find_substitutions",
    "is_hexameter",
    "is_pentameter",
    "match_verse_form",
    "meter_direction",
    "pattern_similarity",
    "scan_feet",
]
