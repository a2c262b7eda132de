"""Stanza-aware rhyme-scheme inference.

Each stanza is processed on its own: line endings are grouped into rhyme
classes, classes with a single member are demoted to ``x`` and the rest are
relabelled ``a``, ``b``, ... in order of first appearance. The label
sequence is then named against the common four-line templates.
"""

from __future__ import annotations

from collections import Counter
from itertools import count, islice
from typing import FrozenSet, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from .models import RhymeEnding, RhymeSchemeResult, StanzaScheme
from .orthography import (
    consonant_units,
    is_vowel,
    letters_only,
    normalize_text,
    vowel_skeleton,
)

NO_PARTNER = "x"

HALF_RHYME = "Half rhyme"
MONORHYME = "Monorhyme"
COUPLET_RHYME = "Couplet rhyme"
CROSS_RHYME = "Cross rhyme"
ENCLOSED_RHYME = "Enclosed rhyme"
UNKNOWN_RHYME = "Unknown rhyme form"

SCHEME_TEMPLATES: Tuple[Tuple[str, str], ...] = (
    ("xAxA", HALF_RHYME),
    ("AxAx", HALF_RHYME),
    ("AAAA", MONORHYME),
    ("AABB", COUPLET_RHYME),
    ("ABAB", CROSS_RHYME),
    ("ABBA", ENCLOSED_RHYME),
)

# Trailing consonants that still count as a strong rhyme when swapped.
SIMILAR_CONSONANTS: Tuple[FrozenSet[str], ...] = (
    frozenset({"b", "p"}),
    frozenset({"d", "t"}),
    frozenset({"g", "k"}),
    frozenset({"v", "f"}),
    frozenset({"z", "s"}),
    frozenset({"zs", "sz"}),
    frozenset({"gy", "ty"}),
    frozenset({"ny", "n"}),
)

LinesInput = Union[str, Iterable[Optional[str]], None]


def _coerce_lines(lines: LinesInput) -> List[str]:
    if lines is None:
        return []
    if isinstance(lines, str):
        return lines.splitlines()
    return ["" if line is None else str(line) for line in lines]


def split_stanzas(lines: LinesInput) -> List[List[str]]:
    """Group non-blank lines into stanzas separated by blank lines."""

    stanzas: List[List[str]] = []
    current: List[str] = []
    for line in _coerce_lines(lines):
        if line.strip():
            current.append(line)
        elif current:
            stanzas.append(current)
            current = []
    if current:
        stanzas.append(current)
    return stanzas


def last_word(line: str) -> str:
    """Return the last whitespace-delimited token of ``line`` that has letters."""

    for token in reversed(normalize_text(line).split()):
        if letters_only(token):
            return token
    return ""


def extract_rhyme_ending(word: str) -> str:
    """Return ``word`` from its last vowel to the end, lower-cased.

    Punctuation is stripped first; words without vowels are returned whole.
    """

    cleaned = letters_only(word)
    for index in range(len(cleaned) - 1, -1, -1):
        if is_vowel(cleaned[index]):
            return cleaned[index:]
    return cleaned


def _consonant_tail(ending: str) -> str:
    for index in range(len(ending) - 1, -1, -1):
        if is_vowel(ending[index]):
            return ending[index + 1 :]
    return ending


def consonants_similar(first: str, second: str) -> bool:
    return any(first in group and second in group for group in SIMILAR_CONSONANTS)


def is_strong_rhyme(first: str, second: str) -> bool:
    """Return whether two rhyme endings belong to the same rhyme class.

    The vowels must be identical; the trailing consonants must be identical
    or, unit by unit, drawn from :data:`SIMILAR_CONSONANTS`.
    """

    if not first or not second:
        return False
    if vowel_skeleton(first) != vowel_skeleton(second):
        return False

    tail_first = _consonant_tail(first)
    tail_second = _consonant_tail(second)
    if tail_first == tail_second:
        return True

    units_first = consonant_units(tail_first)
    units_second = consonant_units(tail_second)
    if len(units_first) != len(units_second):
        return False
    return all(
        left == right or consonants_similar(left, right)
        for left, right in zip(units_first, units_second)
    )


def _label_sequence() -> Iterator[str]:
    """Yield ``a`` .. ``z``, ``aa``, ``ab`` ... skipping the ``x`` placeholder."""

    for number in count(1):
        label = ""
        while number > 0:
            number, remainder = divmod(number - 1, 26)
            label = chr(ord("a") + remainder) + label
        if label != NO_PARTNER:
            yield label


def rhyme_label(index: int) -> str:
    """Return the zero-based ``index``-th rhyme letter."""

    return next(islice(_label_sequence(), max(0, index), None))


def assign_rhyme_classes(endings: Sequence[str]) -> List[Optional[int]]:
    """Assign provisional rhyme-class ids to the endings of one stanza.

    Each class is stored once, keyed by its first ending. An ending that
    matches no class opens a new one when it is among the first two lines
    or when some later ending of the stanza rhymes with it; otherwise it
    gets ``None``.
    """

    representatives: List[str] = []
    classes: List[Optional[int]] = []
    for index, ending in enumerate(endings):
        match = next(
            (
                class_id
                for class_id, representative in enumerate(representatives)
                if is_strong_rhyme(ending, representative)
            ),
            None,
        )
        if match is not None:
            classes.append(match)
            continue

        has_partner = any(is_strong_rhyme(ending, later) for later in endings[index + 1 :])
        if index < 2 or has_partner:
            representatives.append(ending)
            classes.append(len(representatives) - 1)
        else:
            classes.append(None)
    return classes


def finalize_labels(classes: Sequence[Optional[int]]) -> List[str]:
    """Demote single-member classes to ``x`` and relabel the rest densely."""

    sizes = Counter(class_id for class_id in classes if class_id is not None)
    mapping: dict = {}
    labels: List[str] = []
    for class_id in classes:
        if class_id is None or sizes[class_id] < 2:
            labels.append(NO_PARTNER)
            continue
        if class_id not in mapping:
            mapping[class_id] = rhyme_label(len(mapping))
        labels.append(mapping[class_id])
    return labels


def label_stanza(lines: Sequence[str]) -> List[str]:
    endings = [extract_rhyme_ending(last_word(line)) for line in lines]
    return finalize_labels(assign_rhyme_classes(endings))


def matches_template(labels: Sequence[str], template: str) -> bool:
    """Return whether ``labels`` fits ``template``.

    Equal template letters need equal labels, different letters different
    labels, and a template ``x`` needs an actual ``x``.
    """

    if len(labels) != len(template):
        return False
    bound: dict = {}
    for actual, expected in zip(labels, template):
        if expected == NO_PARTNER:
            if actual != NO_PARTNER:
                return False
            continue
        if actual == NO_PARTNER:
            return False
        if expected in bound:
            if bound[expected] != actual:
                return False
        elif actual in bound.values():
            return False
        else:
            bound[expected] = actual
    return True


def name_rhyme_scheme(labels: Sequence[str]) -> str:
    for template, name in SCHEME_TEMPLATES:
        if matches_template(labels, template):
            return name
    return UNKNOWN_RHYME


def extract_rhyme_endings(lines: LinesInput) -> List[RhymeEnding]:
    """Return the rhyme ending of every non-blank line, indexed in reading order."""

    endings: List[RhymeEnding] = []
    for stanza in split_stanzas(lines):
        for line in stanza:
            endings.append(
                RhymeEnding(len(endings), extract_rhyme_ending(last_word(line)))
            )
    return endings


def analyze_rhyme_scheme(lines: LinesInput) -> RhymeSchemeResult:
    """Infer per-line rhyme labels and the scheme name for ``lines``.

    ``lines`` may be a sequence of lines or one multi-line string. Blank
    lines separate stanzas and receive no label. When stanzas disagree on
    their scheme the overall name is "Unknown rhyme form".
    """

    stanzas: List[StanzaScheme] = []
    pattern: List[str] = []
    for stanza_lines in split_stanzas(lines):
        labels = label_stanza(stanza_lines)
        stanzas.append(StanzaScheme(tuple(labels), name_rhyme_scheme(labels)))
        pattern.extend(labels)

    names = {stanza.scheme_name for stanza in stanzas}
    scheme_name = names.pop() if len(names) == 1 else UNKNOWN_RHYME
    return RhymeSchemeResult(pattern=pattern, scheme_name=scheme_name, stanzas=tuple(stanzas))


__all__ = [
    "COUPLET_RHYME",
    "CROSS_RHYME",
    "ENCLOSED_RHYME",
    "HALF_RHYME",
    "MONORHYME",
    "NO_PARTNER",
    "SCHEME_TEMPLATES",
    "SIMILAR_CONSONANTS",
    "UNKNOWN_RHYME",
    "analyze_rhyme_scheme",
    "assign_rhyme_classes",
    "consonants_similar",
    "extract_rhyme_ending",
    "extract_rhyme_endings",
    "finalize_labels",
    "is_strong_rhyme",
    "label_stanza",
    "last_word",
    "matches_template",
    "name_rhyme_scheme",
    "rhyme_label",
    "split_stanzas",
]
