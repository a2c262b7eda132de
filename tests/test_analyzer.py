import unicodedata

import pytest

import cadentis
from cadentis.core import ProsodyAnalyzer, RhymeType
from cadentis.core.models import MeterDirection

from conftest import CROSS_RHYME_STANZA, HEXAMETER_LINE, PENTAMETER_LINE


def test_analyze_line_composes_scansion_and_match(analyzer):
    analysis = analyzer.analyze_line(HEXAMETER_LINE)
    assert analysis.text == HEXAMETER_LINE
    assert analysis.pattern == "-UU-UU-----UU--"
    assert analysis.syllable_count == 15
    assert analysis.verse_type == "+hexameter"
    assert analysis.direction in set(MeterDirection)
    assert analysis.rhyme_label == ""


def test_decomposed_line_scans_like_composed(analyzer):
    decomposed = unicodedata.normalize("NFD", HEXAMETER_LINE)
    assert decomposed != HEXAMETER_LINE
    analysis = analyzer.analyze_line(decomposed)
    assert analysis.pattern == "-UU-UU-----UU--"
    assert analysis.verse_type == "+hexameter"


def test_analyze_line_is_cached_and_idempotent(analyzer):
    first = analyzer.analyze_line(PENTAMETER_LINE)
    second = analyzer.analyze_line(PENTAMETER_LINE)
    assert first is second
    assert ProsodyAnalyzer().analyze_line(PENTAMETER_LINE) == first


def test_cache_is_bounded():
    analyzer = ProsodyAnalyzer(cache_size=2)
    for text in ("kapu", "alma", "falka"):
        analyzer.analyze_line(text)
    assert list(analyzer._line_cache) == ["alma", "falka"]

    analyzer.clear_cached_results()
    assert not analyzer._line_cache


def test_disabled_cache_still_analyses():
    analyzer = ProsodyAnalyzer(cache_size=0)
    assert analyzer.analyze_line("kapu").pattern == "U-"
    assert not analyzer._line_cache


@pytest.mark.parametrize("text", [None, "", "!!!"])
def test_degenerate_lines_are_unknown(analyzer, text):
    analysis = analyzer.analyze_line(text)
    assert analysis.pattern == ""
    assert analysis.verse_type == "unknown form"


def test_analyze_lines_skips_blank_lines_and_attaches_rhymes(analyzer):
    text = "\n".join(CROSS_RHYME_STANZA[:2] + ["", "   "] + CROSS_RHYME_STANZA[2:])
    analyses = analyzer.analyze_lines(text)
    assert [item.text for item in analyses] == CROSS_RHYME_STANZA[:2] + CROSS_RHYME_STANZA[2:]
    assert [item.rhyme_label for item in analyses] == ["x", "x", "x", "x"]

    joined = analyzer.analyze_lines(CROSS_RHYME_STANZA)
    assert [item.rhyme_label for item in joined] == ["a", "b", "a", "b"]


def test_analyze_lines_accepts_sequences_with_none(analyzer):
    analyses = analyzer.analyze_lines([None, "kapu", None])
    assert [item.text for item in analyses] == ["kapu"]
    assert analyzer.analyze_lines(None) == []


def test_module_level_api():
    assert cadentis.analyze_line(HEXAMETER_LINE).verse_type == "+hexameter"
    first, second = cadentis.analyze_lines([HEXAMETER_LINE, PENTAMETER_LINE])
    assert first.is_distichon_part and second.is_distichon_part
    assert cadentis.analyze_rhyme_scheme(CROSS_RHYME_STANZA).scheme_name == "Cross rhyme"
    assert cadentis.classify_rhyme_type("kupa", "kapu") is RhymeType.GOAT


def test_line_analysis_dict(analyzer):
    payload = analyzer.analyze_line(HEXAMETER_LINE).as_dict()
    assert payload["pattern"] == "-UU-UU-----UU--"
    assert payload["form"] == "hexameter"
    assert payload["substitutions"] == []
    assert payload["is_distichon_part"] is False
