import json

from cadentis.app.services.result_formatter import VerseResultFormatter
from cadentis.core import LineAnalysis, RhymeType, build_meter_pattern, match_verse_form
from cadentis.core.rhyme_scheme import analyze_rhyme_scheme

from conftest import CROSS_RHYME_STANZA, HEXAMETER_LINE, PENTAMETER_LINE


def test_empty_analysis_message():
    assert VerseResultFormatter().format_analysis([]) == "No verse lines to analyse."


def test_text_report_lists_lines_and_scheme(analyzer):
    formatter = VerseResultFormatter()
    lines = [HEXAMETER_LINE, PENTAMETER_LINE]
    report = formatter.format_analysis(analyzer.analyze_lines(lines), analyze_rhyme_scheme(lines))

    assert report.startswith(f"1. {HEXAMETER_LINE}")
    assert "Pattern: -UU-UU-----UU-- | Morae: 24" in report
    assert "Form: distichon (hexameter)" in report
    assert "Form: distichon (pentameter)" in report
    assert "Syllables: ed·di·gi·tá" in report
    assert "Rhyme scheme: xx (Unknown rhyme form)" in report


def test_approximate_forms_show_similarity_and_substitutions():
    match = match_verse_form("-UU-UU-UU-UU-UUU-")
    analysis = LineAnalysis(
        line=build_meter_pattern("kapu"),
        match=match,
        verse_type=match.display_name,
    )
    text = VerseResultFormatter().format_line(analysis, 3)

    assert text.startswith("3. kapu")
    assert "Form: ~hexameter | similarity 0.94" in text
    assert "• Short instead of long at position 16" in text


def test_multi_stanza_scheme_lists_each_stanza():
    scheme = analyze_rhyme_scheme(CROSS_RHYME_STANZA + [""] + CROSS_RHYME_STANZA[:2])
    text = VerseResultFormatter().format_scheme(scheme)
    assert "Stanza 1: abab (Cross rhyme)" in text
    assert "Stanza 2: xx (Unknown rhyme form)" in text


def test_payload_is_json_serialisable(analyzer):
    formatter = VerseResultFormatter()
    analyses = analyzer.analyze_lines(CROSS_RHYME_STANZA)
    payload = formatter.as_dict(analyses, analyze_rhyme_scheme(CROSS_RHYME_STANZA))

    decoded = json.loads(json.dumps(payload, ensure_ascii=False))
    assert [line["rhyme_label"] for line in decoded["lines"]] == ["a", "b", "a", "b"]
    assert decoded["rhyme_scheme"]["scheme_name"] == "Cross rhyme"


def test_rhyme_type_rendering():
    formatter = VerseResultFormatter()
    assert formatter.format_rhyme_type("kupa", "kapu", RhymeType.GOAT) == (
        "'kupa' / 'kapu': goat rhyme (kecskerím)"
    )
    assert formatter.rhyme_type_as_dict("kupa", "kapu", RhymeType.GOAT)["rhyme_type"] == "goat"
