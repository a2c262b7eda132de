from cadentis.core.distichon import (
    DISTICHON_HEXAMETER,
    DISTICHON_PENTAMETER,
    apply_distichon,
)

from conftest import HEXAMETER_LINE, PANNONIA_LINE, PENTAMETER_LINE


def test_couplet_is_marked(analyzer):
    first, second = analyzer.analyze_lines([HEXAMETER_LINE, PENTAMETER_LINE])
    assert first.is_distichon_part and second.is_distichon_part
    assert first.verse_type == DISTICHON_HEXAMETER
    assert second.verse_type == DISTICHON_PENTAMETER
    assert first.match.display_name == "+hexameter"


def test_lines_keep_their_own_labels_outside_a_couplet(analyzer):
    first, second = analyzer.analyze_lines([PENTAMETER_LINE, HEXAMETER_LINE])
    assert not first.is_distichon_part and not second.is_distichon_part
    assert first.verse_type == "+pentameter"
    assert second.verse_type == "+hexameter"


def test_pairs_do_not_straddle_boundaries(analyzer):
    lines = [PANNONIA_LINE, HEXAMETER_LINE, PENTAMETER_LINE]
    analyses = analyzer.analyze_lines(lines)
    assert [item.is_distichon_part for item in analyses] == [False, False, False]


def test_trailing_odd_line_is_untouched(analyzer):
    lines = [HEXAMETER_LINE, PENTAMETER_LINE, HEXAMETER_LINE]
    analyses = analyzer.analyze_lines(lines)
    assert [item.is_distichon_part for item in analyses] == [True, True, False]
    assert analyses[2].verse_type == "+hexameter"


def test_apply_distichon_does_not_mutate_input(analyzer):
    analyses = [analyzer.analyze_line(HEXAMETER_LINE), analyzer.analyze_line(PENTAMETER_LINE)]
    result = apply_distichon(analyses)
    assert result[0].is_distichon_part
    assert not analyses[0].is_distichon_part
    assert apply_distichon([]) == []
