import pytest

from cadentis.core.meter import build_meter_pattern

from conftest import HEXAMETER_LINE, PANNONIA_LINE, PENTAMETER_LINE


def test_hexameter_line_pattern():
    line = build_meter_pattern(HEXAMETER_LINE)
    assert line.pattern == "-UU-UU-----UU--"
    assert line.syllable_count == 15


def test_pannonia_line_pattern():
    line = build_meter_pattern(PANNONIA_LINE)
    assert line.pattern == "---UUU-UU-UU-"
    assert line.syllable_count == 13


def test_pentameter_line_pattern():
    line = build_meter_pattern(PENTAMETER_LINE)
    assert line.pattern == "-UU-UU--UU-UU-"
    assert line.syllable_count == 14


@pytest.mark.parametrize(
    "text", [HEXAMETER_LINE, PANNONIA_LINE, PENTAMETER_LINE, "a", "kapu", "Ég a napmelegtől a kopár szík sarja"]
)
def test_pattern_invariants(text):
    line = build_meter_pattern(text)
    assert len(line.pattern) == len(line.syllables) == line.syllable_count
    assert line.mora_count == sum(1 if symbol == "U" else 2 for symbol in line.pattern)
    assert line.pattern.endswith("-")


@pytest.mark.parametrize("text", [None, "", "   ", "!?"])
def test_empty_input_gives_empty_pattern(text):
    line = build_meter_pattern(text)
    assert line.pattern == ""
    assert line.syllable_count == 0
    assert line.mora_count == 0


def test_text_is_stripped_and_dict_is_json_ready():
    line = build_meter_pattern("  kapu  ")
    assert line.text == "kapu"
    assert line.as_dict() == {
        "text": "kapu",
        "syllables": ["ka", "pu"],
        "pattern": "U-",
        "syllable_count": 2,
        "mora_count": 3,
    }
