import pytest

from cadentis.core.models import SyllableWeight
from cadentis.core.weight import classify_weight, count_lengthening_consonants

LONG = SyllableWeight.LONG
SHORT = SyllableWeight.SHORT


@pytest.mark.parametrize(
    "cluster, expected",
    [
        ("", 0),
        ("k", 1),
        ("nyv", 2),
        ("sz", 1),
        ("dzs", 1),
        ("th", 0),
        ("phr", 1),
    ],
)
def test_count_lengthening_consonants(cluster, expected):
    assert count_lengthening_consonants(cluster) == expected


@pytest.mark.parametrize(
    "syllable, following, expected",
    [
        ("tá", "", LONG),
        ("ő", "k", LONG),
        ("ta", "", SHORT),
        ("ta", "p", SHORT),
        ("ta", "sz", SHORT),
        ("ta", "th", SHORT),
        ("tap", "k", LONG),
        ("ta", "pr", LONG),
        ("köny", "v", LONG),
        ("au", "", LONG),
        ("", "", SHORT),
    ],
)
def test_classify_weight(syllable, following, expected):
    assert classify_weight(syllable, following=following) is expected


def test_final_syllable_is_always_long():
    assert classify_weight("a", is_final=True) is LONG
    assert classify_weight("ta", following="", is_final=True) is LONG


def test_weights_carry_morae():
    assert LONG.mora == 2
    assert SHORT.mora == 1
    assert LONG.value == "-"
    assert SHORT.value == "U"
