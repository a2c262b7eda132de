import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from cadentis.core import ProsodyAnalyzer
from cadentis.utils.telemetry import StructuredTelemetry

HEXAMETER_LINE = "Eddig Itália földjén termettek csak a könyvek"
PANNONIA_LINE = "S most Pannónia is ontja a szép dalokat"
PENTAMETER_LINE = "Szellemem egyre dicsőbb, s általa híres e föld"

CROSS_RHYME_STANZA = [
    "Fent az égen süt a nap",
    "Zöld a fű és tág a rét",
    "Aki kér, az végre kap",
    "Boldog, aki élt a lét",
]


class FakeClock:
    """Deterministic clock used to drive telemetry timers in tests."""

    def __init__(self, step: float = 0.01) -> None:
        self._current = 0.0
        self._step = step

    def __call__(self) -> float:
        value = self._current
        self._current += self._step
        return value


@pytest.fixture
def analyzer() -> ProsodyAnalyzer:
    return ProsodyAnalyzer()


@pytest.fixture
def telemetry() -> StructuredTelemetry:
    return StructuredTelemetry(time_fn=FakeClock())
