from __future__ import annotations

import threading

import pytest
from prometheus_client import REGISTRY

from cadentis.app.services.analysis_service import VerseAnalysisService
from cadentis.core import ProsodyAnalyzer, RhymeType

from conftest import CROSS_RHYME_STANZA, HEXAMETER_LINE, PENTAMETER_LINE


def _sample(name: str, **labels: str) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


class ExplodingAnalyzer(ProsodyAnalyzer):
    def analyze_line(self, text):
        raise RuntimeError("scansion failed")


def test_analyze_line_records_telemetry(telemetry):
    service = VerseAnalysisService(telemetry=telemetry)

    analysis = service.analyze_line(HEXAMETER_LINE)
    assert analysis.verse_type == "+hexameter"

    metrics = service.get_latest_telemetry()
    assert metrics["name"] == "analyze_line"
    assert metrics["counters"]["analysis.invoked"] == 1
    assert metrics["counters"]["analysis.completed"] == 1
    assert metrics["counters"]["analysis.gate.bypass"] == 1
    assert "analysis.analyze_line" in metrics["timings"]
    assert metrics["metadata"]["input.line"] == HEXAMETER_LINE
    assert metrics["metadata"]["result.pattern"] == "-UU-UU-----UU--"


def test_requests_increment_prometheus_metrics(telemetry):
    service = VerseAnalysisService(telemetry=telemetry)
    before = _sample("verse_analysis_requests_total", operation="classify_rhyme_type")

    assert service.classify_rhyme_type("kupa", "kapu") is RhymeType.GOAT

    after = _sample("verse_analysis_requests_total", operation="classify_rhyme_type")
    assert after == before + 1
    assert _sample("verse_analysis_request_seconds_count", operation="classify_rhyme_type") >= 1


def test_analyze_lines_post_pass(telemetry):
    service = VerseAnalysisService(telemetry=telemetry)
    analyses = service.analyze_lines("\n".join([HEXAMETER_LINE, PENTAMETER_LINE]))

    assert all(item.is_distichon_part for item in analyses)
    metrics = service.get_latest_telemetry()
    assert metrics["metadata"]["result.lines"] == 2
    assert metrics["metadata"]["result.distichon_lines"] == 2
    assert "analysis.post_pass" in metrics["timings"]


def test_worker_pool_preserves_line_order(telemetry):
    service = VerseAnalysisService(max_workers=4, telemetry=telemetry)
    lines = CROSS_RHYME_STANZA + [HEXAMETER_LINE, PENTAMETER_LINE]

    analyses = service.analyze_lines(lines)

    assert [item.text for item in analyses] == lines
    assert [item.rhyme_label for item in analyses[:4]] == ["a", "b", "a", "b"]
    assert analyses[4].is_distichon_part and analyses[5].is_distichon_part
    assert "analysis.worker_pool" in service.get_latest_telemetry()["timings"]
    assert analyses == VerseAnalysisService().analyze_lines(lines)


def test_rhyme_scheme_request(telemetry):
    service = VerseAnalysisService(telemetry=telemetry)
    result = service.analyze_rhyme_scheme(CROSS_RHYME_STANZA)
    assert result.scheme_name == "Cross rhyme"
    assert service.get_latest_telemetry()["metadata"]["result.pattern"] == "abab"


def test_non_string_inputs_are_coerced(telemetry):
    service = VerseAnalysisService(telemetry=telemetry)
    assert service.analyze_line(None).pattern == ""
    assert service.analyze_line(12345).pattern == ""
    assert service.classify_rhyme_type(None, "ház") is RhymeType.NONE
    assert service.analyze_lines([None, "kapu"])[0].text == "kapu"


def test_failures_are_counted_and_reraised(telemetry):
    service = VerseAnalysisService(analyzer=ExplodingAnalyzer(), telemetry=telemetry)
    before = _sample("verse_analysis_failures_total", operation="analyze_line")

    with pytest.raises(RuntimeError, match="scansion failed"):
        service.analyze_line("kapu")

    assert _sample("verse_analysis_failures_total", operation="analyze_line") == before + 1
    metrics = service.get_latest_telemetry()
    assert metrics["counters"]["analysis.failed"] == 1
    assert "analysis.completed" not in metrics["counters"]


def test_request_gate_times_out_when_saturated(telemetry):
    service = VerseAnalysisService(
        max_concurrent_requests=1,
        request_timeout=0.01,
        telemetry=telemetry,
    )
    release = threading.Event()
    entered = threading.Event()

    def hold_slot() -> None:
        with service._request_slot():
            entered.set()
            release.wait(timeout=5)

    holder = threading.Thread(target=hold_slot)
    holder.start()
    try:
        assert entered.wait(timeout=5)
        with pytest.raises(TimeoutError):
            service.analyze_line("kapu")
        assert service.get_latest_telemetry()["counters"]["analysis.gate.timeout"] == 1
    finally:
        release.set()
        holder.join(timeout=5)

    assert service.analyze_line("kapu").pattern == "U-"
    assert service.get_latest_telemetry()["counters"]["analysis.gate.acquired"] == 1


@pytest.mark.parametrize("value", [None, 0, -3, "many"])
def test_invalid_worker_counts_fall_back_to_serial(value):
    assert VerseAnalysisService(max_workers=value).max_workers == 1
