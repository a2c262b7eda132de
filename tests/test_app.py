import logging

from cadentis.app.app import CadentisApp
from cadentis.core import DEFAULT_CACHE_SIZE
from cadentis.utils.logging_config import resolve_level

from conftest import CROSS_RHYME_STANZA, HEXAMETER_LINE, PENTAMETER_LINE


def test_environment_configures_the_service():
    app = CadentisApp(
        environ={
            "CADENTIS_MAX_WORKERS": "3",
            "CADENTIS_MAX_CONCURRENT": "2",
            "CADENTIS_REQUEST_TIMEOUT": "1.5",
            "CADENTIS_CACHE_SIZE": "16",
        }
    )
    assert app.config == {
        "cache_size": 16,
        "max_workers": 3,
        "max_concurrent_requests": 2,
        "request_timeout": 1.5,
    }
    assert app.service.max_workers == 3
    assert app.analyzer._max_cache_entries == 16


def test_arguments_override_environment_and_bad_values_are_ignored():
    app = CadentisApp(
        max_workers=1,
        environ={"CADENTIS_MAX_WORKERS": "8", "CADENTIS_CACHE_SIZE": "lots"},
    )
    assert app.service.max_workers == 1
    assert app.config["cache_size"] == DEFAULT_CACHE_SIZE


def test_analyze_poem_and_render():
    app = CadentisApp(environ={})
    analyses, scheme = app.analyze_poem("\n".join(CROSS_RHYME_STANZA))
    assert len(analyses) == 4
    assert scheme.pattern == ["a", "b", "a", "b"]

    report = app.render_report("\n".join([HEXAMETER_LINE, PENTAMETER_LINE]))
    assert "distichon (hexameter)" in report
    payload = app.render_payload(HEXAMETER_LINE)
    assert payload["lines"][0]["form"] == "hexameter"


def test_log_telemetry_listener_emits_records(caplog):
    caplog.set_level(logging.INFO, logger="cadentis.utils.telemetry")
    app = CadentisApp(log_telemetry=True, environ={})
    app.analyze_line("kapu")
    assert any("Telemetry trace_started: analyze_line" in record.message for record in caplog.records)


def test_resolve_level():
    assert resolve_level(None) == logging.INFO
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level("10") == 10
    assert resolve_level("nonsense") == logging.INFO


def test_non_positive_environment_values_fall_back_to_defaults():
    app = CadentisApp(
        environ={
            "CADENTIS_CACHE_SIZE": "-5",
            "CADENTIS_MAX_WORKERS": "0",
            "CADENTIS_REQUEST_TIMEOUT": "-1",
        }
    )
    assert app.config["cache_size"] == DEFAULT_CACHE_SIZE
    assert app.config["max_workers"] is None
    assert app.config["request_timeout"] is None
    assert app.analyzer._max_cache_entries == DEFAULT_CACHE_SIZE
    assert app.service.max_workers == 1
