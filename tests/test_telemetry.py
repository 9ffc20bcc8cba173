from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest
import structlog
from structlog.testing import capture_logs

from yank_queue.runtime import telemetry


@pytest.fixture(autouse=True)
def restore_configuration() -> Iterator[None]:
    yield
    telemetry.configure()


def test_record_event_emits_structured_line() -> None:
    with capture_logs() as logs:
        telemetry.record_event("queue.test", data={"pending": 2})

    assert logs[0]["event"] == "event::queue.test"
    assert logs[0]["name"] == "queue.test"
    assert logs[0]["pending"] == "2"
    assert logs[0]["log_level"] == "info"


def test_record_event_rejects_unknown_level() -> None:
    with pytest.raises(ValueError):
        telemetry.record_event("queue.test", level="loud")


def test_span_reports_duration_and_metadata() -> None:
    telemetry.configure(level="DEBUG")

    with capture_logs() as logs:
        with telemetry.span("queue::work", component=True, metadata={"size": 3}) as handle:
            handle.add_metadata("status", "ok")

    end = logs[-1]
    assert end["event"] == "span::end"
    assert end["span"] == "queue::work"
    assert end["component"] == "queue::work"
    assert end["size"] == "3"
    assert end["status"] == "ok"
    assert "duration_ms" in end


def test_span_logs_failures_and_reraises() -> None:
    with capture_logs() as logs:
        with pytest.raises(RuntimeError):
            with telemetry.span("queue::boom", component="session"):
                raise RuntimeError("bad state")

    failures = [entry for entry in logs if entry["event"] == "span::fail"]
    assert failures and failures[0]["reason"] == "bad state"
    assert failures[0]["component"] == "session"


def test_configure_rejects_conflicting_arguments() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="development", level="INFO")
    with pytest.raises(ValueError):
        telemetry.configure(preset="loud")


def test_configure_preset_resets_logger_cache() -> None:
    before = telemetry.get_logger("yank_queue.tests")

    telemetry.configure(preset="development")

    assert telemetry.active_preset() == "development"
    assert telemetry.get_logger("yank_queue.tests") is not before
    assert structlog.is_configured()


def test_log_file_stream_is_closed_on_reconfigure(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    log_path = tmp_path / "queue.log"
    monkeypatch.setenv("YANK_QUEUE_LOG_FILE", str(log_path))
    telemetry.configure(level="INFO")
    stream = telemetry._LOG_STREAM
    telemetry.record_event("queue.file")

    monkeypatch.delenv("YANK_QUEUE_LOG_FILE")
    telemetry.configure(level="INFO")

    assert stream is not None and stream.closed
    assert telemetry._LOG_STREAM is None
    assert "event::queue.file" in log_path.read_text(encoding="utf-8")
