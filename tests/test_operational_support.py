from __future__ import annotations

import json
import logging
import sys

from infra import operational_support
from infra.logging_config import LOG_FILE_NAME, setup_logging
from infra.config import Settings
from infra.operational_support import (
    REDACTED,
    REDACTED_EMAIL,
    SupportEventLog,
    TraceIdLogFilter,
    current_trace_id,
    get_support_log,
    scrub,
    scrub_text,
    trace_scope,
)


def test_record_writes_scrubbed_event_under_the_bound_trace(tmp_path):
    log = SupportEventLog(tmp_path / "events.jsonl")

    with trace_scope("cpa-test-123"):
        trace_id = log.record(
            "analysis.completed",
            "token=abc123 alice@example.com",
            data={
                "password": "StrongPass123",
                "contact": "alice@example.com",
                "nested": {"api_token": "secret-value"},
                "tasks": 3,
            },
        )

    assert trace_id == "cpa-test-123"
    rows = log.path.read_text(encoding="utf-8").splitlines()
    assert len(rows) == 1
    event = json.loads(rows[0])
    assert event["trace_id"] == "cpa-test-123"
    assert event["event_type"] == "analysis.completed"
    assert event["level"] == "INFO"
    assert "abc123" not in event["message"]
    assert "alice@example.com" not in event["message"]
    assert event["data"]["password"] == REDACTED
    assert event["data"]["nested"]["api_token"] == REDACTED
    assert event["data"]["contact"] == REDACTED_EMAIL
    assert event["data"]["tasks"] == 3


def test_record_without_bound_trace_makes_a_fresh_one(tmp_path):
    log = SupportEventLog(tmp_path / "events.jsonl")
    trace_id = log.record("a", "one")
    assert trace_id.startswith("cpa-")
    assert "data" not in log.events()[0]


def test_record_crash_keeps_type_and_stacktrace(tmp_path):
    log = SupportEventLog(tmp_path / "events.jsonl")

    try:
        raise RuntimeError("token=bad-token")
    except RuntimeError as exc:
        trace_id = log.record_crash(exc, context="unit-test")

    events = log.events(trace_id=trace_id)
    assert len(events) == 1
    assert events[0]["event_type"] == "app.crash"
    assert events[0]["level"] == "ERROR"
    assert "bad-token" not in events[0]["message"]
    assert events[0]["data"]["exception_type"] == "RuntimeError"
    assert events[0]["data"]["context"] == "unit-test"
    assert "RuntimeError" in events[0]["data"]["stacktrace"]


def test_events_filter_and_skip_garbage(tmp_path):
    log = SupportEventLog(tmp_path / "events.jsonl")
    log.record("a", "one", trace_id="t-1")
    with log.path.open("a", encoding="utf-8") as handle:
        handle.write("not json\n")
    log.record("b", "two", trace_id="t-2")
    log.record("a", "three", trace_id="t-2")

    assert [e["message"] for e in log.events()] == ["one", "two", "three"]
    assert [e["message"] for e in log.events(trace_id="t-2")] == ["two", "three"]
    assert [e["message"] for e in log.events(event_type="a")] == ["one", "three"]
    assert log.events(trace_id="t-2", event_type="a")[0]["message"] == "three"


def test_events_on_missing_file_is_empty(tmp_path):
    assert SupportEventLog(tmp_path / "nested" / "events.jsonl").events() == []


def test_scrub_masks_keys_and_text():
    assert scrub_text("password: hunter2, ok") == "password: <redacted>, ok"
    assert scrub_text("mail bob@corp.io") == f"mail {REDACTED_EMAIL}"

    cleaned = scrub({"Authorization": "Bearer x", "items": ({"secret": 1}, 2), "compass": "north"})
    assert cleaned == {"Authorization": REDACTED, "items": [{"secret": REDACTED}, 2], "compass": "north"}


def test_trace_id_is_bound_only_inside_the_block():
    assert current_trace_id() is None
    with trace_scope() as trace_id:
        assert trace_id.startswith("cpa-")
        assert current_trace_id() == trace_id
        with trace_scope("inner"):
            assert current_trace_id() == "inner"
        assert current_trace_id() == trace_id
    assert current_trace_id() is None


def test_trace_filter_stamps_records():
    outside = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
    TraceIdLogFilter().filter(outside)
    assert outside.trace_id == "-"

    record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
    with trace_scope("cpa-filter"):
        TraceIdLogFilter().filter(record)
    assert record.trace_id == "cpa-filter"


def test_crash_hook_records_then_defers(monkeypatch):
    seen = []
    monkeypatch.setattr(sys, "excepthook", lambda *exc_info: seen.append(exc_info[0]))
    monkeypatch.setattr(operational_support, "_crash_hook_installed", False)

    operational_support.install_crash_hook()
    try:
        raise ValueError("boom")
    except ValueError as exc:
        sys.excepthook(type(exc), exc, exc.__traceback__)

    assert seen == [ValueError]
    crashes = get_support_log().events(event_type="app.crash")
    assert crashes and crashes[-1]["data"]["exception_type"] == "ValueError"


def test_setup_logging_writes_to_log_dir(tmp_path):
    root = logging.getLogger()
    level = root.level
    try:
        log_file = setup_logging(Settings(db_path=tmp_path / "x.db", log_level="DEBUG"), log_dir=tmp_path / "logs")
        with trace_scope("cpa-logged"):
            logging.getLogger("cpa.test").info("hello from the test")
        for handler in root.handlers:
            handler.flush()

        assert log_file == tmp_path / "logs" / LOG_FILE_NAME
        text = log_file.read_text(encoding="utf-8")
        assert "hello from the test" in text
        assert "trace=cpa-logged" in text
        assert sum(1 for h in root.handlers if getattr(h, "_cpa_owned", False)) == 2
    finally:
        for handler in list(root.handlers):
            if getattr(handler, "_cpa_owned", False):
                root.removeHandler(handler)
                handler.close()
        root.setLevel(level)
