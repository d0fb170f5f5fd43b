"""Tests for JSONL trace sinks."""

from __future__ import annotations

import json
from pathlib import Path

from mathchan.trace import SafeTraceLogger, TraceEventKind, TraceLogger, new_event


def test_new_event_shape() -> None:
    event = new_event(TraceEventKind.EVALUATE, "a + b", data={"value": 3.0})

    assert set(event) == {"event_id", "ts", "kind", "message", "data"}
    assert len(event["event_id"]) == 32
    assert event["ts"].endswith("Z")
    assert event["kind"] == "evaluate"
    assert new_event("reject", "x")["data"] is None


def test_trace_logger_appends_jsonl(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "trace.jsonl"

    with TraceLogger(path) as logger:
        logger.append(new_event(TraceEventKind.RENDER, "first"))
    with TraceLogger(path) as logger:
        logger.append(new_event(TraceEventKind.FALLBACK, "second"))

    lines = path.read_text(encoding="utf-8").splitlines()
    assert [json.loads(line)["message"] for line in lines] == ["first", "second"]


def test_safe_logger_disabled_without_path() -> None:
    tracer = SafeTraceLogger(None)

    assert tracer.enabled is False
    tracer.append(new_event(TraceEventKind.EVALUATE, "ignored"))
    tracer.close()


def test_safe_logger_warns_when_path_unusable(tmp_path: Path, capsys) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")

    tracer = SafeTraceLogger(blocker / "trace.jsonl")

    assert tracer.enabled is False
    assert "WARNING: trace logging disabled" in capsys.readouterr().out


def test_safe_logger_disables_after_write_failure(tmp_path: Path, capsys) -> None:
    path = tmp_path / "trace.jsonl"
    tracer = SafeTraceLogger(path)

    tracer.append({"bad": object()})

    assert tracer.enabled is False
    assert "WARNING: trace logging failed" in capsys.readouterr().out
    tracer.append(new_event(TraceEventKind.EVALUATE, "after failure"))
    assert path.read_text(encoding="utf-8") == ""
