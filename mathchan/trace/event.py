"""Trace event construction for evaluation and preview runs."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4


class TraceEventKind(str, Enum):
    """Enumerated trace event kinds."""

    EVALUATE = "evaluate"
    REJECT = "reject"
    RENDER = "render"
    FALLBACK = "fallback"
    SAMPLE = "sample"


def _utc_iso_z_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def new_event(kind: TraceEventKind | str, message: str, *, data: dict | None = None) -> dict:
    """Create a trace event dict with a fresh id and UTC timestamp."""

    return {
        "event_id": uuid4().hex,
        "ts": _utc_iso_z_now(),
        "kind": TraceEventKind(kind).value,
        "message": message,
        "data": data,
    }
