"""Append-only JSONL trace sinks."""

from __future__ import annotations

import json
from pathlib import Path


class TraceLogger:
    """Append-only JSONL writer; one compact event per line."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._fh = self.path.open("a", encoding="utf-8")

    def append(self, event: dict) -> None:
        line = json.dumps(event, ensure_ascii=False, separators=(",", ":"))
        self._fh.write(line + "\n")

    def close(self) -> None:
        self._fh.flush()
        self._fh.close()

    def __enter__(self) -> "TraceLogger":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class SafeTraceLogger:
    """Best-effort trace logger that never raises to the caller.

    The first failure prints a single ``WARNING:`` line and disables the
    logger for the rest of the run.
    """

    def __init__(self, path: str | Path | None) -> None:
        self._logger: TraceLogger | None = None
        if path is None:
            return
        try:
            self._logger = TraceLogger(path)
        except OSError as exc:
            print(f"WARNING: trace logging disabled: {exc}")

    @property
    def enabled(self) -> bool:
        return self._logger is not None

    def append(self, event: dict) -> None:
        if self._logger is None:
            return
        try:
            self._logger.append(event)
        except (OSError, TypeError, ValueError) as exc:
            print(f"WARNING: trace logging failed: {exc}")
            self.close()

    def close(self) -> None:
        if self._logger is None:
            return
        try:
            self._logger.close()
        except OSError as exc:
            print(f"WARNING: trace logging failed: {exc}")
        self._logger = None
