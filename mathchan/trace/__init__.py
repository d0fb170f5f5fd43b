"""Trace logging helpers for expression evaluation and preview."""

from mathchan.trace.event import TraceEventKind, new_event
from mathchan.trace.logger import SafeTraceLogger, TraceLogger

__all__ = ["SafeTraceLogger", "TraceEventKind", "TraceLogger", "new_event"]
