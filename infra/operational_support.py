"""
Support diagnostics for the CLI: a per-invocation trace id that is stamped on
every log record, and an append-only JSONL file of structured events
(``analysis.completed``, ``app.crash``) with secrets and e-mail addresses
scrubbed before anything touches disk.
"""
from __future__ import annotations

import json
import logging
import os
import re
import sys
import traceback
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import date, datetime, timezone
from pathlib import Path
from threading import Lock
from typing import Any, Iterator, Mapping

from infra.path import logs_dir
from infra.version import get_app_version

logger = logging.getLogger(__name__)

REDACTED = "<redacted>"
REDACTED_EMAIL = "<redacted-email>"
EVENTS_FILE_NAME = "cpa-events.jsonl"
_MAX_DEPTH = 6

_trace_id: ContextVar[str | None] = ContextVar("cpa_trace_id", default=None)

_SECRET_KEY = re.compile(r"passw(or)?d|token|secret|api[_-]?key|authorization|cookie", re.IGNORECASE)
_SECRET_ASSIGNMENT = re.compile(
    r"(?i)\b(password|token|secret|api[_-]?key|authorization)\b(\s*[:=]\s*)([^\s,;]+)"
)
_EMAIL = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")


# ---------------------------------------------------------------- tracing


def new_trace_id() -> str:
    return f"cpa-{datetime.now(timezone.utc):%Y%m%d%H%M%S}-{uuid.uuid4().hex[:8]}"


def current_trace_id() -> str | None:
    return _trace_id.get()


@contextmanager
def trace_scope(trace_id: str | None = None) -> Iterator[str]:
    """Bind a trace id (a fresh one unless given) for the duration of the block."""
    bound = (trace_id or "").strip() or new_trace_id()
    token = _trace_id.set(bound)
    try:
        yield bound
    finally:
        _trace_id.reset(token)


class TraceIdLogFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_id = current_trace_id() or "-"
        return True


# ---------------------------------------------------------------- scrubbing


def scrub_text(text: str) -> str:
    text = _EMAIL.sub(REDACTED_EMAIL, str(text or ""))
    return _SECRET_ASSIGNMENT.sub(lambda m: f"{m.group(1)}{m.group(2)}{REDACTED}", text)


def scrub(value: Any, _depth: int = 0) -> Any:
    """JSON-safe copy of ``value`` with secret-looking keys and values masked."""
    if _depth >= _MAX_DEPTH:
        return "<max-depth>"
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {
            str(key): REDACTED if _SECRET_KEY.search(str(key)) else scrub(item, _depth + 1)
            for key, item in value.items()
        }
    if isinstance(value, (set, frozenset)):
        value = sorted(value, key=str)
    if isinstance(value, (list, tuple)):
        return [scrub(item, _depth + 1) for item in value]
    return scrub_text(str(value))


# ---------------------------------------------------------------- event log


class SupportEventLog:
    def __init__(self, path: str | Path | None = None) -> None:
        self._path = Path(path) if path is not None else logs_dir() / EVENTS_FILE_NAME
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = Lock()

    @property
    def path(self) -> Path:
        return self._path

    def record(
        self,
        event_type: str,
        message: str,
        *,
        level: str = "INFO",
        trace_id: str | None = None,
        data: Mapping[str, Any] | None = None,
    ) -> str:
        """Append one event and return the trace id it was filed under."""
        trace = trace_id or current_trace_id() or new_trace_id()
        event: dict[str, Any] = {
            "timestamp_utc": datetime.now(timezone.utc).isoformat(),
            "event_type": event_type,
            "level": level.upper(),
            "trace_id": trace,
            "message": scrub_text(message),
            "app_version": get_app_version(),
            "pid": os.getpid(),
        }
        if data:
            event["data"] = scrub(dict(data))

        line = json.dumps(event, ensure_ascii=True, sort_keys=True)
        with self._lock, self._path.open("a", encoding="utf-8") as handle:
            handle.write(line + "\n")
        return trace

    def record_crash(self, exc: BaseException, *, context: str) -> str:
        return self.record(
            "app.crash",
            f"Unhandled exception in {context}: {exc}",
            level="ERROR",
            data={
                "context": context,
                "exception_type": type(exc).__name__,
                "stacktrace": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
            },
        )

    def events(self, *, trace_id: str | None = None, event_type: str | None = None) -> list[dict[str, Any]]:
        if not self._path.exists():
            return []
        found: list[dict[str, Any]] = []
        with self._path.open(encoding="utf-8", errors="ignore") as handle:
            for line in handle:
                if not line.strip():
                    continue
                try:
                    event = json.loads(line)
                except json.JSONDecodeError:
                    logger.warning("Skipping malformed support event in %s", self._path)
                    continue
                if trace_id and event.get("trace_id") != trace_id:
                    continue
                if event_type and event.get("event_type") != event_type:
                    continue
                found.append(event)
        return found


_support_log: SupportEventLog | None = None
_crash_hook_installed = False


def get_support_log() -> SupportEventLog:
    global _support_log
    if _support_log is None:
        _support_log = SupportEventLog()
    return _support_log


def reset_support_log(log: SupportEventLog | None = None) -> None:
    global _support_log
    _support_log = log


def install_crash_hook() -> None:
    """Record uncaught exceptions as ``app.crash`` events, then defer to the previous hook."""
    global _crash_hook_installed
    if _crash_hook_installed:
        return

    previous_hook = sys.excepthook

    def _hook(exc_type: type[BaseException], exc_value: BaseException, exc_tb: Any) -> None:
        try:
            get_support_log().record_crash(exc_value.with_traceback(exc_tb), context="main-thread")
        except OSError:
            logger.exception("Could not record crash event")
        previous_hook(exc_type, exc_value, exc_tb)

    sys.excepthook = _hook
    _crash_hook_installed = True


__all__ = [
    "EVENTS_FILE_NAME",
    "REDACTED",
    "REDACTED_EMAIL",
    "SupportEventLog",
    "TraceIdLogFilter",
    "current_trace_id",
    "get_support_log",
    "install_crash_hook",
    "new_trace_id",
    "reset_support_log",
    "scrub",
    "scrub_text",
    "trace_scope",
]
