# infra/config.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from core.exceptions import ValidationError
from core.models import SinkAnchor
from infra.path import default_db_path

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass(frozen=True)
class Settings:
    db_path: Path
    log_level: str = "INFO"
    sink_anchor: SinkAnchor = SinkAnchor.OWN_FINISH

    @property
    def db_url(self) -> str:
        return f"sqlite:///{self.db_path.as_posix()}"

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level, logging.INFO)


def _env_text(name: str) -> str | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return raw.strip()


def load_settings() -> Settings:
    """Read CPA_* environment variables, falling back to per-user defaults."""
    db_path_raw = _env_text("CPA_DB_PATH")
    db_path = Path(db_path_raw).expanduser() if db_path_raw else default_db_path()

    log_level = (_env_text("CPA_LOG_LEVEL") or "INFO").upper()
    if log_level not in _LOG_LEVELS:
        raise ValidationError(f"Unsupported CPA_LOG_LEVEL: {log_level!r}", code="CONFIG_INVALID")

    anchor_raw = (_env_text("CPA_SINK_ANCHOR") or SinkAnchor.OWN_FINISH.value).lower()
    try:
        sink_anchor = SinkAnchor(anchor_raw)
    except ValueError:
        raise ValidationError(
            f"Unsupported CPA_SINK_ANCHOR: {anchor_raw!r}", code="CONFIG_INVALID"
        ) from None

    return Settings(db_path=db_path, log_level=log_level, sink_anchor=sink_anchor)


__all__ = ["Settings", "load_settings"]
