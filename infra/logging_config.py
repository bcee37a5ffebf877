# infra/logging_config.py
from __future__ import annotations
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from infra.config import Settings, load_settings
from infra.path import logs_dir
from infra.operational_support import TraceIdLogFilter, install_crash_hook

LOG_FILE_NAME = "cpa.log"


def setup_logging(settings: Settings | None = None, *, log_dir: Path | None = None) -> Path:
    """
    Configure root logging for the CLI.
    Logs go to the per-user data directory; the console only shows warnings
    and above so that report output stays readable.
    """
    settings = settings or load_settings()
    log_dir = log_dir or logs_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(settings.log_level_value)
    for handler in list(root.handlers):
        if getattr(handler, "_cpa_owned", False):
            root.removeHandler(handler)
            handler.close()

    trace_filter = TraceIdLogFilter()

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=1_000_000,  # 1 MB per file
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.addFilter(trace_filter)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s [%(levelname)s] trace=%(trace_id)s %(name)s - %(message)s")
    )

    console = logging.StreamHandler()
    console.setLevel(max(settings.log_level_value, logging.WARNING))
    console.addFilter(trace_filter)
    console.setFormatter(logging.Formatter("%(levelname)s [trace=%(trace_id)s]: %(message)s"))

    for handler in (file_handler, console):
        handler._cpa_owned = True  # type: ignore[attr-defined]
        root.addHandler(handler)

    root.debug("Logging initialized. Log file at %s", log_file)
    install_crash_hook()
    return log_file
