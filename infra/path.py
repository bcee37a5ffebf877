# infra/path.py
from __future__ import annotations
import os
import sys
from pathlib import Path

APP_DIR_NAME = "critical-path-analyzer"
DB_FILE_NAME = "critical_path.db"


def _platform_data_root() -> Path:
    if sys.platform.startswith("win"):
        return Path(os.getenv("APPDATA") or Path.home() / "AppData" / "Roaming")
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"
    return Path(os.getenv("XDG_DATA_HOME") or Path.home() / ".local" / "share")


def user_data_dir() -> Path:
    """
    Per-user directory holding the database, logs and support events:
    %APPDATA%, ~/Library/Application Support or $XDG_DATA_HOME, plus the app folder.
    Falls back to ~/.critical-path-analyzer when the platform root is not writable.
    """
    path = _platform_data_root() / APP_DIR_NAME
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError:
        path = Path.home() / f".{APP_DIR_NAME}"
        path.mkdir(parents=True, exist_ok=True)
    return path


def logs_dir() -> Path:
    path = user_data_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


def default_db_path() -> Path:
    return user_data_dir() / DB_FILE_NAME


__all__ = ["APP_DIR_NAME", "DB_FILE_NAME", "default_db_path", "logs_dir", "user_data_dir"]
