"""
core/paths.py — INSTALLWIZ
===========================
Single source of truth for every path used by the application.

  - BASE_DIR / resource_path() → read-only application files (config data)
  - get_user_data_dir() → writable per-user data (marker, logs)
      Linux : $XDG_DATA_HOME/INSTALLWIZ/ or ~/.local/share/INSTALLWIZ/

The INSTALLWIZ_DATA_DIR environment variable overrides the user data dir
(used by tests and by live images running from a read-only home).
"""

import os
from pathlib import Path


APP_NAME = "INSTALLWIZ"

BASE_DIR = Path(__file__).resolve().parent.parent


def resource_path(*parts: str) -> str:
    """
    Full path of a bundled resource.

        resource_path("config", "languages.json")
        → "/path/to/app/config/languages.json"
    """
    return str(BASE_DIR.joinpath(*parts))


def config_path(filename: str = "") -> Path:
    p = BASE_DIR / "config"
    return p / filename if filename else p


def get_user_data_dir() -> Path:
    """Writable user data dir, created on demand."""
    override = os.getenv("INSTALLWIZ_DATA_DIR")
    if override:
        user_dir = Path(override)
    else:
        xdg = os.getenv("XDG_DATA_HOME")
        base = Path(xdg) if xdg else Path.home() / ".local" / "share"
        user_dir = base / APP_NAME

    user_dir.mkdir(parents=True, exist_ok=True)
    return user_dir


def logs_path(filename: str = "") -> Path:
    p = get_user_data_dir() / "logs"
    p.mkdir(parents=True, exist_ok=True)
    return p / filename if filename else p
