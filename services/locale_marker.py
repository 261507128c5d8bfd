"""
services/locale_marker.py — INSTALLWIZ
=======================================
Persisted locale marker: the UI locale the running session was started
with. It survives a UI reload, so it must be written before any reload is
requested, otherwise the reload re-derives the old locale.

The marker holds the UI form of a locale id (see to_ui_language).
"""
import json
import logging
import os
from pathlib import Path
from typing import Optional

from constants import Locales
from exceptions import MarkerError

logger = logging.getLogger(__name__)


def to_ui_language(locale_id: str) -> str:
    """
    Locale id → UI language name.

        "fr_FR.UTF-8" → "fr-fr"
        "en_US"       → "en-us"
        "de"          → "de"
    """
    return (locale_id or "").split(Locales.UTF8_SUFFIX)[0].replace("_", "-").lower()


def ui_base_language(ui_language: str) -> str:
    """ "pt-br" → "pt" """
    return (ui_language or "").split("-")[0]


class FileLocaleMarker:
    """Marker stored as ``{"ui_locale": "fr-fr"}`` in the user data dir."""

    KEY = "ui_locale"

    def __init__(self, path: Optional[Path] = None):
        if path is None:
            from core.paths import get_user_data_dir
            path = get_user_data_dir() / "ui_locale.json"
        self.path = Path(path)

    def read(self) -> Optional[str]:
        if not self.path.exists():
            return None

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                content = f.read().strip()
            if not content:
                return None
            data = json.loads(content)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable locale marker {self.path}: {e}")
            return None

        value = data.get(self.KEY) if isinstance(data, dict) else None
        return value if isinstance(value, str) and value else None

    def write(self, value: str) -> None:
        """Atomic replace, so a crash never leaves a half-written marker."""
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump({self.KEY: value}, f)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self.path)
        except OSError as e:
            raise MarkerError(f"Cannot write locale marker {self.path}", detail=str(e)) from e

        logger.info(f"Locale marker set to {value}")


class MemoryLocaleMarker:
    """Marker kept in memory (single-run sessions and tests)."""

    def __init__(self, value: Optional[str] = None):
        self._value = value

    def read(self) -> Optional[str]:
        return self._value

    def write(self, value: str) -> None:
        self._value = value


__all__ = ["to_ui_language", "ui_base_language", "FileLocaleMarker", "MemoryLocaleMarker"]
