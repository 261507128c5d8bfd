"""
services/localization_backend.py — INSTALLWIZ
==============================================
Backend localization service: the source of the language catalog and the
place where the chosen language and locale are applied.

Setters return a Future that fails with BackendError on rejection; callers
surface the failure and never retry on their own.

SystemLocalizationBackend reads the catalog from config/languages.json and
applies the locale with ``localectl set-locale``.
"""
from __future__ import annotations

import json
import logging
import subprocess
import threading
from abc import ABC, abstractmethod
from concurrent.futures import Future
from pathlib import Path
from typing import Dict, List, Optional

from core.dispatcher import run_in_background
from exceptions import BackendError, BackendUnavailableError, CatalogError

logger = logging.getLogger(__name__)


class LocalizationBackend(ABC):

    # ── Catalog ──────────────────────────────────────────────────────────────

    @abstractmethod
    def get_languages(self) -> List[str]:
        """Language ids."""

    @abstractmethod
    def get_language_data(self, language_id: str) -> Dict[str, str]:
        """{"language-id", "native-name", "english-name"}"""

    @abstractmethod
    def get_locales(self, language_id: str) -> List[str]:
        """Locale ids of one language."""

    @abstractmethod
    def get_locale_data(self, locale_id: str) -> Dict[str, str]:
        """{"locale-id", "native-name", "language-id"}"""

    @abstractmethod
    def get_common_locales(self) -> List[str]:
        """Locale ids of the shortcut group."""

    # ── Apply ────────────────────────────────────────────────────────────────

    @abstractmethod
    def set_language(self, language: str) -> Future:
        """Set the installation language (a locale id)."""

    @abstractmethod
    def set_locale(self, locale: str) -> Future:
        """Set the active locale of the running system."""


class SystemLocalizationBackend(LocalizationBackend):

    def __init__(self, languages_file: Optional[Path] = None, localectl: Optional[str] = None):
        from core.config import config, get_languages_file

        self.languages_file = Path(languages_file) if languages_file else get_languages_file()
        self.localectl = localectl or config.get("INSTALLWIZ_LOCALECTL", default="localectl")

        self._lock = threading.Lock()
        self._language: Optional[str] = None
        self._locale: Optional[str] = None
        self._data = self._load(self.languages_file)
        self._languages = {item["language-id"]: item for item in self._data["languages"]}
        self._locales = {
            loc["locale-id"]: {**loc, "language-id": item["language-id"]}
            for item in self._data["languages"]
            for loc in item.get("locales", [])
        }

    @staticmethod
    def _load(path: Path) -> dict:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogError(f"Cannot read language data {path}", detail=str(e)) from e

        if not isinstance(data, dict) or not isinstance(data.get("languages"), list):
            raise CatalogError(f"{path} has no 'languages' list")

        logger.info(f"Loaded {len(data['languages'])} languages from {path}")
        return data

    # ── Catalog ──────────────────────────────────────────────────────────────

    def get_languages(self) -> List[str]:
        return list(self._languages)

    def get_language_data(self, language_id: str) -> Dict[str, str]:
        item = self._languages[language_id]
        return {
            "language-id": item["language-id"],
            "native-name": item["native-name"],
            "english-name": item["english-name"],
        }

    def get_locales(self, language_id: str) -> List[str]:
        return [loc["locale-id"] for loc in self._languages[language_id].get("locales", [])]

    def get_locale_data(self, locale_id: str) -> Dict[str, str]:
        return dict(self._locales[locale_id])

    def get_common_locales(self) -> List[str]:
        from core.config import get_common_locales
        return list(self._data.get("common-locales") or get_common_locales())

    # ── Apply ────────────────────────────────────────────────────────────────

    @property
    def language(self) -> Optional[str]:
        return self._language

    @property
    def locale(self) -> Optional[str]:
        return self._locale

    def set_language(self, language: str) -> Future:
        return run_in_background(self._set_language_sync, language)

    def set_locale(self, locale: str) -> Future:
        return run_in_background(self._set_locale_sync, locale)

    def _set_language_sync(self, language: str) -> None:
        if language not in self._locales:
            raise BackendError(f"Unsupported language {language}", operation="set_language")
        with self._lock:
            self._language = language
        logger.info(f"Installation language set to {language}")

    def _set_locale_sync(self, locale: str) -> None:
        argv = [self.localectl, "set-locale", f"LANG={locale}"]
        try:
            proc = subprocess.run(argv, capture_output=True, text=True, timeout=30, check=False)
        except FileNotFoundError as e:
            raise BackendUnavailableError(
                f"{self.localectl} not found", operation="set_locale",
            ) from e
        except subprocess.TimeoutExpired as e:
            raise BackendError(f"{self.localectl} timed out", operation="set_locale") from e

        if proc.returncode != 0:
            raise BackendError(
                f"Failed to set locale {locale}",
                operation="set_locale",
                detail=proc.stderr.strip(),
            )

        with self._lock:
            self._locale = locale
        logger.info(f"System locale set to {locale}")


__all__ = ["LocalizationBackend", "SystemLocalizationBackend"]
