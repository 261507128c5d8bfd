import logging
from typing import Dict, Mapping, Optional

from PySide6.QtCore import QObject, Signal

from constants import Locales
from core.singleton import QObjectSingletonMixin
from exceptions import TranslationError

logger = logging.getLogger(__name__)


class TranslationManager(QObject, QObjectSingletonMixin):
    """
    Process-wide active translation table.

    Holds a flat ``message key -> translated string`` mapping. An empty table
    means the base language is active and every key translates to itself.
    Only the locale step writes it; every open view listens to
    ``language_changed`` and re-renders.
    """

    language_changed = Signal()

    def __init__(self):
        super().__init__()
        self._current_language = Locales.BASE_LANGUAGE
        self._translations: Dict[str, str] = {}

    # ==============================
    # Public API
    # ==============================

    def install(self, bundle: Mapping[str, str], language: str) -> None:
        """Replace the active table with ``bundle`` and broadcast the change."""
        translations = self._validate(bundle, language)

        self._translations = translations
        self._current_language = language
        logger.info(f"Installed {len(translations)} translations for {language}")
        self.language_changed.emit()

    def reset(self, language: str = Locales.BASE_LANGUAGE) -> None:
        """Drop the active table. Does not emit ``language_changed``."""
        self._translations = {}
        self._current_language = language
        logger.info(f"Translations reset ({language} needs none)")

    def translate(self, key: str, fallback: Optional[str] = None) -> str:
        if not key:
            return fallback or ""

        value = self._translations.get(key)

        if value is not None:
            return value

        if self._translations:
            logger.debug(f"Missing translation key: {key}")
        return fallback if fallback is not None else key

    def get_current_language(self) -> str:
        return self._current_language

    def has_translation(self) -> bool:
        return bool(self._translations)

    # ==============================
    # Internal Logic
    # ==============================

    @staticmethod
    def _validate(bundle: Mapping[str, str], language: str) -> Dict[str, str]:
        if not isinstance(bundle, Mapping):
            raise TranslationError(language, f"expected a mapping, got {type(bundle).__name__}")

        bad = [k for k, v in bundle.items() if not isinstance(k, str) or not isinstance(v, str)]
        if bad:
            raise TranslationError(language, f"non-string entries: {bad[:5]!r}")

        return dict(bundle)


# ==============================
# Convenience wrappers
# ==============================

def get_translation_manager() -> TranslationManager:
    return TranslationManager.get_instance()


def translate(key: str, fallback: Optional[str] = None) -> str:
    return TranslationManager.get_instance().translate(key, fallback)


def get_current_language() -> str:
    return TranslationManager.get_instance().get_current_language()


def t(key: str, fallback: Optional[str] = None) -> str:
    return translate(key, fallback)
