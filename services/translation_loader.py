"""
services/translation_loader.py — INSTALLWIZ
============================================
Fetches the translation table for a locale.

Tables live in core/i18n/<lang>.py as a ``translations`` dict. For
"pt_BR.UTF-8" the loader tries core.i18n.pt_br, then core.i18n.pt. The
base language, or a language without a table, yields an empty mapping,
which means "no translation needed".
"""
import importlib
import logging
import pkgutil
from concurrent.futures import Future
from typing import Dict, Set

from constants import Locales
from core.dispatcher import run_in_background
from exceptions import TranslationError
from services.locale_marker import to_ui_language, ui_base_language

logger = logging.getLogger(__name__)


class ModuleTranslationLoader:

    def __init__(self, package: str = "core.i18n"):
        self.package = package
        self._available = self._discover_languages()

    def __call__(self, locale_id: str) -> Future:
        return self.fetch_translation_bundle(locale_id)

    @property
    def available_languages(self) -> Set[str]:
        return set(self._available)

    def fetch_translation_bundle(self, locale_id: str) -> Future:
        return run_in_background(self.load, locale_id)

    def load(self, locale_id: str) -> Dict[str, str]:
        ui_language = to_ui_language(locale_id)
        base = ui_base_language(ui_language)

        if base == Locales.BASE_LANGUAGE:
            return {}

        for name in dict.fromkeys((ui_language.replace("-", "_"), base)):
            if name in self._available:
                return self._load_module(name)

        logger.info(f"No translation table for {locale_id}")
        return {}

    def _discover_languages(self) -> Set[str]:
        try:
            pkg = importlib.import_module(self.package)
        except ImportError as e:
            logger.error(f"Translation package {self.package} missing: {e}")
            return set()

        languages = {module.name for module in pkgutil.iter_modules(pkg.__path__)}
        logger.debug(f"Discovered translation tables: {sorted(languages)}")
        return languages

    def _load_module(self, name: str) -> Dict[str, str]:
        module_path = f"{self.package}.{name}"
        module = importlib.import_module(module_path)

        translations = getattr(module, "translations", None)
        if not isinstance(translations, dict):
            raise TranslationError(name, f"{module_path} has no 'translations' dict")

        logger.info(f"Loaded {len(translations)} translations from {module_path}")
        return translations


__all__ = ["ModuleTranslationLoader"]
