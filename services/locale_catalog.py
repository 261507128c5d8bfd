"""
services/locale_catalog.py — INSTALLWIZ
========================================
Read-only index of every known language and its locales.

    catalog = LocaleCatalog.from_backend(backend)
    catalog.lookup("fr_FR.UTF-8")      → Locale | None
    catalog.search("fran")             → [LocaleGroup, ...] | NO_RESULTS

Search matches the group label "{native name} ({english name})"
case-insensitively; a matching group shows all of its locales. Groups come
sorted by language id. Without a filter the list starts with the common
languages shortcut group.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from constants import Locales, MessageKeys
from exceptions import CatalogError, LocaleNotFoundError

logger = logging.getLogger(__name__)

COMMON_GROUP_ID = "common-languages"


@dataclass(frozen=True)
class Language:
    language_id: str
    native_name: str
    english_name: str

    @property
    def label(self) -> str:
        return f"{self.native_name} ({self.english_name})"


@dataclass(frozen=True)
class Locale:
    locale_id: str
    native_name: str
    language_id: str

    @property
    def display_key(self) -> str:
        """Locale id without the encoding suffix ("fr_FR.UTF-8" → "fr_FR")."""
        return self.locale_id.split(Locales.UTF8_SUFFIX)[0]


@dataclass(frozen=True)
class LanguageEntry:
    language: Language
    locales: Tuple[Locale, ...]


@dataclass(frozen=True)
class LocaleGroup:
    group_id: str
    label: str
    locales: Tuple[Locale, ...]
    is_common: bool = False


class NoResults:
    """Marker returned by search() when a filter matches no group."""

    _instance: Optional["NoResults"] = None
    label = MessageKeys.NO_RESULTS

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_RESULTS"


NO_RESULTS = NoResults()

SearchResult = Union[List[LocaleGroup], NoResults]


class LocaleCatalog:

    def __init__(
        self,
        entries: Iterable[LanguageEntry],
        common_locales: Sequence[str] = (),
        translate=None,
    ):
        self._entries: Dict[str, LanguageEntry] = {}
        seen: Dict[str, str] = {}

        for entry in entries:
            language_id = entry.language.language_id
            if language_id in self._entries:
                raise CatalogError(f"Duplicate language '{language_id}'")

            for locale in entry.locales:
                if locale.language_id != language_id:
                    raise CatalogError(
                        f"Locale '{locale.locale_id}' filed under '{language_id}' "
                        f"but belongs to '{locale.language_id}'"
                    )
                if locale.locale_id in seen:
                    raise CatalogError(
                        f"Locale '{locale.locale_id}' listed under both "
                        f"'{seen[locale.locale_id]}' and '{language_id}'"
                    )
                seen[locale.locale_id] = language_id

            self._entries[language_id] = entry

        self._common_locales: Tuple[str, ...] = tuple(common_locales)
        self._translate = translate

    # ==============================
    # Construction
    # ==============================

    @classmethod
    def from_mapping(cls, data: Mapping, common_locales: Optional[Sequence[str]] = None, **kwargs) -> "LocaleCatalog":
        """
        Build from the JSON layout of config/languages.json:

            {"common-locales": [...],
             "languages": [{"language-id", "native-name", "english-name",
                            "locales": [{"locale-id", "native-name"}]}]}
        """
        try:
            entries = [
                _entry_from_record(
                    item,
                    [(loc["locale-id"], loc["native-name"]) for loc in item.get("locales", [])],
                )
                for item in data["languages"]
            ]
        except (KeyError, TypeError) as e:
            raise CatalogError("Malformed language data", detail=repr(e)) from e

        if common_locales is None:
            common_locales = data.get("common-locales", Locales.COMMON)
        return cls(entries, common_locales, **kwargs)

    @classmethod
    def from_backend(cls, backend, common_locales: Optional[Sequence[str]] = None, **kwargs) -> "LocaleCatalog":
        """Query a LocalizationBackend for every language and locale."""
        entries = []
        for language_id in backend.get_languages():
            record = backend.get_language_data(language_id)
            locales = []
            for locale_id in backend.get_locales(language_id):
                locale_record = backend.get_locale_data(locale_id)
                locales.append((locale_record["locale-id"], locale_record["native-name"]))
            entries.append(_entry_from_record(record, locales))

        if common_locales is None:
            common_locales = backend.get_common_locales()
        return cls(entries, common_locales, **kwargs)

    # ==============================
    # Read access
    # ==============================

    @property
    def common_locales(self) -> Tuple[str, ...]:
        return self._common_locales

    def languages(self) -> Iterator[Language]:
        for language_id in sorted(self._entries):
            yield self._entries[language_id].language

    def locales(self) -> Iterator[Locale]:
        for language_id in sorted(self._entries):
            yield from self._entries[language_id].locales

    def entry(self, language_id: str) -> Optional[LanguageEntry]:
        return self._entries.get(language_id)

    def language_of(self, locale_id: str) -> Optional[Language]:
        locale = self._find(locale_id)
        return self._entries[locale.language_id].language if locale else None

    def __contains__(self, locale_id: object) -> bool:
        return isinstance(locale_id, str) and self._find(locale_id) is not None

    def __len__(self) -> int:
        return len(self._entries)

    def lookup(self, locale_id: str) -> Optional[Locale]:
        """Locale with the given id, or None (logged, never raised)."""
        locale = self._find(locale_id)
        if locale is None:
            logger.warning(str(LocaleNotFoundError(locale_id)))
        return locale

    def search(self, filter_text: str = "") -> SearchResult:
        filter_text = filter_text or ""
        needle = filter_text.lower()
        groups: List[LocaleGroup] = []

        if not filter_text:
            common = tuple(
                locale
                for locale in (self.lookup(locale_id) for locale_id in self._common_locales)
                if locale is not None
            )
            groups.append(LocaleGroup(
                group_id=COMMON_GROUP_ID,
                label=self._t(MessageKeys.COMMON_LANGUAGES),
                locales=common,
                is_common=True,
            ))

        for language_id in sorted(self._entries):
            entry = self._entries[language_id]
            label = entry.language.label
            if not filter_text or needle in label.lower():
                groups.append(LocaleGroup(
                    group_id=language_id,
                    label=label,
                    locales=entry.locales,
                ))

        if filter_text and not groups:
            return NO_RESULTS
        return groups

    # ==============================
    # Internal
    # ==============================

    def _find(self, locale_id: str) -> Optional[Locale]:
        for entry in self._entries.values():
            for locale in entry.locales:
                if locale.locale_id == locale_id:
                    return locale
        return None

    def _t(self, key: str) -> str:
        if self._translate is not None:
            return self._translate(key)
        from core.translator import translate
        return translate(key)


def _entry_from_record(record: Mapping, locales: Iterable[Tuple[str, str]]) -> LanguageEntry:
    language = Language(
        language_id=record["language-id"],
        native_name=record["native-name"],
        english_name=record["english-name"],
    )
    return LanguageEntry(
        language=language,
        locales=tuple(
            Locale(locale_id=locale_id, native_name=native_name, language_id=language.language_id)
            for locale_id, native_name in locales
        ),
    )


__all__ = [
    "Language",
    "Locale",
    "LanguageEntry",
    "LocaleGroup",
    "LocaleCatalog",
    "NoResults",
    "NO_RESULTS",
    "COMMON_GROUP_ID",
]
