"""
tests/test_locale_catalog.py
============================
Lookup and search over the language catalog — pure logic.
"""
import logging

import pytest

from exceptions import CatalogError
from services.locale_catalog import (
    COMMON_GROUP_ID,
    NO_RESULTS,
    Language,
    LanguageEntry,
    Locale,
    LocaleCatalog,
)


# ── lookup ────────────────────────────────────────────────────────────────────

class TestLookup:

    def test_found(self, catalog):
        locale = catalog.lookup("de_AT.UTF-8")
        assert locale == Locale("de_AT.UTF-8", "Deutsch (Österreich)", "de")

    def test_miss_returns_none_and_warns(self, catalog, caplog):
        with caplog.at_level(logging.WARNING, logger="services.locale_catalog"):
            assert catalog.lookup("xx_XX.UTF-8") is None
        assert "xx_XX.UTF-8" in caplog.text

    def test_contains_and_language_of(self, catalog):
        assert "fr_CA.UTF-8" in catalog
        assert "fr_CA" not in catalog
        assert catalog.language_of("fr_CA.UTF-8").english_name == "French"
        assert catalog.language_of("nope") is None

    def test_display_key_strips_encoding(self, catalog):
        assert catalog.lookup("cs_CZ.UTF-8").display_key == "cs_CZ"


# ── search ────────────────────────────────────────────────────────────────────

class TestSearch:

    def test_empty_filter_starts_with_common_group(self, catalog):
        groups = catalog.search("")
        common = groups[0]

        assert common.is_common
        assert common.group_id == COMMON_GROUP_ID
        assert common.label == "Common languages"
        # xx_XX is unknown and silently dropped from the shortcut group
        assert [loc.locale_id for loc in common.locales] == [
            "en_US.UTF-8", "fr_FR.UTF-8", "de_DE.UTF-8",
        ]

    def test_groups_sorted_by_language_id(self, catalog):
        groups = catalog.search("")
        assert [g.group_id for g in groups[1:]] == ["cs", "de", "en", "fr"]

    def test_group_label(self, catalog):
        groups = catalog.search("")
        assert groups[1].label == "Čeština (Czech)"

    def test_filter_matches_english_name_case_insensitively(self, catalog):
        groups = catalog.search("GERM")
        assert [g.group_id for g in groups] == ["de"]
        assert not groups[0].is_common

    def test_filter_matches_native_name(self, catalog):
        groups = catalog.search("franç")
        assert [g.group_id for g in groups] == ["fr"]

    def test_matching_group_shows_all_locales(self, catalog):
        groups = catalog.search("french")
        assert [loc.locale_id for loc in groups[0].locales] == ["fr_FR.UTF-8", "fr_CA.UTF-8"]

    def test_filter_does_not_match_locale_names(self, catalog):
        # "Canada" only appears in a locale name, not in a group label
        assert catalog.search("canada") is NO_RESULTS

    def test_filter_matching_several_groups(self, catalog):
        groups = catalog.search("e")
        assert [g.group_id for g in groups] == ["cs", "de", "en", "fr"]

    def test_no_results_marker(self, catalog):
        result = catalog.search("klingon")
        assert result is NO_RESULTS
        assert not result
        assert result.label == "No results found"

    def test_search_is_idempotent(self, catalog):
        assert catalog.search("") == catalog.search("")

    def test_selected_result_is_consistent_with_lookup(self, catalog):
        for text in ("", "en", "deutsch", "Č"):
            for group in catalog.search(text):
                for locale in group.locales:
                    assert catalog.lookup(locale.locale_id) == locale

    def test_common_label_uses_active_translation(self, language_data):
        cat = LocaleCatalog.from_mapping(language_data, translate={"Common languages": "Langues courantes"}.get)
        assert cat.search("")[0].label == "Langues courantes"


# ── construction ──────────────────────────────────────────────────────────────

class TestConstruction:

    def _entry(self, language_id, *locale_ids, owner=None):
        return LanguageEntry(
            Language(language_id, language_id.upper(), language_id.title()),
            tuple(Locale(lid, lid, owner or language_id) for lid in locale_ids),
        )

    def test_duplicate_locale_rejected(self):
        with pytest.raises(CatalogError):
            LocaleCatalog([self._entry("aa", "aa_AA"), self._entry("bb", "aa_AA")])

    def test_locale_under_wrong_language_rejected(self):
        with pytest.raises(CatalogError):
            LocaleCatalog([self._entry("aa", "aa_AA", owner="bb")])

    def test_duplicate_language_rejected(self):
        with pytest.raises(CatalogError):
            LocaleCatalog([self._entry("aa"), self._entry("aa")])

    def test_malformed_mapping(self):
        with pytest.raises(CatalogError):
            LocaleCatalog.from_mapping({"languages": [{"language-id": "fr"}]})

    def test_common_locales_override(self, language_data):
        cat = LocaleCatalog.from_mapping(language_data, common_locales=["cs_CZ.UTF-8"])
        assert cat.common_locales == ("cs_CZ.UTF-8",)

    def test_from_backend(self):
        class Backend:
            def get_languages(self):
                return ["fr"]

            def get_language_data(self, language_id):
                return {"language-id": "fr", "native-name": "Français", "english-name": "French"}

            def get_locales(self, language_id):
                return ["fr_FR.UTF-8"]

            def get_locale_data(self, locale_id):
                return {"locale-id": locale_id, "native-name": "Français (France)"}

            def get_common_locales(self):
                return ["fr_FR.UTF-8"]

        cat = LocaleCatalog.from_backend(Backend())

        assert len(cat) == 1
        assert cat.lookup("fr_FR.UTF-8").language_id == "fr"
        assert cat.common_locales == ("fr_FR.UTF-8",)

    def test_iterators(self, catalog):
        assert [lang.language_id for lang in catalog.languages()] == ["cs", "de", "en", "fr"]
        assert len(list(catalog.locales())) == 7
