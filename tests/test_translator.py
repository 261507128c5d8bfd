"""
tests/test_translator.py
========================
Active translation table and its change broadcast.
"""
import pytest

from core.translator import TranslationManager, get_current_language, t, translate
from exceptions import TranslationError


@pytest.fixture
def manager():
    return TranslationManager.get_instance()


class TestInstall:

    def test_install_replaces_table_and_emits(self, manager, record):
        changed = record(manager.language_changed)

        manager.install({"Weak": "Faible"}, "fr-fr")

        assert len(changed) == 1
        assert manager.translate("Weak") == "Faible"
        assert manager.get_current_language() == "fr-fr"
        assert manager.has_translation() is True

    def test_install_drops_previous_keys(self, manager):
        manager.install({"Weak": "Faible", "Strong": "Fort"}, "fr-fr")
        manager.install({"Weak": "Schwach"}, "de-de")
        assert manager.translate("Strong") == "Strong"

    @pytest.mark.parametrize("bundle", [
        ["Weak", "Faible"],
        "Weak=Faible",
        {"Weak": None},
        {1: "eins"},
    ])
    def test_malformed_bundle_rejected(self, manager, record, bundle):
        manager.install({"Weak": "Schwach"}, "de-de")
        changed = record(manager.language_changed)

        with pytest.raises(TranslationError) as exc:
            manager.install(bundle, "xx")

        assert exc.value.language == "xx"
        assert manager.translate("Weak") == "Schwach"
        assert len(changed) == 0


class TestReset:

    def test_reset_is_silent(self, manager, record):
        manager.install({"Weak": "Faible"}, "fr-fr")
        changed = record(manager.language_changed)

        manager.reset()

        assert len(changed) == 0
        assert manager.has_translation() is False
        assert manager.get_current_language() == "en"

    def test_reset_keeps_requested_language(self, manager):
        manager.reset("en")
        assert manager.get_current_language() == "en"


class TestTranslate:

    def test_key_is_its_own_translation_by_default(self, manager):
        assert manager.translate("No results found") == "No results found"

    def test_fallback_used_for_missing_key(self, manager):
        manager.install({"Weak": "Faible"}, "fr-fr")
        assert manager.translate("Unknown", fallback="?") == "?"

    def test_empty_key(self, manager):
        assert manager.translate("") == ""
        assert manager.translate("", fallback="x") == "x"

    def test_module_wrappers_use_singleton(self, manager):
        manager.install({"Strong": "Silné"}, "cs")
        assert translate("Strong") == "Silné"
        assert t("Strong") == "Silné"
        assert get_current_language() == "cs"
