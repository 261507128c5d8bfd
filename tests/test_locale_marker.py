"""
tests/test_locale_marker.py
===========================
UI language naming and the persisted marker file — uses tmp_path.
"""
import json

import pytest

from exceptions import MarkerError
from services.locale_marker import (
    FileLocaleMarker,
    MemoryLocaleMarker,
    to_ui_language,
    ui_base_language,
)


class TestToUiLanguage:

    @pytest.mark.parametrize("locale_id,expected", [
        ("fr_FR.UTF-8", "fr-fr"),
        ("en_US",       "en-us"),
        ("pt_BR.UTF-8", "pt-br"),
        ("de",          "de"),
        ("",            ""),
        (None,          ""),
    ])
    def test_conversion(self, locale_id, expected):
        assert to_ui_language(locale_id) == expected

    def test_base_language(self):
        assert ui_base_language("pt-br") == "pt"
        assert ui_base_language("cs") == "cs"


class TestFileLocaleMarker:

    def test_missing_file_reads_none(self, tmp_path):
        assert FileLocaleMarker(tmp_path / "m.json").read() is None

    def test_write_then_read(self, tmp_path):
        marker = FileLocaleMarker(tmp_path / "m.json")
        marker.write("fr-fr")
        assert marker.read() == "fr-fr"
        assert json.loads((tmp_path / "m.json").read_text(encoding="utf-8")) == {"ui_locale": "fr-fr"}

    def test_no_temp_file_left_behind(self, tmp_path):
        FileLocaleMarker(tmp_path / "m.json").write("cs")
        assert [p.name for p in tmp_path.iterdir()] == ["m.json"]

    @pytest.mark.parametrize("content", ["", "not json", "[1, 2]", '{"ui_locale": 3}'])
    def test_unreadable_content_reads_none(self, tmp_path, content):
        path = tmp_path / "m.json"
        path.write_text(content, encoding="utf-8")
        assert FileLocaleMarker(path).read() is None

    def test_default_location_is_user_data_dir(self, isolated_user_data):
        marker = FileLocaleMarker()
        marker.write("de-de")
        assert (isolated_user_data / "ui_locale.json").exists()

    def test_write_failure_raises_marker_error(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x", encoding="utf-8")
        with pytest.raises(MarkerError):
            FileLocaleMarker(blocker / "m.json").write("fr-fr")


class TestMemoryLocaleMarker:

    def test_roundtrip(self):
        marker = MemoryLocaleMarker()
        assert marker.read() is None
        marker.write("ja-jp")
        assert marker.read() == "ja-jp"
