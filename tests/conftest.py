"""
tests/conftest.py
=================
Shared pytest fixtures — no real localectl / pwscore, no writes outside tmp_path.
"""
import sys
from concurrent.futures import Future
from typing import List

import pytest
from PySide6.QtCore import QCoreApplication


# ─── Qt application (session-scoped) ─────────────────────────────────────────

@pytest.fixture(scope="session", autouse=True)
def qapp():
    return QCoreApplication.instance() or QCoreApplication(sys.argv[:1])


# ─── Isolation ───────────────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def isolated_user_data(tmp_path, monkeypatch):
    """Marker files and logs land in a per-test directory."""
    data_dir = tmp_path / "userdata"
    monkeypatch.setenv("INSTALLWIZ_DATA_DIR", str(data_dir))
    return data_dir


@pytest.fixture(autouse=True)
def fresh_singletons():
    yield
    from core.dispatcher import MainThreadDispatcher
    from core.translator import TranslationManager
    TranslationManager.clear_instance()
    MainThreadDispatcher.clear_instance()


# ─── Catalog ─────────────────────────────────────────────────────────────────

LANGUAGE_DATA = {
    "common-locales": ["en_US.UTF-8", "fr_FR.UTF-8", "xx_XX.UTF-8", "de_DE.UTF-8"],
    "languages": [
        {
            "language-id": "fr",
            "native-name": "Français",
            "english-name": "French",
            "locales": [
                {"locale-id": "fr_FR.UTF-8", "native-name": "Français (France)"},
                {"locale-id": "fr_CA.UTF-8", "native-name": "Français (Canada)"},
            ],
        },
        {
            "language-id": "de",
            "native-name": "Deutsch",
            "english-name": "German",
            "locales": [
                {"locale-id": "de_DE.UTF-8", "native-name": "Deutsch (Deutschland)"},
                {"locale-id": "de_AT.UTF-8", "native-name": "Deutsch (Österreich)"},
            ],
        },
        {
            "language-id": "en",
            "native-name": "English",
            "english-name": "English",
            "locales": [
                {"locale-id": "en_US.UTF-8", "native-name": "English (United States)"},
                {"locale-id": "en_GB.UTF-8", "native-name": "English (United Kingdom)"},
            ],
        },
        {
            "language-id": "cs",
            "native-name": "Čeština",
            "english-name": "Czech",
            "locales": [
                {"locale-id": "cs_CZ.UTF-8", "native-name": "Čeština (Česko)"},
            ],
        },
    ],
}


@pytest.fixture
def language_data():
    import copy
    return copy.deepcopy(LANGUAGE_DATA)


@pytest.fixture
def catalog(language_data):
    from services.locale_catalog import LocaleCatalog
    return LocaleCatalog.from_mapping(language_data)


# ─── Collaborator doubles ────────────────────────────────────────────────────

class PendingCalls:
    """
    Records calls to an asynchronous collaborator and hands back unresolved
    futures, so a test decides when (and in which order) each one settles.
    """

    def __init__(self):
        self.calls: List[tuple] = []
        self.futures: List[Future] = []

    def __call__(self, *args):
        future: Future = Future()
        self.calls.append(args)
        self.futures.append(future)
        return future

    def resolve(self, index: int, value=None):
        self.futures[index].set_result(value)

    def reject(self, index: int, exc: BaseException):
        self.futures[index].set_exception(exc)


class FakeBackend:
    """LocalizationBackend double; every call returns a pending future."""

    def __init__(self):
        self.log: List[tuple] = []
        self.set_language_calls = PendingCalls()
        self.set_locale_calls = PendingCalls()

    def set_language(self, language):
        self.log.append(("set_language", language))
        return self.set_language_calls(language)

    def set_locale(self, locale):
        self.log.append(("set_locale", locale))
        return self.set_locale_calls(locale)


class RecordingMarker:

    def __init__(self, value=None, log=None):
        self.value = value
        self.log = log if log is not None else []

    def read(self):
        return self.value

    def write(self, value):
        self.log.append(("marker", value))
        self.value = value


@pytest.fixture
def pending_calls():
    return PendingCalls


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def marker(backend):
    # Shares the backend log so tests can assert cross-collaborator ordering
    return RecordingMarker("en-us", log=backend.log)


class SignalRecorder:
    """Collects every emission of a Qt signal."""

    def __init__(self, signal):
        self.values = []
        signal.connect(self._record)

    def _record(self, *args):
        self.values.append(args[0] if len(args) == 1 else args)

    @property
    def last(self):
        return self.values[-1]

    def __len__(self):
        return len(self.values)


@pytest.fixture
def record():
    return SignalRecorder
