"""
services/locale_sync.py — INSTALLWIZ
=====================================
Keeps the chosen locale, the persisted locale marker, the backend locale and
the active translation table in agreement.

Mount (language already chosen upstream):
    marker differs → write marker, request a full UI reload
    always         → backend.set_locale(language) → mount_confirmed(language)

User selection:
    1. write marker (synchronously, before any asynchronous call)
    2. backend.set_language → backend.set_locale   (failure: notify, stop)
    3. record the native name
    4. fetch the translation table; empty → reset, else install + broadcast
    5. language_applied(locale_id) → the wizard re-renders in place

Every mount and selection carries a generation token; continuations
belonging to a superseded request, or arriving after close(), are dropped
(failures among them are still logged at info level).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, Optional

from PySide6.QtCore import QObject, Signal

from core.dispatcher import MainThreadDispatcher, when_done
from core.translator import TranslationManager
from exceptions import InstallwizError, MarkerError
from services.locale_catalog import LocaleCatalog, SearchResult
from services.locale_marker import to_ui_language, ui_base_language

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LanguageSelection:
    locale_id: str = ""
    native_name: str = ""
    search_filter: str = ""


class LocaleSyncController(QObject):
    """
    Signals:
        reload_requested(): full UI reload needed (mount only)
        mount_confirmed(str): backend accepted the locale set on mount
        native_name_changed(str): native name of the selected locale
        language_applied(str): translations swapped, re-render under locale
        step_notification(object): error to show on the step
        form_validity_changed(bool): a locale is chosen
    """

    reload_requested = Signal()
    mount_confirmed = Signal(str)
    native_name_changed = Signal(str)
    language_applied = Signal(str)
    step_notification = Signal(object)
    form_validity_changed = Signal(bool)

    def __init__(
        self,
        catalog: LocaleCatalog,
        marker,
        backend,
        fetch_translation_bundle: Callable,
        translation_manager: Optional[TranslationManager] = None,
        dispatcher: Optional[MainThreadDispatcher] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._catalog = catalog
        self._marker = marker
        self._backend = backend
        self._fetch_translation_bundle = fetch_translation_bundle
        self._translation_manager = translation_manager or TranslationManager.get_instance()
        self._dispatcher = dispatcher

        self._selection = LanguageSelection()
        self._applied_locale: Optional[str] = None
        self._generation = 0
        self._closed = False

    # ==============================
    # Read access
    # ==============================

    @property
    def selection(self) -> LanguageSelection:
        return self._selection

    @property
    def applied_locale(self) -> Optional[str]:
        return self._applied_locale

    def is_form_valid(self) -> bool:
        return self._selection.locale_id != ""

    def options(self) -> SearchResult:
        return self._catalog.search(self._selection.search_filter)

    def set_search_filter(self, text: str) -> None:
        self._selection = replace(self._selection, search_filter=text or "")

    # ==============================
    # Lifecycle
    # ==============================

    def mount(self, language: str) -> bool:
        """
        Step shown with ``language`` chosen upstream.
        Returns True when a full UI reload was requested.
        """
        self._closed = False
        self._selection = replace(self._selection, locale_id=language or "")
        self._publish_validity()

        reload_needed = False
        try:
            ui_language = to_ui_language(language)
            if self._marker.read() != ui_language:
                self._marker.write(ui_language)
                reload_needed = True
        except MarkerError as e:
            logger.error(f"Locale marker update failed: {e}")
            self._notify(e)

        if reload_needed:
            logger.info(f"UI locale changed to {language}, reloading")
            self.reload_requested.emit()

        self._generation += 1
        generation = self._generation
        self._call(
            generation, "set_locale", self._backend.set_locale, language,
            lambda _: self._on_mount_locale_set(language),
        )
        return reload_needed

    def close(self) -> None:
        """Step unmounted: pending continuations are dropped."""
        self._closed = True
        self._generation += 1

    # ==============================
    # Selection
    # ==============================

    def select_locale(self, locale_id: str) -> bool:
        """Apply a locale picked by the user. False if it is not in the catalog."""
        locale = self._catalog.lookup(locale_id)
        if locale is None:
            return False

        self._generation += 1
        generation = self._generation

        try:
            self._marker.write(to_ui_language(locale_id))
        except MarkerError as e:
            logger.error(f"Locale marker update failed: {e}")
            self._notify(e)
            return False

        self._call(
            generation, "set_language", self._backend.set_language, locale_id,
            lambda _: self._set_backend_locale(generation, locale_id),
        )

        self._selection = replace(
            self._selection,
            locale_id=locale_id,
            native_name=locale.native_name,
        )
        self.native_name_changed.emit(locale.native_name)
        self._publish_validity()
        return True

    def _set_backend_locale(self, generation: int, locale_id: str) -> None:
        self._call(
            generation, "set_locale", self._backend.set_locale, locale_id,
            lambda _: self._fetch_bundle(generation, locale_id),
        )

    def _fetch_bundle(self, generation: int, locale_id: str) -> None:
        self._call(
            generation, "fetch_translation_bundle", self._fetch_translation_bundle, locale_id,
            lambda bundle: self._apply_bundle(locale_id, bundle),
        )

    def _apply_bundle(self, locale_id: str, bundle) -> None:
        ui_language = to_ui_language(locale_id)
        manager = self._translation_manager

        if not bundle:
            manager.reset(ui_base_language(ui_language))
        else:
            try:
                manager.install(bundle, ui_language)
            except InstallwizError as e:
                logger.error(f"Translation install failed for {locale_id}: {e}")
                self._notify(e)
                return

        self._applied_locale = locale_id
        logger.info(f"Language applied: {locale_id}")
        self.language_applied.emit(locale_id)

    def _on_mount_locale_set(self, locale_id: str) -> None:
        logger.debug(f"Backend locale confirmed on mount: {locale_id}")
        self.mount_confirmed.emit(locale_id)

    # ==============================
    # Helpers
    # ==============================

    def _is_current(self, generation: int) -> bool:
        return not self._closed and generation == self._generation

    def _call(self, generation: int, name: str, fn: Callable, arg, on_result: Callable) -> None:
        def _done(value):
            if not self._is_current(generation):
                logger.debug(f"Dropping stale {name} result (#{generation})")
                return
            on_result(value)

        def _failed(error: BaseException):
            if not self._is_current(generation):
                logger.info(f"Ignoring {name}({arg}) failure from superseded request #{generation}: {error}")
                return
            logger.error(f"{name}({arg}) failed: {error}")
            self._notify(error)

        try:
            future = fn(arg)
        except Exception as e:
            _failed(e)
            return

        when_done(future, _done, _failed, self._dispatcher)

    def _notify(self, error: BaseException) -> None:
        self.step_notification.emit(error)

    def _publish_validity(self) -> None:
        self.form_validity_changed.emit(self.is_form_valid())
