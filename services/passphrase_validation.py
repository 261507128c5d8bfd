"""
services/passphrase_validation.py — INSTALLWIZ
===============================================
State machine of the disk encryption passphrase step.

Inputs: passphrase, confirmation, and the wizard flag telling whether the
passphrase gate is shown at all. Output: a single "form is valid" signal.

On every input change:
  1. length / match rules are recomputed synchronously and published
  2. strength goes back to pending and validity is republished
  3. the passphrase is echoed into the wizard's StorageEncryptionState
  4. the quality oracle is called; its result is committed only if no newer
     input arrived in the meantime (generation token) and the step is open

A pending, failed or malformed oracle result leaves strength unclassified,
which keeps the form invalid while the gate is active.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from functools import partial
from typing import Callable, Optional

from PySide6.QtCore import QObject, Signal

from core.dispatcher import MainThreadDispatcher, when_done
from services.strength_classifier import StrengthLevel, classify_strength, is_valid_strength
from utils.password_utils import RuleVerdict, length_rule, match_rule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StorageEncryptionState:
    """Wizard-level encryption record shared with the storage steps."""
    password: str = ""
    confirm_password: str = ""
    encrypt: bool = False


def compute_validity(
    rule_length: RuleVerdict,
    rule_match: RuleVerdict,
    strength: Optional[StrengthLevel],
    show_passphrase_screen: bool,
) -> bool:
    if not show_passphrase_screen:
        return True
    return (
        rule_length is RuleVerdict.SUCCESS
        and rule_match is RuleVerdict.SUCCESS
        and is_valid_strength(strength)
    )


def _score_value(quality):
    """Numeric score out of an oracle result (object with .value or mapping)."""
    if isinstance(quality, dict):
        return quality.get("value")
    return getattr(quality, "value", None)


class PassphraseValidationController(QObject):
    """
    Signals:
        form_validity_changed(bool): republished after every transition
        strength_changed(object): StrengthLevel, or None while pending/unknown
        rules_changed(str, str): (length verdict, match verdict)
        storage_encryption_changed(object): new StorageEncryptionState
        quality_settled(): the oracle call for the latest input completed
    """

    form_validity_changed = Signal(bool)
    strength_changed = Signal(object)
    rules_changed = Signal(str, str)
    storage_encryption_changed = Signal(object)
    quality_settled = Signal()

    def __init__(
        self,
        score_password: Callable,
        storage_encryption: Optional[StorageEncryptionState] = None,
        show_passphrase_screen: bool = False,
        strict: Optional[bool] = None,
        dispatcher: Optional[MainThreadDispatcher] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        if strict is None:
            from core.config import is_strict_quality
            strict = is_strict_quality()

        self._score_password = score_password
        self._strict = strict
        self._dispatcher = dispatcher

        self._storage_encryption = storage_encryption or StorageEncryptionState()
        self._password = self._storage_encryption.password
        self._confirm_password = self._storage_encryption.confirm_password
        self._show_passphrase_screen = show_passphrase_screen

        self._rule_length = RuleVerdict.INDETERMINATE
        self._rule_match = RuleVerdict.INDETERMINATE
        self._strength: Optional[StrengthLevel] = None
        self._form_valid = False
        self._pending = False

        self._generation = 0
        self._closed = False

    # ==============================
    # Read access
    # ==============================

    @property
    def password(self) -> str:
        return self._password

    @property
    def confirm_password(self) -> str:
        return self._confirm_password

    @property
    def rule_length(self) -> RuleVerdict:
        return self._rule_length

    @property
    def rule_match(self) -> RuleVerdict:
        return self._rule_match

    @property
    def strength(self) -> Optional[StrengthLevel]:
        return self._strength

    @property
    def form_valid(self) -> bool:
        return self._form_valid

    @property
    def storage_encryption(self) -> StorageEncryptionState:
        return self._storage_encryption

    @property
    def show_passphrase_screen(self) -> bool:
        return self._show_passphrase_screen

    @property
    def is_pending(self) -> bool:
        return self._pending

    @property
    def generation(self) -> int:
        return self._generation

    # ==============================
    # Inputs
    # ==============================

    def start(self) -> None:
        """First evaluation of the incoming state (step mounted)."""
        self._closed = False
        self._on_input_changed()

    def close(self) -> None:
        """Step unmounted: results of in-flight oracle calls are dropped."""
        self._closed = True
        self._pending = False
        self._generation += 1

    def set_password(self, password: str) -> None:
        password = password or ""
        if password == self._password:
            return
        self._password = password
        self._on_input_changed()

    def set_confirm_password(self, confirm_password: str) -> None:
        confirm_password = confirm_password or ""
        if confirm_password == self._confirm_password:
            return
        self._confirm_password = confirm_password
        self._on_input_changed()

    def set_show_passphrase_screen(self, show: bool) -> None:
        self._show_passphrase_screen = bool(show)
        self._publish_validity()

    def set_encrypt(self, encrypt: bool) -> None:
        self._storage_encryption = replace(self._storage_encryption, encrypt=bool(encrypt))
        self.storage_encryption_changed.emit(self._storage_encryption)

    # ==============================
    # Transitions
    # ==============================

    def _on_input_changed(self) -> None:
        if self._closed:
            return

        self._generation += 1
        generation = self._generation
        password = self._password

        self._rule_length = length_rule(password)
        self._rule_match = match_rule(password, self._confirm_password)
        self.rules_changed.emit(self._rule_length.value, self._rule_match.value)

        self._pending = True
        self._set_strength(None)
        self._publish_validity()

        self._storage_encryption = replace(
            self._storage_encryption,
            password=password,
            confirm_password=self._confirm_password,
        )
        self.storage_encryption_changed.emit(self._storage_encryption)

        self._request_strength(generation, password)

    def _request_strength(self, generation: int, password: str) -> None:
        try:
            future = self._score_password(password, self._strict)
        except Exception as e:
            self._on_quality_error(generation, e)
            return

        when_done(
            future,
            partial(self._on_quality, generation),
            partial(self._on_quality_error, generation),
            self._dispatcher,
        )

    def _is_current(self, generation: int) -> bool:
        return not self._closed and generation == self._generation

    def _on_quality(self, generation: int, quality) -> None:
        if not self._is_current(generation):
            logger.debug(f"Dropping stale quality result (#{generation}, latest #{self._generation})")
            return

        level = classify_strength(_score_value(quality))
        if level is None:
            logger.warning(f"Password quality score not classifiable: {quality!r}")

        self._set_strength(level)
        self._publish_validity()
        self._settle()

    def _on_quality_error(self, generation: int, error: BaseException) -> None:
        if not self._is_current(generation):
            logger.debug(f"Dropping stale quality failure (#{generation}): {error}")
            return

        logger.warning(f"Password quality check failed: {error}")
        self._set_strength(None)
        self._publish_validity()
        self._settle()

    def _settle(self) -> None:
        self._pending = False
        self.quality_settled.emit()

    def _set_strength(self, level: Optional[StrengthLevel]) -> None:
        self._strength = level
        self.strength_changed.emit(level)

    def _publish_validity(self) -> None:
        self._form_valid = compute_validity(
            self._rule_length,
            self._rule_match,
            self._strength,
            self._show_passphrase_screen,
        )
        self.form_validity_changed.emit(self._form_valid)
