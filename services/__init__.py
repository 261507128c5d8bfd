from .locale_catalog import LocaleCatalog, Locale, Language, LocaleGroup, NO_RESULTS
from .locale_sync import LocaleSyncController, LanguageSelection
from .passphrase_validation import (
    PassphraseValidationController,
    StorageEncryptionState,
    compute_validity,
)
from .strength_classifier import STRENGTH_LEVELS, classify_strength, is_valid_strength

__all__ = [
    "LocaleCatalog",
    "Locale",
    "Language",
    "LocaleGroup",
    "NO_RESULTS",
    "LocaleSyncController",
    "LanguageSelection",
    "PassphraseValidationController",
    "StorageEncryptionState",
    "compute_validity",
    "STRENGTH_LEVELS",
    "classify_strength",
    "is_valid_strength",
]
