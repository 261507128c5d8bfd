"""
INSTALLWIZ Constants - Single Source of Truth
=============================================

Constants shared by the language step and the disk encryption step.
Using constants instead of magic strings prevents typos and makes refactoring easier.
"""


class Locales:
    """
    Locale identifiers and naming conventions.

    Usage:
        from constants import Locales
        Locales.COMMON
    """

    DEFAULT = "en_US.UTF-8"
    BASE_LANGUAGE = "en"

    # Encoding suffix that is part of a locale id but not of its display key
    UTF8_SUFFIX = ".UTF-8"

    # Shortcut group shown above the alphabetical list
    COMMON = (
        "en_US.UTF-8",
        "ar_EG.UTF-8",
        "cs_CZ.UTF-8",
        "de_DE.UTF-8",
        "es_ES.UTF-8",
        "fr_FR.UTF-8",
        "ja_JP.UTF-8",
        "pt_BR.UTF-8",
        "ru_RU.UTF-8",
        "zh_CN.UTF-8",
    )


class Passphrase:
    """Passphrase rules of the disk encryption step."""

    MIN_LENGTH = 8

    # Oracle "strict" mode: a rejected password scores 0 instead of failing
    STRICT_QUALITY = True

    SCORE_MIN = 0
    SCORE_MAX = 100


class MessageKeys:
    """Translation keys used by the engine itself."""

    COMMON_LANGUAGES = "Common languages"
    NO_RESULTS = "No results found"
    STRENGTH_WEAK = "Weak"
    STRENGTH_MEDIUM = "Medium"
    STRENGTH_STRONG = "Strong"


__all__ = ["Locales", "Passphrase", "MessageKeys"]
