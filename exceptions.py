"""
exceptions.py
=============
INSTALLWIZ — Hierarchical Exception System

All application exceptions inherit from InstallwizError so callers
can catch the full hierarchy with a single except clause when needed.

Structure
---------
InstallwizError
├── LocaleError
│   ├── LocaleNotFoundError
│   └── CatalogError
├── BackendError
│   └── BackendUnavailableError
├── PasswordQualityError
├── TranslationError
├── MarkerError
└── ConfigurationError
"""


# ─── Root ────────────────────────────────────────────────────────────────────

class InstallwizError(Exception):
    """Base exception for all INSTALLWIZ errors."""

    def __init__(self, message: str = "", *, code: str = "", detail: str = ""):
        super().__init__(message)
        self.message = message
        self.code = code          # machine-readable code e.g. "LOCALE_NOT_FOUND"
        self.detail = detail      # extra context for logging

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message} | {self.detail}"
        return self.message


# ─── Locale ──────────────────────────────────────────────────────────────────

class LocaleError(InstallwizError):
    """Base for locale catalog errors."""


class LocaleNotFoundError(LocaleError):
    """Raised (or logged) when a locale id is not part of the catalog."""

    def __init__(self, locale_id: str = "", **kwargs):
        if locale_id:
            message = f"Locale with code {locale_id} not found"
        else:
            message = kwargs.pop("message", "Locale not found")
        kwargs.setdefault("code", "LOCALE_NOT_FOUND")
        super().__init__(message, **kwargs)
        self.locale_id = locale_id


class CatalogError(LocaleError):
    """Raised when backend language data cannot form a consistent catalog."""


# ─── Backend ─────────────────────────────────────────────────────────────────

class BackendError(InstallwizError):
    """Raised when the localization backend rejects a request."""

    def __init__(self, message: str = "", *, operation: str = "", **kwargs):
        super().__init__(message, **kwargs)
        self.operation = operation


class BackendUnavailableError(BackendError):
    """Raised when the tool backing a backend call is missing."""


# ─── Passphrase ──────────────────────────────────────────────────────────────

class PasswordQualityError(InstallwizError):
    """Raised when the password quality oracle gives no usable score."""


# ─── Translation ─────────────────────────────────────────────────────────────

class TranslationError(InstallwizError):
    """Raised when a translation bundle is malformed."""

    def __init__(self, language: str = "", reason: str = "", **kwargs):
        msg = f"Invalid translation bundle for '{language}'"
        if reason:
            msg += f": {reason}"
        super().__init__(msg, **kwargs)
        self.language = language
        self.reason = reason


# ─── Marker ──────────────────────────────────────────────────────────────────

class MarkerError(InstallwizError):
    """Raised when the persisted locale marker cannot be written."""


# ─── Configuration ───────────────────────────────────────────────────────────

class ConfigurationError(InstallwizError):
    """Raised when the application configuration is invalid or incomplete."""
