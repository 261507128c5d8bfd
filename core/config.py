"""
core/config.py — INSTALLWIZ
============================
Layered settings lookup.

    from core.config import config

    pwscore = config.get("INSTALLWIZ_PWSCORE", default="pwscore")
    strict = config.get_bool("INSTALLWIZ_STRICT_QUALITY", True)

A key resolves from the first layer that has it:

  1. process environment (a ``.env`` file is merged into it at startup,
     never overriding variables that are already set)
  2. config/settings.json
  3. the caller's default
"""
import os
import json
import re
import logging
from typing import Any, Dict, List, Optional
from pathlib import Path

from dotenv import load_dotenv

from core.singleton import SingletonMeta
from exceptions import ConfigurationError

logger = logging.getLogger(__name__)

_TRUE_WORDS = frozenset(("true", "1", "yes", "on"))


class Config(metaclass=SingletonMeta):

    def __init__(self, config_file: Optional[Path] = None, env_file: Optional[Path] = None):
        from core.paths import config_path

        self.settings_file = Path(config_file) if config_file else config_path("settings.json")
        self.env_file = Path(env_file) if env_file else Path(".env")
        self._settings: Dict[str, Any] = {}

        if self.env_file.exists():
            load_dotenv(self.env_file)
            logger.info(f"Environment extended from {self.env_file}")

        self._settings = self._read_settings(self.settings_file)

    @staticmethod
    def _read_settings(path: Path) -> Dict[str, Any]:
        if not path.exists():
            logger.debug(f"No settings file at {path}")
            return {}

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Ignoring unreadable settings file {path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.error(f"Ignoring {path}: top level must be a JSON object")
            return {}

        logger.info(f"{len(data)} settings read from {path}")
        return data

    # ==============================
    # Lookup
    # ==============================

    def get(self, key: str, default: Any = None, required: bool = False) -> Any:
        """
        Value of ``key`` from the first layer that defines it.

        Raises:
            ConfigurationError: ``required`` is set and no layer defines ``key``
        """
        value = os.getenv(key)
        if value is not None:
            return value

        value = self._settings.get(key, default)
        if value is None and required:
            raise ConfigurationError(
                f"Missing setting '{key}'",
                code="CONFIG_MISSING",
                detail=f"define it in the environment, .env or {self.settings_file}",
            )
        return value

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self.get(key, default)
        if isinstance(value, str):
            return value.strip().lower() in _TRUE_WORDS
        return bool(value)

    def get_int(self, key: str, default: int = 0) -> int:
        value = self.get(key, default)
        try:
            return int(value)
        except (ValueError, TypeError):
            logger.warning(f"Setting '{key}' is not an integer ({value!r}), using {default}")
            return default

    def get_list(self, key: str, default: Optional[list] = None, separator: str = ",") -> List[str]:
        """A JSON array from settings.json, or a separated string from the environment."""
        value = self.get(key, default if default is not None else [])

        if isinstance(value, str):
            return [item.strip() for item in value.split(separator) if item.strip()]
        if isinstance(value, (list, tuple)):
            return [str(item) for item in value]
        return list(default or [])

    def get_path(self, key: str, default: Optional[str] = None) -> Path:
        value = self.get(key, default)
        return Path(value) if value else Path(".")

    def set(self, key: str, value: Any) -> None:
        """Process-local override at the settings layer (not written back)."""
        self._settings[key] = value

    # ==============================
    # Validation
    # ==============================

    def validate(self, schema: Dict[str, Dict[str, Any]]) -> None:
        """
        Check values against ``schema``; every problem is reported at once.

            {"LOG_LEVEL": {"required": False, "pattern": r"^(?i:debug|info)$"}}

        Supported rules: ``required``, ``type``, ``pattern``.
        """
        problems = []

        for key, rules in schema.items():
            value = self.get(key)

            if value is None:
                if rules.get("required", False):
                    problems.append(f"'{key}' is required")
                continue

            expected = rules.get("type")
            if expected is not None and not isinstance(value, expected):
                problems.append(f"'{key}' must be {expected.__name__}, not {type(value).__name__}")

            pattern = rules.get("pattern")
            if pattern and not re.match(pattern, str(value)):
                problems.append(f"'{key}'={value!r} does not match {pattern}")

        if problems:
            raise ConfigurationError(
                "Invalid configuration",
                code="CONFIG_INVALID",
                detail="; ".join(problems),
            )


config = Config.get_instance()


# ==============================
# Installer settings
# ==============================

def get_log_level() -> str:
    return str(config.get("LOG_LEVEL", default="INFO")).upper()


def get_default_locale() -> str:
    from constants import Locales
    return config.get("INSTALLWIZ_DEFAULT_LOCALE", default=Locales.DEFAULT)


def get_common_locales() -> List[str]:
    from constants import Locales
    return config.get_list("INSTALLWIZ_COMMON_LOCALES", default=list(Locales.COMMON))


def get_languages_file() -> Path:
    from core.paths import config_path
    return config.get_path("INSTALLWIZ_LANGUAGES_FILE", default=str(config_path("languages.json")))


def is_strict_quality() -> bool:
    from constants import Passphrase
    return config.get_bool("INSTALLWIZ_STRICT_QUALITY", default=Passphrase.STRICT_QUALITY)


def get_call_timeout() -> int:
    """Seconds the command line waits for backend and oracle calls."""
    return config.get_int("INSTALLWIZ_TIMEOUT", default=30)


CONFIG_SCHEMA = {
    "LOG_LEVEL": {
        "pattern": r"^(?i:debug|info|warning|error|critical)$",
    },
    "INSTALLWIZ_DEFAULT_LOCALE": {
        "pattern": r"^[a-z]{2,3}(_[A-Z]{2})?(\.[A-Za-z0-9-]+)?(@\w+)?$",
    },
    "INSTALLWIZ_TIMEOUT": {
        "pattern": r"^\d+$",
    },
}


def validate_config() -> None:
    """Startup check; logs and re-raises ConfigurationError."""
    try:
        config.validate(CONFIG_SCHEMA)
    except ConfigurationError as e:
        logger.error(f"Configuration rejected: {e}")
        raise
    logger.info("Configuration validated")
