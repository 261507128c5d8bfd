# core/__init__.py
"""
INSTALLWIZ Core Module
======================

Public API:
    - Configuration: Config
    - Translation: TranslationManager
    - Continuations: MainThreadDispatcher, run_in_background, when_done
"""

from .config import Config
from .translator import TranslationManager
from .dispatcher import MainThreadDispatcher, run_in_background, when_done

__all__ = [
    "Config",
    "TranslationManager",
    "MainThreadDispatcher",
    "run_in_background",
    "when_done",
]
