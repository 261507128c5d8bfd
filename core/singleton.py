"""
core/singleton.py — INSTALLWIZ
===============================
Process-wide instances.

  QObjectSingletonMixin   for QObject subclasses (shiboken already owns the
                          metaclass, so the registry lives on the mixin)
        TranslationManager.get_instance()

  SingletonMeta           for plain classes
        Config() is Config.get_instance()

Creation is guarded by a lock; clear_instance() exists for tests.
"""
from __future__ import annotations

import threading
import logging
from typing import Any, Callable, Dict

logger = logging.getLogger(__name__)


def _get_or_create(registry: Dict[type, Any], lock: threading.Lock, cls: type, factory: Callable[[], Any]) -> Any:
    instance = registry.get(cls)
    if instance is None:
        with lock:
            instance = registry.get(cls)
            if instance is None:
                instance = registry[cls] = factory()
                logger.debug(f"Singleton created: {cls.__name__}")
    return instance


def _drop(registry: Dict[type, Any], lock: threading.Lock, cls: type) -> None:
    with lock:
        if registry.pop(cls, None) is not None:
            logger.debug(f"Singleton cleared: {cls.__name__}")


class QObjectSingletonMixin:

    _singleton_instances: Dict[type, Any] = {}
    _singleton_lock = threading.Lock()

    @classmethod
    def get_instance(cls):
        return _get_or_create(cls._singleton_instances, cls._singleton_lock, cls, cls)

    @classmethod
    def clear_instance(cls) -> None:
        _drop(cls._singleton_instances, cls._singleton_lock, cls)


class SingletonMeta(type):

    _instances: Dict[type, Any] = {}
    _lock = threading.Lock()

    def __call__(cls, *args, **kwargs):
        return _get_or_create(
            SingletonMeta._instances, SingletonMeta._lock, cls,
            lambda: super(SingletonMeta, cls).__call__(*args, **kwargs),
        )

    def get_instance(cls, *args, **kwargs):
        return cls(*args, **kwargs)

    def clear_instance(cls) -> None:
        _drop(SingletonMeta._instances, SingletonMeta._lock, cls)


__all__ = ["QObjectSingletonMixin", "SingletonMeta"]
