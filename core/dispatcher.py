"""
core/dispatcher.py — INSTALLWIZ
================================
Background work and continuations for the interactive thread.

Collaborator calls (quality oracle, backend, translation loader) return a
``concurrent.futures.Future``. Their results must be applied on the thread
that owns the step state, so every continuation goes through
MainThreadDispatcher: a QObject whose signal is delivered queued when emitted
from a worker thread and directly when emitted from its own thread.

    future = run_in_background(subprocess.run, argv)
    when_done(future, on_result, on_error)
"""
from __future__ import annotations

import atexit
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Optional

from PySide6.QtCore import QObject, Signal

from core.singleton import QObjectSingletonMixin

logger = logging.getLogger(__name__)

_executor: Optional[ThreadPoolExecutor] = None
_executor_lock = threading.Lock()


def _get_executor() -> ThreadPoolExecutor:
    global _executor
    if _executor is None:
        with _executor_lock:
            if _executor is None:
                _executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="installwiz-io")
                atexit.register(_executor.shutdown, wait=False, cancel_futures=True)
    return _executor


def run_in_background(fn: Callable[..., Any], *args, **kwargs) -> Future:
    """Run ``fn`` on the shared worker pool."""
    return _get_executor().submit(fn, *args, **kwargs)


def completed(value: Any = None) -> Future:
    """An already resolved future (synchronous collaborators)."""
    future: Future = Future()
    future.set_result(value)
    return future


def failed(exc: BaseException) -> Future:
    """An already rejected future."""
    future: Future = Future()
    future.set_exception(exc)
    return future


class MainThreadDispatcher(QObject, QObjectSingletonMixin):
    """Runs callables on the thread this object lives in."""

    _invoke = Signal(object)

    def __init__(self):
        super().__init__()
        self._invoke.connect(self._run)

    def post(self, fn: Callable[[], None]) -> None:
        self._invoke.emit(fn)

    @staticmethod
    def _run(fn: Callable[[], None]) -> None:
        try:
            fn()
        except Exception:
            # A failing continuation must not break the event loop
            logger.exception("Unhandled error in continuation")


def when_done(
    future: Future,
    on_result: Callable[[Any], None],
    on_error: Callable[[BaseException], None],
    dispatcher: Optional[MainThreadDispatcher] = None,
) -> None:
    """
    Attach a continuation to ``future``.

    ``on_result(value)`` or ``on_error(exc)`` runs through ``dispatcher``
    (the process-wide one by default). Cancellation counts as an error.
    """
    dispatcher = dispatcher or MainThreadDispatcher.get_instance()

    def _settle(done: Future) -> None:
        if done.cancelled():
            dispatcher.post(lambda: on_error(CancelledCall()))
            return
        exc = done.exception()
        if exc is not None:
            dispatcher.post(lambda: on_error(exc))
        else:
            value = done.result()
            dispatcher.post(lambda: on_result(value))

    future.add_done_callback(_settle)


class CancelledCall(Exception):
    """The asynchronous call was cancelled before it produced a result."""

    def __str__(self) -> str:
        return "call cancelled"


__all__ = [
    "run_in_background",
    "completed",
    "failed",
    "when_done",
    "MainThreadDispatcher",
    "CancelledCall",
]
