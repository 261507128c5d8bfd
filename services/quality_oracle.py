"""
services/quality_oracle.py — INSTALLWIZ
========================================
Password quality oracle backed by libpwquality's ``pwscore`` tool.

    oracle = PwscoreOracle()
    future = oracle.score_password("correct horse", strict=True)
    future.result().value   # 0..100

``pwscore`` reads the password on stdin, prints a score and exits 0, or
prints the reason on stderr and exits non-zero when the password is
rejected by policy. In strict mode a rejected password scores 0 (the
step can still classify it as weak); otherwise the future fails.
A missing tool always fails the future so that validity fails closed.
"""
from __future__ import annotations

import logging
import subprocess
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Callable, Optional

from core.dispatcher import run_in_background
from exceptions import PasswordQualityError

logger = logging.getLogger(__name__)

# (password, strict) -> Future[PasswordQuality]
QualityOracle = Callable[[str, bool], Future]


@dataclass(frozen=True)
class PasswordQuality:
    value: int
    message: Optional[str] = None


class PwscoreOracle:

    def __init__(self, executable: Optional[str] = None, timeout: float = 10.0):
        if executable is None:
            from core.config import config
            executable = config.get("INSTALLWIZ_PWSCORE", default="pwscore")
        self.executable = executable
        self.timeout = timeout

    def __call__(self, password: str, strict: bool) -> Future:
        return self.score_password(password, strict)

    def score_password(self, password: str, strict: bool) -> Future:
        return run_in_background(self.score_password_sync, password, strict)

    def score_password_sync(self, password: str, strict: bool) -> PasswordQuality:
        try:
            proc = subprocess.run(
                [self.executable],
                input=password,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as e:
            raise PasswordQualityError(
                f"{self.executable} not found",
                code="PWSCORE_MISSING",
            ) from e
        except subprocess.TimeoutExpired as e:
            raise PasswordQualityError(
                f"{self.executable} timed out",
                code="PWSCORE_TIMEOUT",
            ) from e

        message = proc.stderr.strip() or None

        if proc.returncode != 0:
            return self._rejected(message or "Password is not acceptable", strict)

        try:
            value = int(proc.stdout.strip())
        except ValueError as e:
            raise PasswordQualityError(
                "Malformed password score",
                code="PWSCORE_MALFORMED",
                detail=repr(proc.stdout[:40]),
            ) from e

        if value == 0:
            return self._rejected("Password is too weak", strict)

        return PasswordQuality(value=value, message="Excellent password" if value == 100 else None)

    @staticmethod
    def _rejected(message: str, strict: bool) -> PasswordQuality:
        if not strict:
            raise PasswordQualityError(message, code="PASSWORD_REJECTED")
        logger.debug(f"Password rejected by policy, scoring 0: {message}")
        return PasswordQuality(value=0, message=message)


__all__ = ["PasswordQuality", "PwscoreOracle", "QualityOracle"]
