"""
services/strength_classifier.py — INSTALLWIZ
=============================================
Buckets a password quality score (0..100) into a strength level.

    weak    0..29
    medium 30..69
    strong 70..100

The three ranges tile [0, 100]. Every level is currently acceptable, so only
the length and match rules can make a passphrase invalid; a score that maps
to no level (out of range, NaN, missing) is never acceptable.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Optional, Tuple

from constants import MessageKeys, Passphrase


@dataclass(frozen=True)
class StrengthLevel:
    id: str
    label: str
    variant: str            # helper text variant: error | warning | success
    lower_bound: int
    higher_bound: int
    valid: bool = True

    def contains(self, score: float) -> bool:
        return self.lower_bound <= score <= self.higher_bound


STRENGTH_LEVELS: Tuple[StrengthLevel, ...] = (
    StrengthLevel("weak",   MessageKeys.STRENGTH_WEAK,   "error",   Passphrase.SCORE_MIN, 29),
    StrengthLevel("medium", MessageKeys.STRENGTH_MEDIUM, "warning", 30, 69),
    StrengthLevel("strong", MessageKeys.STRENGTH_STRONG, "success", 70, Passphrase.SCORE_MAX),
)


def _as_score(value) -> Optional[float]:
    # bool is a Real subclass but never a score
    if isinstance(value, bool) or not isinstance(value, Real):
        return None
    value = float(value)
    if math.isnan(value):
        return None
    return value


def classify_strength(score) -> Optional[StrengthLevel]:
    """Level whose inclusive range holds ``score``, or None."""
    value = _as_score(score)
    if value is None:
        return None
    for level in STRENGTH_LEVELS:
        if level.contains(value):
            return level
    return None


def is_valid_strength(level: Optional[StrengthLevel]) -> bool:
    return level.valid if level is not None else False


def strength_level_by_id(level_id: str) -> Optional[StrengthLevel]:
    return next((lvl for lvl in STRENGTH_LEVELS if lvl.id == level_id), None)


__all__ = [
    "StrengthLevel",
    "STRENGTH_LEVELS",
    "classify_strength",
    "is_valid_strength",
    "strength_level_by_id",
]
