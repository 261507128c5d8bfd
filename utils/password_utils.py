# -*- coding: utf-8 -*-
"""
utils/password_utils.py
=========================
Pure passphrase rule functions — zero external dependencies.

Each rule returns a tri-state RuleVerdict:

  INDETERMINATE → nothing typed yet, no judgment (never counts as valid)
  ERROR         → rule violated
  SUCCESS       → rule satisfied
"""
from enum import Enum
from typing import Optional

from constants import Passphrase


class RuleVerdict(str, Enum):
    INDETERMINATE = "indeterminate"
    ERROR = "error"
    SUCCESS = "success"


def length_rule(password: Optional[str]) -> RuleVerdict:
    """
    Minimum length rule.

      ""              → INDETERMINATE
      1..7 chars      → ERROR
      8 chars or more → SUCCESS
    """
    length = len(password or "")
    if length == 0:
        return RuleVerdict.INDETERMINATE
    if length < Passphrase.MIN_LENGTH:
        return RuleVerdict.ERROR
    return RuleVerdict.SUCCESS


def match_rule(password: Optional[str], confirm: Optional[str]) -> RuleVerdict:
    """Confirmation must equal the passphrase; undecided while the passphrase is empty."""
    password = password or ""
    if not password:
        return RuleVerdict.INDETERMINATE
    return RuleVerdict.SUCCESS if password == (confirm or "") else RuleVerdict.ERROR
