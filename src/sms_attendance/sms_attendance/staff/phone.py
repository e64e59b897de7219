from __future__ import annotations

import re
from typing import Optional

_DIGITS = re.compile(r"\D+")

# Numbers are compared on their national significant part.
SIGNIFICANT_DIGITS = 9


def canonical_phone(raw: Optional[str]) -> str:
    """Digits only, without international prefix or trunk zero."""
    digits = _DIGITS.sub("", raw or "")
    if digits.startswith("00"):
        digits = digits[2:]
    return digits.lstrip("0")


def same_phone(a: Optional[str], b: Optional[str]) -> bool:
    """Match numbers written with and without country code."""
    ca, cb = canonical_phone(a), canonical_phone(b)
    if not ca or not cb:
        return False
    if ca == cb:
        return True
    return len(ca) >= SIGNIFICANT_DIGITS and len(cb) >= SIGNIFICANT_DIGITS and (
        ca[-SIGNIFICANT_DIGITS:] == cb[-SIGNIFICANT_DIGITS:]
    )


def mask_phone(raw: Optional[str]) -> str:
    """Log-safe form: keep only the last three digits."""
    digits = canonical_phone(raw)
    if len(digits) <= 3:
        return "***"
    return "*" * (len(digits) - 3) + digits[-3:]
