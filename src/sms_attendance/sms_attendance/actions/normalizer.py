from __future__ import annotations

import re
from typing import Optional

from ..core.enums import NormalizedAction

_NON_WORD = re.compile(r"[^a-z0-9 ]")
_SPACES = re.compile(r"\s+")

_EXACT = {
    "i": NormalizedAction.IN,
    "start": NormalizedAction.IN,
    "o": NormalizedAction.OUT,
    "stop": NormalizedAction.OUT,
}


def _clean(raw: str) -> str:
    text = _NON_WORD.sub("", raw.lower())
    return _SPACES.sub(" ", text).strip()


def normalize(raw: Optional[str]) -> NormalizedAction:
    """Map free-text SMS content onto a canonical action.

    Rules are checked in order; the first match wins. Anything unmatched is
    UNKNOWN. Never raises.
    """

    raw = raw or ""
    lowered = raw.lower()
    cleaned = _clean(raw)
    words = set(cleaned.split(" "))
    has_break = "break" in words

    if has_break and "in" in words:
        return NormalizedAction.BREAK_IN
    if has_break and "out" in words:
        return NormalizedAction.BREAK_OUT
    if "breakin" in lowered or "break-in" in lowered:
        return NormalizedAction.BREAK_IN
    if "breakout" in lowered or "break-out" in lowered:
        return NormalizedAction.BREAK_OUT
    if "in" in words and not has_break:
        return NormalizedAction.IN
    if "out" in words and not has_break:
        return NormalizedAction.OUT
    return _EXACT.get(cleaned, NormalizedAction.UNKNOWN)


def action_label(raw: Optional[str]) -> str:
    """Label written to the event log: canonical name, or the raw text upper-cased."""
    action = normalize(raw)
    if action is NormalizedAction.UNKNOWN:
        return (raw or "").upper()
    return action.value
