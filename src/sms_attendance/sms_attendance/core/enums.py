from __future__ import annotations

from enum import Enum


class NormalizedAction(str, Enum):
    """Canonical attendance action derived from free-text SMS input."""

    IN = "IN"
    OUT = "OUT"
    BREAK_IN = "BREAK IN"
    BREAK_OUT = "BREAK OUT"
    UNKNOWN = "UNKNOWN"


class BreakStatus(str, Enum):
    """Lifecycle of a break interval as stored in the break table."""

    OPEN = "OPEN"
    CLOSED = "CLOSED"


class IgnoreReason(str, Enum):
    """Why an event produced no state change and no error entry."""

    UNREGISTERED_STAFF = "UNREGISTERED_STAFF"
    UNKNOWN_ACTION = "UNKNOWN_ACTION"


class Rejection(str, Enum):
    """Ordering violations recorded in the error table."""

    OPEN_BREAK_ON_OUT = "open break exists"
    OUT_BEFORE_BREAK_OUT = "OUT precedes last BREAK_OUT"
    BREAK_ALREADY_OPEN = "existing open break"
    NO_OPEN_BREAK = "no open break"
    BREAK_OUT_BEFORE_BREAK_IN = "BREAK_OUT precedes BREAK_IN"
