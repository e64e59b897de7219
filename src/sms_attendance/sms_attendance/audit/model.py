from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ErrorEntry:
    """Append-only record of an event the engine rejected."""

    timestamp: datetime
    staff_id: str
    message: str


@dataclass(frozen=True)
class EventLogEntry:
    """Raw audit trail row for every event from a registered staff member."""

    timestamp: datetime
    staff_id: str
    display_name: str
    raw_action: str
    action: str
