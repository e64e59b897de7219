from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..audit.model import ErrorEntry
from ..core.enums import IgnoreReason
from .model import DailyAttendanceRecord


@dataclass(frozen=True)
class Ignored:
    reason: IgnoreReason


@dataclass(frozen=True)
class Rejected:
    error: ErrorEntry


@dataclass(frozen=True)
class Applied:
    record: DailyAttendanceRecord


HandlingOutcome = Union[Ignored, Rejected, Applied]
