from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ...breaks.ledger import BreakLedger
from ...breaks.model import BreakInterval
from ...core.enums import Rejection
from ..model import DailyAttendanceRecord


@dataclass(frozen=True)
class Transition:
    """Outcome of applying one action to a (staff, day) key.

    Exactly one of ``record`` / ``rejection`` is set for decisive actions; both
    are None when the action is ignored.
    """

    record: Optional[DailyAttendanceRecord] = None
    opened: Optional[BreakInterval] = None
    closed: Optional[BreakInterval] = None
    rejection: Optional[Rejection] = None

    @property
    def accepted(self) -> bool:
        return self.record is not None

    @property
    def rejected(self) -> bool:
        return self.rejection is not None


class TransitionStrategy(ABC):
    """Strategy Pattern: encapsulate how one action mutates the daily state."""

    @abstractmethod
    def decide(self, *, at: datetime, record: DailyAttendanceRecord, ledger: BreakLedger) -> Transition:
        raise NotImplementedError
