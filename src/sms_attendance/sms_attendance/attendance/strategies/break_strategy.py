from __future__ import annotations

from dataclasses import replace
from datetime import datetime

from ...breaks.ledger import BreakLedger
from ...breaks.model import BreakInterval
from ...common.datetime_utils import rounded_minutes_between
from ...core.enums import BreakStatus, Rejection
from ..model import DailyAttendanceRecord
from .base import Transition, TransitionStrategy


class BreakInStrategy(TransitionStrategy):
    """Open a new break; only one may be open per staff and day."""

    def decide(self, *, at: datetime, record: DailyAttendanceRecord, ledger: BreakLedger) -> Transition:
        if ledger.latest_open() is not None:
            return Transition(rejection=Rejection.BREAK_ALREADY_OPEN)

        opened = BreakInterval(work_date=record.work_date, staff_id=record.staff_id, start=at)
        return Transition(record=record, opened=opened)


class BreakOutStrategy(TransitionStrategy):
    """Close the most recently started open break."""

    def decide(self, *, at: datetime, record: DailyAttendanceRecord, ledger: BreakLedger) -> Transition:
        current = ledger.latest_open()
        if current is None:
            return Transition(rejection=Rejection.NO_OPEN_BREAK)
        if at < current.start:
            return Transition(rejection=Rejection.BREAK_OUT_BEFORE_BREAK_IN)

        closed = replace(
            current,
            end=at,
            minutes=rounded_minutes_between(current.start, at),
            status=BreakStatus.CLOSED,
        )
        return Transition(record=record, closed=closed)


class IgnoreStrategy(TransitionStrategy):
    """Unknown actions: no mutation, no error."""

    def decide(self, *, at: datetime, record: DailyAttendanceRecord, ledger: BreakLedger) -> Transition:
        return Transition()
