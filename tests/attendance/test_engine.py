from __future__ import annotations

import pytest

from src.sms_attendance.sms_attendance.attendance.engine import ReconciliationEngine
from src.sms_attendance.sms_attendance.attendance.factory import TransitionStrategyFactory
from src.sms_attendance.sms_attendance.attendance.model import DailyAttendanceRecord
from src.sms_attendance.sms_attendance.attendance.strategies.break_strategy import (
    BreakInStrategy,
    BreakOutStrategy,
    IgnoreStrategy,
)
from src.sms_attendance.sms_attendance.attendance.strategies.clock_strategy import ClockInStrategy, ClockOutStrategy
from src.sms_attendance.sms_attendance.breaks.model import BreakInterval
from src.sms_attendance.sms_attendance.core.enums import BreakStatus, NormalizedAction, Rejection

from tests.helpers import WORK_DATE, at


def _apply(action, when, record=None, intervals=()):
    return ReconciliationEngine().apply(
        action=action,
        at=when,
        staff_id="an",
        work_date=WORK_DATE,
        record=record,
        intervals=list(intervals),
        display_name="An",
    )


def _open(start):
    return BreakInterval(work_date=WORK_DATE, staff_id="an", start=start)


def _closed(start, end):
    minutes = int((end - start).total_seconds() // 60)
    return BreakInterval(
        work_date=WORK_DATE, staff_id="an", start=start, end=end, minutes=minutes, status=BreakStatus.CLOSED
    )


@pytest.mark.parametrize(
    "action, strategy",
    [
        (NormalizedAction.IN, ClockInStrategy),
        (NormalizedAction.OUT, ClockOutStrategy),
        (NormalizedAction.BREAK_IN, BreakInStrategy),
        (NormalizedAction.BREAK_OUT, BreakOutStrategy),
        (NormalizedAction.UNKNOWN, IgnoreStrategy),
    ],
)
def test_factory_picks_strategy(action, strategy):
    assert isinstance(TransitionStrategyFactory().for_action(action), strategy)


def test_first_in_creates_present_record():
    t = _apply(NormalizedAction.IN, at(9))
    assert t.accepted
    assert t.record.present is True
    assert t.record.first_in == at(9)
    assert t.record.last_out is None
    assert t.record.display_name == "An"


def test_in_keeps_earliest():
    record = DailyAttendanceRecord(work_date=WORK_DATE, staff_id="an", present=True, first_in=at(9))
    assert _apply(NormalizedAction.IN, at(10), record).record.first_in == at(9)
    assert _apply(NormalizedAction.IN, at(9), record).record.first_in == at(9)
    assert _apply(NormalizedAction.IN, at(8, 45), record).record.first_in == at(8, 45)


def test_out_keeps_latest():
    record = DailyAttendanceRecord(work_date=WORK_DATE, staff_id="an", present=True, first_in=at(9), last_out=at(18))
    assert _apply(NormalizedAction.OUT, at(17), record).record.last_out == at(18)
    later = _apply(NormalizedAction.OUT, at(19), record).record
    assert later.last_out == at(19)
    assert later.net_minutes == 600


def test_out_rejected_while_break_open():
    t = _apply(NormalizedAction.OUT, at(18), intervals=[_open(at(12))])
    assert t.rejection == Rejection.OPEN_BREAK_ON_OUT
    assert t.record is None


def test_out_rejected_before_last_break_out():
    intervals = [_closed(at(10), at(10, 15)), _closed(at(12), at(12, 30))]
    t = _apply(NormalizedAction.OUT, at(12, 20), intervals=intervals)
    assert t.rejection == Rejection.OUT_BEFORE_BREAK_OUT


def test_out_at_break_end_is_accepted():
    t = _apply(NormalizedAction.OUT, at(12, 30), intervals=[_closed(at(12), at(12, 30))])
    assert t.accepted
    assert t.record.last_out == at(12, 30)


def test_break_in_opens_interval():
    t = _apply(NormalizedAction.BREAK_IN, at(12))
    assert t.opened == _open(at(12))
    assert t.record.present is True


def test_break_in_rejected_when_open_exists():
    t = _apply(NormalizedAction.BREAK_IN, at(13), intervals=[_open(at(12))])
    assert t.rejection == Rejection.BREAK_ALREADY_OPEN


def test_break_out_closes_latest_open():
    record = DailyAttendanceRecord(work_date=WORK_DATE, staff_id="an", present=True, first_in=at(9))
    t = _apply(NormalizedAction.BREAK_OUT, at(12, 30), record, intervals=[_open(at(11)), _open(at(12))])
    assert t.closed.start == at(12)
    assert t.closed.end == at(12, 30)
    assert t.closed.minutes == 30
    assert t.closed.status == BreakStatus.CLOSED
    assert t.record.break_minutes == 30


def test_break_out_minutes_round_half_up():
    t = _apply(NormalizedAction.BREAK_OUT, at(12, 10, 30), intervals=[_open(at(12))])
    assert t.closed.minutes == 11


def test_break_out_without_open_rejected():
    t = _apply(NormalizedAction.BREAK_OUT, at(13), intervals=[_closed(at(12), at(12, 30))])
    assert t.rejection == Rejection.NO_OPEN_BREAK


def test_break_out_before_start_rejected():
    t = _apply(NormalizedAction.BREAK_OUT, at(11, 59), intervals=[_open(at(12))])
    assert t.rejection == Rejection.BREAK_OUT_BEFORE_BREAK_IN


def test_unknown_changes_nothing():
    t = _apply(NormalizedAction.UNKNOWN, at(12))
    assert not t.accepted
    assert not t.rejected
    assert t.opened is None and t.closed is None


def test_derived_fields_recomputed_not_patched():
    # Stale totals in the stored record are replaced by a full recompute.
    record = DailyAttendanceRecord(
        work_date=WORK_DATE, staff_id="an", present=True, first_in=at(9), break_minutes=999, net_minutes=999
    )
    t = _apply(NormalizedAction.OUT, at(17), record, intervals=[_closed(at(12), at(13))])
    assert t.record.break_minutes == 60
    assert t.record.net_minutes == 420


def test_existing_display_name_kept():
    record = DailyAttendanceRecord(work_date=WORK_DATE, staff_id="an", display_name="Old Name", present=True)
    t = _apply(NormalizedAction.IN, at(9), record)
    assert t.record.display_name == "Old Name"
