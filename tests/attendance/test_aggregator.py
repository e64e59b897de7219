from __future__ import annotations

from src.sms_attendance.sms_attendance.attendance.aggregator import DailyRecordAggregator
from src.sms_attendance.sms_attendance.attendance.model import DailyAttendanceRecord
from src.sms_attendance.sms_attendance.breaks.model import BreakInterval
from src.sms_attendance.sms_attendance.core.enums import BreakStatus

from tests.helpers import WORK_DATE, at


def _closed(start, end, minutes, staff_id="an"):
    return BreakInterval(
        work_date=WORK_DATE, staff_id=staff_id, start=start, end=end, minutes=minutes, status=BreakStatus.CLOSED
    )


def test_net_subtracts_closed_breaks_only():
    intervals = [
        _closed(at(12), at(12, 30), 30),
        BreakInterval(work_date=WORK_DATE, staff_id="an", start=at(15)),
        _closed(at(13), at(14), 60, staff_id="binh"),
    ]
    totals = DailyRecordAggregator().recompute(
        work_date=WORK_DATE, staff_id="an", intervals=intervals, first_in=at(9), last_out=at(18)
    )
    assert totals.break_minutes == 30
    assert totals.net_minutes == 510


def test_net_is_zero_without_both_ends():
    totals = DailyRecordAggregator().recompute(
        work_date=WORK_DATE, staff_id="an", intervals=[_closed(at(12), at(12, 30), 30)], first_in=at(9), last_out=None
    )
    assert totals.break_minutes == 30
    assert totals.net_minutes == 0


def test_net_never_negative():
    totals = DailyRecordAggregator().recompute(
        work_date=WORK_DATE,
        staff_id="an",
        intervals=[_closed(at(9), at(11), 120)],
        first_in=at(9),
        last_out=at(10),
    )
    assert totals.net_minutes == 0


def test_gross_minutes_are_floored():
    totals = DailyRecordAggregator().recompute(
        work_date=WORK_DATE, staff_id="an", intervals=[], first_in=at(9), last_out=at(9, 10, 59)
    )
    assert totals.net_minutes == 10


def test_refresh_and_format():
    record = DailyAttendanceRecord(work_date=WORK_DATE, staff_id="an", first_in=at(9), last_out=at(18))
    agg = DailyRecordAggregator()
    refreshed = agg.refresh(record, [_closed(at(12), at(12, 30), 30)])
    assert agg.format_totals(refreshed) == ("00:30", "08:30")
