from __future__ import annotations

from datetime import date

from src.sms_attendance.sms_attendance.breaks.ledger import BreakLedger
from src.sms_attendance.sms_attendance.breaks.model import BreakInterval
from src.sms_attendance.sms_attendance.core.enums import BreakStatus

from tests.helpers import WORK_DATE, at


def closed(start, end, minutes, *, staff_id="an", work_date=WORK_DATE):
    return BreakInterval(
        work_date=work_date, staff_id=staff_id, start=start, end=end, minutes=minutes, status=BreakStatus.CLOSED
    )


def opened(start, *, staff_id="an", work_date=WORK_DATE):
    return BreakInterval(work_date=work_date, staff_id=staff_id, start=start)


def test_for_key_drops_other_staff_and_days():
    intervals = [
        opened(at(12)),
        opened(at(12), staff_id="binh"),
        opened(at(12, day=date(2026, 2, 3)), work_date=date(2026, 2, 3)),
    ]
    ledger = BreakLedger.for_key("an", WORK_DATE, intervals)
    assert len(ledger.intervals) == 1


def test_latest_open_picks_max_start():
    ledger = BreakLedger.for_key("an", WORK_DATE, [opened(at(15)), opened(at(10)), opened(at(12))])
    assert ledger.latest_open().start == at(15)


def test_latest_open_none_when_all_closed():
    ledger = BreakLedger.for_key("an", WORK_DATE, [closed(at(12), at(12, 30), 30)])
    assert ledger.latest_open() is None


def test_last_closed_is_by_end_not_position():
    ledger = BreakLedger.for_key(
        "an",
        WORK_DATE,
        [closed(at(15), at(15, 10), 10), closed(at(10), at(10, 15), 15)],
    )
    assert ledger.last_closed().end == at(15, 10)


def test_closed_minutes_ignores_open():
    ledger = BreakLedger.for_key(
        "an",
        WORK_DATE,
        [closed(at(10), at(10, 15), 15), closed(at(12), at(12, 30), 30), opened(at(16))],
    )
    assert ledger.closed_minutes() == 45
