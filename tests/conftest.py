from __future__ import annotations

import pytest

from src.sms_attendance.sms_attendance.container import build_container
from src.sms_attendance.sms_attendance.staff.model import Staff

from tests.helpers import PHONE, TZ, at


@pytest.fixture
def tz():
    return TZ


@pytest.fixture
def fixed_now():
    return at(8, 25)


@pytest.fixture
def container():
    c = build_container(backend="memory", timezone="Asia/Ho_Chi_Minh")
    c.staff_directory.register(Staff(staff_id="an", display_name="Nguyen Van An", phone=PHONE))
    return c


@pytest.fixture
def service(container):
    return container.attendance_service
