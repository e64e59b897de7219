"""Example: drive the attendance service directly (no Flask, in-memory store).

Goal: show that controllers are a thin layer; the rules live in services.
"""

from datetime import datetime

from src.sms_attendance.sms_attendance.container import build_container
from src.sms_attendance.sms_attendance.staff.model import Staff


def main():
    container = build_container(backend="memory", timezone="Asia/Ho_Chi_Minh")
    container.staff_directory.register(Staff(staff_id="an", display_name="An", phone="+84901234567"))

    svc = container.attendance_service
    for hour, minute, text in [(9, 0, "in"), (12, 0, "break in"), (12, 30, "break out"), (18, 0, "out")]:
        outcome = svc.handle_event("0901234567", text, datetime(2026, 10, 16, hour, minute))
        print(text, "->", svc.describe(outcome))

    print(svc.daily_report(datetime(2026, 10, 16).date()))


if __name__ == "__main__":
    main()
