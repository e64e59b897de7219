from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.sms_attendance.sms_attendance.container import build_container
from src.sms_attendance.sms_attendance.core.exceptions import ValidationError
from src.sms_attendance.sms_attendance.staff.model import Staff

DEMO_STAFF = [
    Staff(staff_id="an.nguyen", display_name="Nguyen Van An", phone="+84 901 234 567"),
    Staff(staff_id="binh.tran", display_name="Tran Thi Binh", phone="+84 912 345 678"),
]


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=dict(settings.DB_CONFIG), backend="mysql", timezone=settings.TIMEZONE)

    for staff in DEMO_STAFF:
        try:
            container.staff_directory.register(staff)
            print(f"registered {staff.staff_id}")
        except ValidationError as e:
            print(f"skipped {staff.staff_id}: {e}")


if __name__ == "__main__":
    main()
