from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo

from .attendance.engine import ReconciliationEngine
from .attendance.service import AttendanceService
from .attendance.table_attendance_repository import TableDailyAttendanceRepository
from .audit.table_audit_repository import TableAuditRepository
from .breaks.table_break_repository import TableBreakRepository
from .common.datetime_utils import get_zone
from .core.constants import DEFAULT_TIMEZONE
from .core.exceptions import ValidationError
from .database.connection import DBConfig, DatabaseConnection
from .database.memory_store import InMemoryTableStore
from .database.mysql_table_store import DEFAULT_LOCK_TIMEOUT, MySQLTableStore
from .database.table_store import TableStore
from .staff.table_staff_directory import TableStaffDirectory


@dataclass(frozen=True)
class Container:
    store: TableStore
    tz: tzinfo

    attendance_repo: TableDailyAttendanceRepository
    breaks_repo: TableBreakRepository
    audit_repo: TableAuditRepository
    staff_directory: TableStaffDirectory

    attendance_service: AttendanceService


def build_store(*, backend: str, db_config: dict | None = None) -> TableStore:
    backend = (backend or "mysql").lower()
    if backend == "memory":
        return InMemoryTableStore()
    if backend != "mysql":
        raise ValidationError(f"Unknown store backend: {backend}")

    db_config = db_config or {}
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    lock_timeout = int(db_config.get("lock_timeout", DEFAULT_LOCK_TIMEOUT))
    return MySQLTableStore(DatabaseConnection.get_instance(config), lock_timeout=lock_timeout)


def build_container(
    *,
    db_config: dict | None = None,
    backend: str = "mysql",
    timezone: str = DEFAULT_TIMEZONE,
    store: TableStore | None = None,
) -> Container:
    tz = get_zone(timezone)
    store = store or build_store(backend=backend, db_config=db_config)

    attendance_repo = TableDailyAttendanceRepository(store, tz=tz)
    breaks_repo = TableBreakRepository(store, tz=tz)
    audit_repo = TableAuditRepository(store, tz=tz)
    staff_directory = TableStaffDirectory(store)

    attendance_service = AttendanceService(
        attendance_repo,
        breaks_repo,
        audit_repo,
        staff_directory,
        tz=tz,
        engine=ReconciliationEngine(),
        locks=store,
    )

    return Container(
        store=store,
        tz=tz,
        attendance_repo=attendance_repo,
        breaks_repo=breaks_repo,
        audit_repo=audit_repo,
        staff_directory=staff_directory,
        attendance_service=attendance_service,
    )
