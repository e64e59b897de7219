from __future__ import annotations

from typing import Optional, Sequence

from ..common.validators import require_non_empty
from ..core.constants import STAFF_COLUMNS, STAFF_TABLE
from ..core.exceptions import ValidationError
from ..database.table_store import Row, TableBackedRepository, TableStore
from .model import Staff
from .phone import canonical_phone, same_phone
from .repository import StaffDirectory


class TableStaffDirectory(TableBackedRepository, StaffDirectory):
    def __init__(self, store: TableStore):
        super().__init__(store)

    @staticmethod
    def _to_staff(row: Row) -> Staff:
        return Staff(staff_id=row.get("staff_id"), display_name=row.get("display_name"), phone=row.get("phone"))

    def resolve(self, raw_identifier: str) -> Optional[Staff]:
        if not canonical_phone(raw_identifier):
            return None
        table = self._table(STAFF_TABLE, STAFF_COLUMNS)
        row = self._store.find_row(table, lambda r: same_phone(r.get("phone"), raw_identifier))
        return self._to_staff(row) if row else None

    def register(self, staff: Staff) -> None:
        staff_id = require_non_empty(staff.staff_id, "staff_id")
        if not canonical_phone(staff.phone):
            raise ValidationError("phone is required")
        if self.resolve(staff.phone) is not None:
            raise ValidationError(f"Phone already registered: {staff.phone}")

        table = self._table(STAFF_TABLE, STAFF_COLUMNS)
        self._store.append_row(
            table,
            {"staff_id": staff_id, "display_name": staff.display_name or staff_id, "phone": staff.phone},
        )

    def list_all(self) -> Sequence[Staff]:
        table = self._table(STAFF_TABLE, STAFF_COLUMNS)
        return [self._to_staff(r) for r in self._store.find_rows(table)]
