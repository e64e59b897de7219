from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, ContextManager, Mapping, Optional, Protocol, Sequence


@dataclass(frozen=True)
class Row:
    """One stored row. ``number`` identifies the row within its table."""

    number: int
    values: dict[str, str] = field(default_factory=dict)

    def get(self, column: str) -> str:
        return self.values.get(column, "")


RowPredicate = Callable[[Row], bool]


def cell_value(value: Any) -> str:
    """Stored cells are plain text; None becomes an empty cell."""
    if value is None:
        return ""
    return str(value)


class TableStore(Protocol):
    """Generic tabular record store.

    Lookups are by predicate scan; callers must not rely on row order.
    """

    def ensure_header(self, table: str, columns: Sequence[str]) -> None:
        raise NotImplementedError

    def find_row(self, table: str, predicate: RowPredicate) -> Optional[Row]:
        raise NotImplementedError

    def find_rows(self, table: str, predicate: Optional[RowPredicate] = None) -> list[Row]:
        raise NotImplementedError

    def append_row(self, table: str, values: Mapping[str, Any]) -> int:
        raise NotImplementedError

    def update_cell(self, table: str, row: int, column: str, value: Any) -> None:
        raise NotImplementedError

    def hold(self, key: str) -> ContextManager[None]:
        """Serialize work on ``key`` across every client of this store."""

        raise NotImplementedError


class TableBackedRepository:
    """Base for repositories over a TableStore; ensures each header once."""

    def __init__(self, store: TableStore):
        self._store = store
        self._ready: set[str] = set()

    def _table(self, table: str, columns: Sequence[str]) -> str:
        if table not in self._ready:
            self._store.ensure_header(table, columns)
            self._ready.add(table)
        return table
