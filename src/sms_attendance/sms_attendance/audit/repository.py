from __future__ import annotations

from typing import Protocol, Sequence

from .model import ErrorEntry, EventLogEntry


class AuditRepository(Protocol):
    def append_error(self, entry: ErrorEntry) -> None:
        raise NotImplementedError

    def append_event(self, entry: EventLogEntry) -> None:
        raise NotImplementedError

    def list_errors(self, *, staff_id: str | None = None) -> Sequence[ErrorEntry]:
        raise NotImplementedError
