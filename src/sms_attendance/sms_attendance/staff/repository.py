from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Staff


class StaffDirectory(Protocol):
    """Identity resolution for incoming webhook identifiers.

    Note (DIP): the attendance service depends on this interface only.
    """

    def resolve(self, raw_identifier: str) -> Optional[Staff]:
        raise NotImplementedError

    def register(self, staff: Staff) -> None:
        raise NotImplementedError

    def list_all(self) -> Sequence[Staff]:
        raise NotImplementedError
