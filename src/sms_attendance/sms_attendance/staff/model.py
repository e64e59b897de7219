from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Staff:
    """A registered staff member, identified by the phone they text from."""

    staff_id: str
    display_name: str
    phone: str = ""
