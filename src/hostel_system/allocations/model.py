from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Allocation:
    """A resident's stay in a room. Only ``ended_at`` is ever set after creation."""

    allocation_id: int
    resident_id: int
    room_id: int
    started_at: datetime
    ended_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.ended_at is None
