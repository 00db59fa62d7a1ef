from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import Leave


class LeaveRepository(Protocol):
    def create(self, *, resident_id: int, start_date: date, end_date: date, reason: str, created_at: datetime) -> int:
        raise NotImplementedError

    def get_by_id(self, leave_id: int) -> Optional[Leave]:
        raise NotImplementedError

    def approve(self, leave_id: int, *, approved_by: Optional[str], approved_at: datetime) -> bool:
        """Approve a pending leave. Returns False if it was not pending."""
        raise NotImplementedError

    def list_for_resident(self, resident_id: int) -> Sequence[Leave]:
        raise NotImplementedError

    def find_covering(self, resident_id: int, day: date) -> Optional[Leave]:
        """An approved leave of the resident that includes ``day``."""
        raise NotImplementedError
