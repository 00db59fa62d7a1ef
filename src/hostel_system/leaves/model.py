from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveStatus


@dataclass(frozen=True)
class Leave:
    leave_id: int
    resident_id: int
    start_date: date
    end_date: date
    reason: str
    status: LeaveStatus
    created_at: datetime
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date
