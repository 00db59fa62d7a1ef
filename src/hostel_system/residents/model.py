from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Resident:
    resident_id: int
    full_name: str
    email: str
    contact: Optional[str] = None
    course: Optional[str] = None
    year: Optional[int] = None
    identity_id: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
