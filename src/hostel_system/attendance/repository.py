from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, AttendanceSession, CalendarEntry, SessionKey


class SessionRepository(Protocol):
    def get_by_id(self, session_id: int) -> Optional[AttendanceSession]:
        raise NotImplementedError

    def get_by_key(self, key: SessionKey, *, locking: bool = False) -> Optional[AttendanceSession]:
        raise NotImplementedError

    def insert(self, key: SessionKey, *, created_by: Optional[str], created_at: datetime) -> int:
        """Insert a new session row.

        Raises DuplicateSessionKey when the key already exists.
        """
        raise NotImplementedError


class RecordRepository(Protocol):
    def upsert(
        self,
        *,
        session_id: int,
        resident_id: int,
        status: AttendanceStatus,
        note: Optional[str],
        late_minutes: int,
        marked_by: Optional[str],
        marked_at: datetime,
    ) -> None:
        raise NotImplementedError

    def get(self, session_id: int, resident_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_session(self, session_id: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def calendar_for_resident(self, resident_id: int, start: date, end: date) -> Sequence[CalendarEntry]:
        raise NotImplementedError

    def status_counts_for_resident(self, resident_id: int, start: date, end: date) -> dict[AttendanceStatus, int]:
        raise NotImplementedError
