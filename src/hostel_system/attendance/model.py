from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus, SessionType


@dataclass(frozen=True)
class SessionScope:
    """Optional narrowing of a session to a block, room, course or year."""

    block: Optional[str] = None
    room_id: Optional[int] = None
    course: Optional[str] = None
    year: Optional[int] = None

    def normalized(self) -> "SessionScope":
        def _text(v):
            if v is None:
                return None
            v = str(v).strip()
            return v or None

        return SessionScope(
            block=_text(self.block),
            room_id=int(self.room_id) if self.room_id not in (None, "") else None,
            course=_text(self.course),
            year=int(self.year) if self.year not in (None, "") else None,
        )

    def key(self) -> tuple:
        return (self.block, self.room_id, self.course, self.year)

    def storage_key(self) -> str:
        """Digest stored in ``attendance_sessions.scope_key``.

        The parts are JSON encoded before hashing, so separators inside
        block or course text cannot make two scopes collide.
        """
        encoded = json.dumps(list(self.normalized().key()), ensure_ascii=False, separators=(",", ":"))
        return hashlib.sha256(encoded.encode("utf-8")).hexdigest()

    @property
    def is_empty(self) -> bool:
        return self.key() == (None, None, None, None)


@dataclass(frozen=True)
class SessionKey:
    session_date: date
    session_type: SessionType
    scope: SessionScope = field(default_factory=SessionScope)

    def __str__(self) -> str:
        scope = "-" if self.scope.is_empty else "/".join("" if v is None else str(v) for v in self.scope.key())
        return f"{self.session_date.isoformat()} {self.session_type.value} [{scope}]"


@dataclass(frozen=True)
class AttendanceSession:
    session_id: int
    session_date: date
    session_type: SessionType
    scope: SessionScope
    created_by: Optional[str]
    created_at: datetime

    @property
    def key(self) -> SessionKey:
        return SessionKey(self.session_date, self.session_type, self.scope)


@dataclass(frozen=True)
class AttendanceRecord:
    session_id: int
    resident_id: int
    status: AttendanceStatus
    note: Optional[str]
    late_minutes: int
    marked_by: Optional[str]
    marked_at: datetime


@dataclass(frozen=True)
class MarkRequest:
    resident_id: int
    status: AttendanceStatus
    note: Optional[str] = None
    late_minutes: int = 0


@dataclass(frozen=True)
class CalendarEntry:
    day: date
    session_type: SessionType
    status: AttendanceStatus
