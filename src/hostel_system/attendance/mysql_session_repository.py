from __future__ import annotations

from datetime import datetime
from typing import Optional

import mysql.connector

from ..core.enums import SessionType
from ..core.exceptions import DuplicateSessionKey
from ..database.mysql_base import fetchone, is_duplicate_key
from .model import AttendanceSession, SessionKey, SessionScope
from .repository import SessionRepository

_COLUMNS = "session_id, session_date, session_type, block, room_id, course, year, created_by, created_at"


def _row_to_session(row) -> AttendanceSession:
    return AttendanceSession(
        session_id=int(row["session_id"]),
        session_date=row["session_date"],
        session_type=SessionType(row["session_type"]),
        scope=SessionScope(
            block=row.get("block"),
            room_id=int(row["room_id"]) if row.get("room_id") is not None else None,
            course=row.get("course"),
            year=int(row["year"]) if row.get("year") is not None else None,
        ),
        created_by=row.get("created_by"),
        created_at=row["created_at"],
    )


class MySQLSessionRepository(SessionRepository):
    def __init__(self, cur):
        self._cur = cur

    def get_by_id(self, session_id: int) -> Optional[AttendanceSession]:
        self._cur.execute(f"SELECT {_COLUMNS} FROM attendance_sessions WHERE session_id=%s", (int(session_id),))
        row = fetchone(self._cur)
        return _row_to_session(row) if row else None

    def get_by_key(self, key: SessionKey, *, locking: bool = False) -> Optional[AttendanceSession]:
        sql = f"""
            SELECT {_COLUMNS}
            FROM attendance_sessions
            WHERE session_date=%s AND session_type=%s AND scope_key=%s
        """
        if locking:
            sql += " LOCK IN SHARE MODE"
        self._cur.execute(sql, (key.session_date, key.session_type.value, key.scope.storage_key()))
        row = fetchone(self._cur)
        return _row_to_session(row) if row else None

    def insert(self, key: SessionKey, *, created_by: Optional[str], created_at: datetime) -> int:
        scope = key.scope.normalized()
        try:
            self._cur.execute(
                """
                INSERT INTO attendance_sessions(
                    session_date, session_type, block, room_id, course, year, scope_key, created_by, created_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    key.session_date,
                    key.session_type.value,
                    *scope.key(),
                    scope.storage_key(),
                    created_by,
                    created_at,
                ),
            )
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e, "uq_attendance_sessions_key"):
                raise DuplicateSessionKey(key)
            raise
        return int(self._cur.lastrowid)
