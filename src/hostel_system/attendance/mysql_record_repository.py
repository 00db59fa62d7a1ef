from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus, SessionType
from ..database.mysql_base import fetchall, fetchone
from .model import AttendanceRecord, CalendarEntry
from .repository import RecordRepository


def _row_to_record(row) -> AttendanceRecord:
    return AttendanceRecord(
        session_id=int(row["session_id"]),
        resident_id=int(row["resident_id"]),
        status=AttendanceStatus(row["status"]),
        note=row.get("note"),
        late_minutes=int(row.get("late_minutes") or 0),
        marked_by=row.get("marked_by"),
        marked_at=row["marked_at"],
    )


class MySQLRecordRepository(RecordRepository):
    def __init__(self, cur):
        self._cur = cur

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
        self._cur.execute(
            """
            INSERT INTO attendance_records(session_id, resident_id, status, note, late_minutes, marked_by, marked_at)
            VALUES(%s,%s,%s,%s,%s,%s,%s)
            ON DUPLICATE KEY UPDATE
                status=VALUES(status),
                note=VALUES(note),
                late_minutes=VALUES(late_minutes),
                marked_by=VALUES(marked_by),
                marked_at=VALUES(marked_at)
            """,
            (int(session_id), int(resident_id), status.value, note, int(late_minutes), marked_by, marked_at),
        )

    def get(self, session_id: int, resident_id: int) -> Optional[AttendanceRecord]:
        self._cur.execute(
            """
            SELECT session_id, resident_id, status, note, late_minutes, marked_by, marked_at
            FROM attendance_records
            WHERE session_id=%s AND resident_id=%s
            """,
            (int(session_id), int(resident_id)),
        )
        row = fetchone(self._cur)
        return _row_to_record(row) if row else None

    def list_for_session(self, session_id: int) -> Sequence[AttendanceRecord]:
        self._cur.execute(
            """
            SELECT session_id, resident_id, status, note, late_minutes, marked_by, marked_at
            FROM attendance_records
            WHERE session_id=%s
            ORDER BY resident_id
            """,
            (int(session_id),),
        )
        return [_row_to_record(r) for r in fetchall(self._cur)]

    def calendar_for_resident(self, resident_id: int, start: date, end: date) -> Sequence[CalendarEntry]:
        self._cur.execute(
            """
            SELECT s.session_date, s.session_type, r.status
            FROM attendance_records r
            JOIN attendance_sessions s ON s.session_id = r.session_id
            WHERE r.resident_id=%s AND s.session_date BETWEEN %s AND %s
            ORDER BY s.session_date, s.session_type, s.session_id
            """,
            (int(resident_id), start, end),
        )
        return [
            CalendarEntry(
                day=row["session_date"],
                session_type=SessionType(row["session_type"]),
                status=AttendanceStatus(row["status"]),
            )
            for row in fetchall(self._cur)
        ]

    def status_counts_for_resident(self, resident_id: int, start: date, end: date) -> dict[AttendanceStatus, int]:
        self._cur.execute(
            """
            SELECT r.status, COUNT(*) AS n
            FROM attendance_records r
            JOIN attendance_sessions s ON s.session_id = r.session_id
            WHERE r.resident_id=%s AND s.session_date BETWEEN %s AND %s
            GROUP BY r.status
            """,
            (int(resident_id), start, end),
        )
        return {AttendanceStatus(row["status"]): int(row["n"]) for row in fetchall(self._cur)}
