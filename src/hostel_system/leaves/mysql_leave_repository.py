from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import LeaveStatus
from ..database.mysql_base import fetchall, fetchone
from .model import Leave
from .repository import LeaveRepository

_COLUMNS = "leave_id, resident_id, start_date, end_date, reason, status, created_at, approved_by, approved_at"


def _row_to_leave(row) -> Leave:
    return Leave(
        leave_id=int(row["leave_id"]),
        resident_id=int(row["resident_id"]),
        start_date=row["start_date"],
        end_date=row["end_date"],
        reason=row["reason"],
        status=LeaveStatus(row["status"]),
        created_at=row["created_at"],
        approved_by=row.get("approved_by"),
        approved_at=row.get("approved_at"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, cur):
        self._cur = cur

    def create(self, *, resident_id: int, start_date: date, end_date: date, reason: str, created_at: datetime) -> int:
        self._cur.execute(
            """
            INSERT INTO leaves(resident_id, start_date, end_date, reason, status, created_at)
            VALUES(%s,%s,%s,%s,%s,%s)
            """,
            (int(resident_id), start_date, end_date, reason, LeaveStatus.PENDING.value, created_at),
        )
        return int(self._cur.lastrowid)

    def get_by_id(self, leave_id: int) -> Optional[Leave]:
        self._cur.execute(f"SELECT {_COLUMNS} FROM leaves WHERE leave_id=%s", (int(leave_id),))
        row = fetchone(self._cur)
        return _row_to_leave(row) if row else None

    def approve(self, leave_id: int, *, approved_by: Optional[str], approved_at: datetime) -> bool:
        self._cur.execute(
            """
            UPDATE leaves
            SET status=%s, approved_by=%s, approved_at=%s
            WHERE leave_id=%s AND status=%s
            """,
            (LeaveStatus.APPROVED.value, approved_by, approved_at, int(leave_id), LeaveStatus.PENDING.value),
        )
        return self._cur.rowcount > 0

    def list_for_resident(self, resident_id: int) -> Sequence[Leave]:
        self._cur.execute(
            f"SELECT {_COLUMNS} FROM leaves WHERE resident_id=%s ORDER BY start_date DESC, leave_id DESC",
            (int(resident_id),),
        )
        return [_row_to_leave(r) for r in fetchall(self._cur)]

    def find_covering(self, resident_id: int, day: date) -> Optional[Leave]:
        self._cur.execute(
            f"""
            SELECT {_COLUMNS}
            FROM leaves
            WHERE resident_id=%s AND status=%s AND start_date<=%s AND end_date>=%s
            ORDER BY start_date
            LIMIT 1
            """,
            (int(resident_id), LeaveStatus.APPROVED.value, day, day),
        )
        row = fetchone(self._cur)
        return _row_to_leave(row) if row else None
