from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

import mysql.connector

from ..core.exceptions import ValidationError
from ..database.mysql_base import fetchall, fetchone, is_duplicate_key, like_pattern
from .model import Resident
from .repository import ResidentRepository

_COLUMNS = "r.resident_id, r.full_name, r.email, r.contact, r.course, r.year, r.identity_id, r.is_active, r.created_at"


def _row_to_resident(row) -> Resident:
    return Resident(
        resident_id=int(row["resident_id"]),
        full_name=row["full_name"],
        email=row["email"],
        contact=row.get("contact"),
        course=row.get("course"),
        year=int(row["year"]) if row.get("year") is not None else None,
        identity_id=row.get("identity_id"),
        is_active=bool(row.get("is_active", True)),
        created_at=row.get("created_at"),
    )


class MySQLResidentRepository(ResidentRepository):
    def __init__(self, cur):
        self._cur = cur

    def get_by_id(self, resident_id: int, *, for_update: bool = False) -> Optional[Resident]:
        sql = f"SELECT {_COLUMNS} FROM residents r WHERE r.resident_id=%s"
        if for_update:
            sql += " FOR UPDATE"
        self._cur.execute(sql, (int(resident_id),))
        row = fetchone(self._cur)
        return _row_to_resident(row) if row else None

    def create(
        self,
        *,
        full_name: str,
        email: str,
        contact: Optional[str],
        course: Optional[str],
        year: Optional[int],
        created_at: datetime,
    ) -> int:
        try:
            self._cur.execute(
                """
                INSERT INTO residents(full_name, email, contact, course, year, is_active, created_at)
                VALUES(%s,%s,%s,%s,%s,1,%s)
                """,
                (full_name, email, contact, course, year, created_at),
            )
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e, "uq_residents_email"):
                raise ValidationError(f"Email {email} is already registered")
            raise
        return int(self._cur.lastrowid)

    def update(
        self,
        resident_id: int,
        *,
        full_name: str,
        email: str,
        contact: Optional[str],
        course: Optional[str],
        year: Optional[int],
    ) -> None:
        try:
            self._cur.execute(
                """
                UPDATE residents
                SET full_name=%s, email=%s, contact=%s, course=%s, year=%s
                WHERE resident_id=%s
                """,
                (full_name, email, contact, course, year, int(resident_id)),
            )
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e, "uq_residents_email"):
                raise ValidationError(f"Email {email} is already registered")
            raise

    def set_active(self, resident_id: int, is_active: bool) -> None:
        self._cur.execute(
            "UPDATE residents SET is_active=%s WHERE resident_id=%s",
            (1 if is_active else 0, int(resident_id)),
        )

    def link_identity(self, resident_id: int, identity_id: str) -> None:
        self._cur.execute(
            "UPDATE residents SET identity_id=NULL WHERE identity_id=%s AND resident_id<>%s",
            (identity_id, int(resident_id)),
        )
        self._cur.execute(
            "UPDATE residents SET identity_id=%s WHERE resident_id=%s",
            (identity_id, int(resident_id)),
        )

    def list_unallocated(self) -> Sequence[Resident]:
        self._cur.execute(
            f"""
            SELECT {_COLUMNS}
            FROM residents r
            LEFT JOIN allocations a ON a.resident_id = r.resident_id AND a.ended_at IS NULL
            WHERE r.is_active=1 AND a.allocation_id IS NULL
            ORDER BY r.full_name, r.resident_id
            """
        )
        return [_row_to_resident(r) for r in fetchall(self._cur)]

    def search(self, term: str, limit: int) -> Sequence[Resident]:
        pattern = like_pattern(term)
        self._cur.execute(
            f"""
            SELECT {_COLUMNS}
            FROM residents r
            WHERE r.full_name LIKE %s OR r.email LIKE %s OR r.course LIKE %s
            ORDER BY r.full_name, r.resident_id
            LIMIT %s
            """,
            (pattern, pattern, pattern, int(limit)),
        )
        return [_row_to_resident(r) for r in fetchall(self._cur)]
