from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

import mysql.connector

from ..core.exceptions import AlreadyAllocated
from ..database.mysql_base import fetchall, fetchone, is_duplicate_key
from .model import Allocation
from .repository import AllocationRepository


def _row_to_allocation(row) -> Allocation:
    return Allocation(
        allocation_id=int(row["allocation_id"]),
        resident_id=int(row["resident_id"]),
        room_id=int(row["room_id"]),
        started_at=row["started_at"],
        ended_at=row.get("ended_at"),
    )


class MySQLAllocationRepository(AllocationRepository):
    def __init__(self, cur):
        self._cur = cur

    def get_active_for_resident(self, resident_id: int) -> Optional[Allocation]:
        self._cur.execute(
            """
            SELECT allocation_id, resident_id, room_id, started_at, ended_at
            FROM allocations
            WHERE resident_id=%s AND ended_at IS NULL
            """,
            (int(resident_id),),
        )
        row = fetchone(self._cur)
        return _row_to_allocation(row) if row else None

    def count_active_for_room(self, room_id: int) -> int:
        self._cur.execute(
            "SELECT COUNT(*) AS n FROM allocations WHERE room_id=%s AND ended_at IS NULL",
            (int(room_id),),
        )
        row = fetchone(self._cur)
        return int(row["n"]) if row else 0

    def list_active_for_room(self, room_id: int) -> Sequence[Allocation]:
        self._cur.execute(
            """
            SELECT allocation_id, resident_id, room_id, started_at, ended_at
            FROM allocations
            WHERE room_id=%s AND ended_at IS NULL
            ORDER BY started_at, allocation_id
            """,
            (int(room_id),),
        )
        return [_row_to_allocation(r) for r in fetchall(self._cur)]

    def insert(self, *, resident_id: int, room_id: int, started_at: datetime) -> int:
        try:
            self._cur.execute(
                "INSERT INTO allocations(resident_id, room_id, started_at) VALUES(%s,%s,%s)",
                (int(resident_id), int(room_id), started_at),
            )
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e, "uq_allocations_active_resident"):
                raise AlreadyAllocated(int(resident_id))
            raise
        return int(self._cur.lastrowid)

    def end(self, allocation_id: int, *, ended_at: datetime) -> None:
        self._cur.execute(
            "UPDATE allocations SET ended_at=%s WHERE allocation_id=%s AND ended_at IS NULL",
            (ended_at, int(allocation_id)),
        )

    def list_for_resident(self, resident_id: int) -> Sequence[Allocation]:
        self._cur.execute(
            """
            SELECT allocation_id, resident_id, room_id, started_at, ended_at
            FROM allocations
            WHERE resident_id=%s
            ORDER BY started_at DESC, allocation_id DESC
            """,
            (int(resident_id),),
        )
        return [_row_to_allocation(r) for r in fetchall(self._cur)]
