from __future__ import annotations

from typing import Optional, Sequence

import mysql.connector

from ..core.enums import RoomType
from ..core.exceptions import ValidationError
from ..database.mysql_base import fetchall, fetchone, is_duplicate_key, like_pattern
from .model import Room
from .repository import RoomRepository

_COLUMNS = "room_id, room_number, room_type, block, maintenance, occupant_count, maintenance_notes"


def _row_to_room(row) -> Room:
    return Room(
        room_id=int(row["room_id"]),
        room_number=row["room_number"],
        room_type=RoomType(row["room_type"]),
        block=row.get("block"),
        maintenance=bool(row.get("maintenance")),
        occupant_count=int(row.get("occupant_count") or 0),
        maintenance_notes=row.get("maintenance_notes"),
    )


class MySQLRoomRepository(RoomRepository):
    def __init__(self, cur):
        self._cur = cur

    def get_by_id(self, room_id: int, *, for_update: bool = False) -> Optional[Room]:
        sql = f"SELECT {_COLUMNS} FROM rooms WHERE room_id=%s"
        if for_update:
            sql += " FOR UPDATE"
        self._cur.execute(sql, (int(room_id),))
        row = fetchone(self._cur)
        return _row_to_room(row) if row else None

    def create(self, *, room_number: str, room_type: RoomType, block: Optional[str]) -> int:
        try:
            self._cur.execute(
                """
                INSERT INTO rooms(room_number, room_type, block, maintenance, occupant_count)
                VALUES(%s,%s,%s,0,0)
                """,
                (room_number, room_type.value, block),
            )
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e, "uq_rooms_number"):
                raise ValidationError(f"Room number {room_number} already exists")
            raise
        return int(self._cur.lastrowid)

    def set_maintenance(self, room_id: int, *, maintenance: bool, notes: Optional[str]) -> None:
        self._cur.execute(
            "UPDATE rooms SET maintenance=%s, maintenance_notes=%s WHERE room_id=%s",
            (1 if maintenance else 0, notes, int(room_id)),
        )

    def refresh_occupancy(self, room_id: int) -> int:
        self._cur.execute(
            """
            UPDATE rooms
            SET occupant_count = (
                SELECT COUNT(*) FROM allocations WHERE room_id=%s AND ended_at IS NULL
            )
            WHERE room_id=%s
            """,
            (int(room_id), int(room_id)),
        )
        self._cur.execute("SELECT occupant_count FROM rooms WHERE room_id=%s", (int(room_id),))
        row = fetchone(self._cur)
        return int(row["occupant_count"]) if row else 0

    def list_all(self) -> Sequence[Room]:
        self._cur.execute(f"SELECT {_COLUMNS} FROM rooms ORDER BY block, room_number")
        return [_row_to_room(r) for r in fetchall(self._cur)]

    def search(self, term: str, limit: int) -> Sequence[Room]:
        pattern = like_pattern(term)
        self._cur.execute(
            f"""
            SELECT {_COLUMNS}
            FROM rooms
            WHERE room_number LIKE %s OR block LIKE %s OR room_type LIKE %s
            ORDER BY block, room_number
            LIMIT %s
            """,
            (pattern, pattern, pattern, int(limit)),
        )
        return [_row_to_room(r) for r in fetchall(self._cur)]
