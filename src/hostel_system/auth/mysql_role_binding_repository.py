from __future__ import annotations

from typing import Optional

from ..core.enums import Role
from ..database.mysql_base import fetchone
from .model import RoleBinding
from .repository import RoleBindingRepository


class MySQLRoleBindingRepository(RoleBindingRepository):
    def __init__(self, cur):
        self._cur = cur

    def get(self, identity_id: str) -> Optional[RoleBinding]:
        self._cur.execute(
            """
            SELECT b.identity_id, b.role, r.resident_id
            FROM identity_role_bindings b
            LEFT JOIN residents r ON r.identity_id = b.identity_id
            WHERE b.identity_id=%s
            """,
            (identity_id,),
        )
        row = fetchone(self._cur)
        if not row:
            return None
        return RoleBinding(
            identity_id=row["identity_id"],
            role=Role(row["role"]),
            resident_id=int(row["resident_id"]) if row.get("resident_id") is not None else None,
        )

    def upsert(self, *, identity_id: str, role: Role) -> None:
        self._cur.execute(
            """
            INSERT INTO identity_role_bindings(identity_id, role)
            VALUES(%s,%s)
            ON DUPLICATE KEY UPDATE role=VALUES(role)
            """,
            (identity_id, role.value),
        )
