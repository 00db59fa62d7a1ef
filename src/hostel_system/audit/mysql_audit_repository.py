from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Optional, Sequence

from ..database.mysql_base import fetchall
from .model import AuditEntry
from .repository import AuditRepository


class MySQLAuditRepository(AuditRepository):
    def __init__(self, cur):
        self._cur = cur

    def append(
        self,
        *,
        actor_id: Optional[str],
        action: str,
        entity: str,
        entity_id: Optional[int],
        details: dict[str, Any],
        at: datetime,
    ) -> int:
        self._cur.execute(
            """
            INSERT INTO audit_logs(actor_id, action, entity, entity_id, details, at)
            VALUES(%s,%s,%s,%s,%s,%s)
            """,
            (actor_id, action, entity, entity_id, json.dumps(details, default=str), at),
        )
        return int(self._cur.lastrowid)

    def list_recent(self, limit: int) -> Sequence[AuditEntry]:
        self._cur.execute(
            """
            SELECT entry_id, actor_id, action, entity, entity_id, details, at
            FROM audit_logs
            ORDER BY at DESC, entry_id DESC
            LIMIT %s
            """,
            (int(limit),),
        )
        out: list[AuditEntry] = []
        for r in fetchall(self._cur):
            raw = r.get("details")
            if isinstance(raw, (bytes, bytearray)):
                raw = raw.decode("utf-8")
            out.append(
                AuditEntry(
                    entry_id=int(r["entry_id"]),
                    actor_id=r.get("actor_id"),
                    action=r["action"],
                    entity=r["entity"],
                    entity_id=r.get("entity_id"),
                    at=r["at"],
                    details=json.loads(raw) if raw else {},
                )
            )
        return out
