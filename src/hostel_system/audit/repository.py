from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Protocol, Sequence

from .model import AuditEntry


class AuditRepository(Protocol):
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
        raise NotImplementedError

    def list_recent(self, limit: int) -> Sequence[AuditEntry]:
        raise NotImplementedError
