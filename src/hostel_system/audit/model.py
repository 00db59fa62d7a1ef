from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional


@dataclass(frozen=True)
class AuditEntry:
    """Append-only record of a mutating action."""

    entry_id: int
    actor_id: Optional[str]
    action: str
    entity: str
    entity_id: Optional[int]
    at: datetime
    details: dict[str, Any] = field(default_factory=dict)
