from __future__ import annotations

from typing import Any, Callable, Optional

from ..auth.model import Actor
from ..auth.policy import require
from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_AUDIT_LIMIT
from ..core.enums import Operation, ResourceKind
from ..database.unit_of_work import UnitOfWork, UnitOfWorkFactory


class AuditLog:
    """Audit sink: one entry per mutating call, written in the caller's transaction."""

    def __init__(self, uow_factory: UnitOfWorkFactory, *, clock: Callable = now_local):
        self._uow = uow_factory
        self._clock = clock

    def record(
        self,
        tx: UnitOfWork,
        *,
        actor: Actor,
        action: str,
        entity: ResourceKind,
        entity_id: Optional[int],
        details: Optional[dict[str, Any]] = None,
    ) -> int:
        return tx.audit.append(
            actor_id=actor.identity_id,
            action=action,
            entity=entity.value,
            entity_id=entity_id,
            details=dict(details or {}),
            at=self._clock(),
        )

    def list_recent(self, *, actor: Actor, limit: int = DEFAULT_AUDIT_LIMIT):
        require(actor, ResourceKind.AUDIT_LOG, Operation.READ)
        limit = max(1, min(int(limit), 1000))
        with self._uow(readonly=True) as tx:
            return list(tx.audit.list_recent(limit))
