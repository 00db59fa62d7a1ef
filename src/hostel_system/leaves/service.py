from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable

from ..audit.service import AuditLog
from ..auth.model import Actor
from ..auth.policy import require
from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty, require_positive_int
from ..core.constants import MAX_NOTE_LEN
from ..core.enums import LeaveStatus, Operation, ResourceKind
from ..core.exceptions import InvalidDateRange, RecordNotFound, ValidationError
from ..database.unit_of_work import UnitOfWorkFactory
from .model import Leave

logger = logging.getLogger(__name__)


class LeaveService:
    """Leave is informational: it never changes attendance records on its own."""

    def __init__(self, uow_factory: UnitOfWorkFactory, audit: AuditLog, *, clock: Callable[[], datetime] = now_local):
        self._uow = uow_factory
        self._audit = audit
        self._clock = clock

    def request_leave(self, *, actor: Actor, resident_id: int, start_date: date, end_date: date, reason: str) -> int:
        resident_id = require_positive_int(resident_id, "resident_id")
        require(actor, ResourceKind.LEAVE, Operation.WRITE, row_owner_id=resident_id)
        reason = require_non_empty(reason, "reason", max_len=MAX_NOTE_LEN)
        if end_date < start_date:
            raise InvalidDateRange(start_date, end_date)

        with self._uow() as tx:
            if tx.residents.get_by_id(resident_id) is None:
                raise RecordNotFound("resident", resident_id)
            leave_id = tx.leaves.create(
                resident_id=resident_id,
                start_date=start_date,
                end_date=end_date,
                reason=reason,
                created_at=self._clock(),
            )
            self._audit.record(
                tx,
                actor=actor,
                action="request_leave",
                entity=ResourceKind.LEAVE,
                entity_id=leave_id,
                details={"resident_id": resident_id, "start_date": start_date, "end_date": end_date},
            )

        logger.info("Leave %s requested for resident %s", leave_id, resident_id)
        return leave_id

    def approve_leave(self, *, actor: Actor, leave_id: int) -> Leave:
        require(actor, ResourceKind.LEAVE, Operation.WRITE)
        leave_id = require_positive_int(leave_id, "leave_id")

        with self._uow() as tx:
            leave = tx.leaves.get_by_id(leave_id)
            if leave is None:
                raise RecordNotFound("leave", leave_id)
            if leave.status != LeaveStatus.PENDING:
                raise ValidationError(f"Leave {leave_id} has already been processed")
            if not tx.leaves.approve(leave_id, approved_by=actor.identity_id, approved_at=self._clock()):
                raise ValidationError(f"Leave {leave_id} has already been processed")
            self._audit.record(
                tx,
                actor=actor,
                action="approve_leave",
                entity=ResourceKind.LEAVE,
                entity_id=leave_id,
                details={"resident_id": leave.resident_id},
            )
            approved = tx.leaves.get_by_id(leave_id)

        logger.info("Leave %s approved by %s", leave_id, actor.identity_id)
        return approved

    def list_leaves(self, *, actor: Actor, resident_id: int) -> list[Leave]:
        resident_id = require_positive_int(resident_id, "resident_id")
        require(actor, ResourceKind.LEAVE, Operation.READ, row_owner_id=resident_id)
        with self._uow(readonly=True) as tx:
            return list(tx.leaves.list_for_resident(resident_id))

    def is_on_leave(self, *, actor: Actor, resident_id: int, day: date) -> bool:
        resident_id = require_positive_int(resident_id, "resident_id")
        require(actor, ResourceKind.LEAVE, Operation.READ, row_owner_id=resident_id)
        with self._uow(readonly=True) as tx:
            return tx.leaves.find_covering(resident_id, day) is not None
