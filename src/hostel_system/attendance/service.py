from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Iterable, Optional, Union

from ..audit.service import AuditLog
from ..auth.model import Actor
from ..auth.policy import require
from ..common.datetime_utils import month_bounds, now_local
from ..common.validators import optional_text, require_enum, require_month, require_positive_int
from ..core.constants import MAX_BULK_RECORDS, MAX_NOTE_LEN
from ..core.enums import AttendanceStatus, Operation, ResourceKind, SessionType
from ..core.exceptions import RecordNotFound, ValidationError
from ..database.unit_of_work import UnitOfWorkFactory
from .model import AttendanceRecord, CalendarEntry, MarkRequest
from .registry import SessionRegistry, build_key

logger = logging.getLogger(__name__)


def to_mark_request(item: Union[MarkRequest, dict]) -> MarkRequest:
    if isinstance(item, MarkRequest):
        raw = {
            "resident_id": item.resident_id,
            "status": item.status,
            "note": item.note,
            "late_minutes": item.late_minutes,
        }
    elif isinstance(item, dict):
        raw = item
    else:
        raise ValidationError("Each record must be an object")

    late = raw.get("late_minutes")
    try:
        late = 0 if late in (None, "") else int(late)
    except (TypeError, ValueError):
        raise ValidationError("late_minutes must be an integer")
    if late < 0:
        raise ValidationError("late_minutes must not be negative")

    return MarkRequest(
        resident_id=require_positive_int(raw.get("resident_id"), "resident_id"),
        status=require_enum(AttendanceStatus, raw.get("status"), "status"),
        note=optional_text(raw.get("note"), "note", max_len=MAX_NOTE_LEN),
        late_minutes=late,
    )


class AttendanceService:
    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        registry: SessionRegistry,
        audit: AuditLog,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._uow = uow_factory
        self._registry = registry
        self._audit = audit
        self._clock = clock

    def bulk_mark(self, *, actor: Actor, session_id: int, records: Iterable[Union[MarkRequest, dict]]) -> int:
        """Upsert one record per resident for a session, all or nothing.

        Later entries for the same resident in one batch win. Returns the
        number of residents written.
        """

        session_id = require_positive_int(session_id, "session_id")
        requests = [to_mark_request(r) for r in (records or [])]
        if not requests:
            raise ValidationError("records must not be empty")
        if len(requests) > MAX_BULK_RECORDS:
            raise ValidationError(f"At most {MAX_BULK_RECORDS} records per batch")

        for req in requests:
            require(actor, ResourceKind.ATTENDANCE_RECORD, Operation.WRITE, row_owner_id=req.resident_id)

        by_resident: dict[int, MarkRequest] = {}
        for req in requests:
            by_resident[req.resident_id] = req

        with self._uow() as tx:
            if tx.sessions.get_by_id(session_id) is None:
                raise RecordNotFound("attendance session", session_id)

            marked_at = self._clock()
            for resident_id in sorted(by_resident):
                req = by_resident[resident_id]
                if tx.residents.get_by_id(resident_id) is None:
                    raise RecordNotFound("resident", resident_id)
                tx.records.upsert(
                    session_id=session_id,
                    resident_id=resident_id,
                    status=req.status,
                    note=req.note,
                    late_minutes=req.late_minutes,
                    marked_by=actor.identity_id,
                    marked_at=marked_at,
                )

            self._audit.record(
                tx,
                actor=actor,
                action="bulk_mark",
                entity=ResourceKind.ATTENDANCE_SESSION,
                entity_id=session_id,
                details={"count": len(by_resident), "resident_ids": sorted(by_resident)},
            )

        logger.info("Marked %s record(s) for session %s", len(by_resident), session_id)
        return len(by_resident)

    def self_check_in(
        self,
        *,
        actor: Actor,
        session_type=SessionType.MORNING,
        day: Optional[date] = None,
    ) -> int:
        """Mark the calling resident Present for the day's unscoped session."""

        require(actor, ResourceKind.ATTENDANCE_RECORD, Operation.WRITE, row_owner_id=actor.resident_id)
        if actor.resident_id is None:
            raise ValidationError("No resident is linked to this identity")

        now = self._clock()
        key = build_key(day or now.date(), session_type)

        with self._uow() as tx:
            resident = tx.residents.get_by_id(actor.resident_id)
            if resident is None:
                raise RecordNotFound("resident", actor.resident_id)
            if not resident.is_active:
                raise ValidationError(f"Resident {resident.resident_id} is disabled")

            session_id, _ = self._registry.resolve_in(tx, key, actor=actor)
            tx.records.upsert(
                session_id=session_id,
                resident_id=resident.resident_id,
                status=AttendanceStatus.PRESENT,
                note=None,
                late_minutes=0,
                marked_by=actor.identity_id,
                marked_at=now,
            )
            self._audit.record(
                tx,
                actor=actor,
                action="self_check_in",
                entity=ResourceKind.ATTENDANCE_SESSION,
                entity_id=session_id,
                details={"resident_id": resident.resident_id},
            )

        logger.info("Resident %s checked in to session %s", actor.resident_id, session_id)
        return session_id

    def calendar(self, *, actor: Actor, resident_id: int, month, year) -> list[CalendarEntry]:
        resident_id = require_positive_int(resident_id, "resident_id")
        require(actor, ResourceKind.ATTENDANCE_RECORD, Operation.READ, row_owner_id=resident_id)
        month, year = require_month(month, year)
        start, end = month_bounds(month, year)

        with self._uow(readonly=True) as tx:
            if tx.residents.get_by_id(resident_id) is None:
                raise RecordNotFound("resident", resident_id)
            return list(tx.records.calendar_for_resident(resident_id, start, end))

    def summary(self, *, actor: Actor, resident_id: int, month, year) -> dict[str, int]:
        resident_id = require_positive_int(resident_id, "resident_id")
        require(actor, ResourceKind.ATTENDANCE_RECORD, Operation.READ, row_owner_id=resident_id)
        month, year = require_month(month, year)
        start, end = month_bounds(month, year)

        with self._uow(readonly=True) as tx:
            if tx.residents.get_by_id(resident_id) is None:
                raise RecordNotFound("resident", resident_id)
            counts = tx.records.status_counts_for_resident(resident_id, start, end)

        return {status.value: int(counts.get(status, 0)) for status in AttendanceStatus}

    def list_session_records(self, *, actor: Actor, session_id: int) -> list[AttendanceRecord]:
        require(actor, ResourceKind.ATTENDANCE_RECORD, Operation.READ)
        session_id = require_positive_int(session_id, "session_id")
        with self._uow(readonly=True) as tx:
            if tx.sessions.get_by_id(session_id) is None:
                raise RecordNotFound("attendance session", session_id)
            return list(tx.records.list_for_session(session_id))
