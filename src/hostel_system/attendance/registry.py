"""Attendance session registry.

A session is identified by (date, type, scope). Creation is an insert
guarded by a unique key; on conflict the existing row is read back, so
concurrent callers with the same key all end up with the same id.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Optional

from ..audit.service import AuditLog
from ..auth.model import Actor
from ..auth.policy import require
from ..common.datetime_utils import now_local
from ..common.validators import optional_text, require_enum, require_positive_int
from ..core.constants import MAX_BLOCK_LEN, MAX_COURSE_LEN
from ..core.enums import Operation, ResourceKind, SessionType
from ..core.exceptions import DuplicateSessionKey, ValidationError
from ..database.unit_of_work import UnitOfWork, UnitOfWorkFactory
from .model import SessionKey, SessionScope

logger = logging.getLogger(__name__)


def build_key(session_date: date, session_type, scope: Optional[SessionScope] = None) -> SessionKey:
    if not isinstance(session_date, date):
        raise ValidationError("session_date must be a date")
    if isinstance(session_date, datetime):
        session_date = session_date.date()
    session_type = require_enum(SessionType, session_type, "session_type")
    scope = scope or SessionScope()
    scope = SessionScope(
        block=optional_text(scope.block, "block", max_len=MAX_BLOCK_LEN),
        room_id=None if scope.room_id in (None, "") else require_positive_int(scope.room_id, "room_id"),
        course=optional_text(scope.course, "course", max_len=MAX_COURSE_LEN),
        year=None if scope.year in (None, "") else require_positive_int(scope.year, "year"),
    )
    return SessionKey(session_date=session_date, session_type=session_type, scope=scope)


class SessionRegistry:
    def __init__(self, uow_factory: UnitOfWorkFactory, audit: AuditLog, *, clock: Callable[[], datetime] = now_local):
        self._uow = uow_factory
        self._audit = audit
        self._clock = clock

    def get_or_create(
        self,
        *,
        actor: Actor,
        session_date: date,
        session_type,
        scope: Optional[SessionScope] = None,
    ) -> int:
        require(actor, ResourceKind.ATTENDANCE_SESSION, Operation.WRITE)
        key = build_key(session_date, session_type, scope)

        with self._uow() as tx:
            session_id, _ = self.resolve_in(tx, key, actor=actor)
        return session_id

    def resolve_in(self, tx: UnitOfWork, key: SessionKey, *, actor: Actor) -> tuple[int, bool]:
        """Return (session_id, created) for ``key`` within an open unit of work."""

        existing = tx.sessions.get_by_key(key)
        if existing is not None:
            return existing.session_id, False

        try:
            session_id = tx.sessions.insert(key, created_by=actor.identity_id, created_at=self._clock())
        except DuplicateSessionKey:
            logger.debug("Session %s created concurrently, reading it back", key)
            existing = tx.sessions.get_by_key(key, locking=True)
            if existing is None:
                raise
            return existing.session_id, False

        self._audit.record(
            tx,
            actor=actor,
            action="create_session",
            entity=ResourceKind.ATTENDANCE_SESSION,
            entity_id=session_id,
            details={"key": str(key)},
        )
        logger.info("Created attendance session %s for %s", session_id, key)
        return session_id, True
