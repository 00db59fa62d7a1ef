from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from ..allocations.service import AllocationManager
from ..audit.service import AuditLog
from ..auth.model import Actor
from ..auth.policy import require
from ..common.datetime_utils import now_local
from ..common.validators import optional_text, require_non_empty, require_positive_int
from ..core.constants import MAX_CONTACT_LEN, MAX_COURSE_LEN, MAX_EMAIL_LEN, MAX_FULL_NAME_LEN
from ..core.enums import Operation, ResourceKind
from ..core.exceptions import RecordNotFound, ValidationError
from ..database.unit_of_work import UnitOfWorkFactory
from .model import Resident

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResidentInput:
    full_name: str
    email: str
    contact: Optional[str]
    course: Optional[str]
    year: Optional[int]


def _clean(
    *,
    full_name: str,
    email: str,
    contact: Optional[str],
    course: Optional[str],
    year,
) -> ResidentInput:
    full_name = require_non_empty(full_name, "full_name", max_len=MAX_FULL_NAME_LEN)
    email = require_non_empty(email, "email", max_len=MAX_EMAIL_LEN).lower()
    if "@" not in email or email.startswith("@") or email.endswith("@"):
        raise ValidationError(f"Invalid email {email!r}")
    if year in (None, ""):
        year = None
    else:
        year = require_positive_int(year, "year")
    return ResidentInput(
        full_name=full_name,
        email=email,
        contact=optional_text(contact, "contact", max_len=MAX_CONTACT_LEN),
        course=optional_text(course, "course", max_len=MAX_COURSE_LEN),
        year=year,
    )


class ResidentService:
    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        audit: AuditLog,
        allocations: AllocationManager,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._uow = uow_factory
        self._audit = audit
        self._allocations = allocations
        self._clock = clock

    def enroll(
        self,
        *,
        actor: Actor,
        full_name: str,
        email: str,
        contact: Optional[str] = None,
        course: Optional[str] = None,
        year=None,
    ) -> int:
        require(actor, ResourceKind.RESIDENT, Operation.WRITE)
        data = _clean(full_name=full_name, email=email, contact=contact, course=course, year=year)

        with self._uow() as tx:
            resident_id = tx.residents.create(
                full_name=data.full_name,
                email=data.email,
                contact=data.contact,
                course=data.course,
                year=data.year,
                created_at=self._clock(),
            )
            self._audit.record(
                tx,
                actor=actor,
                action="enroll",
                entity=ResourceKind.RESIDENT,
                entity_id=resident_id,
                details={"full_name": data.full_name, "email": data.email},
            )

        logger.info("Enrolled resident %s", resident_id)
        return resident_id

    def update(
        self,
        *,
        actor: Actor,
        resident_id: int,
        full_name: str,
        email: str,
        contact: Optional[str] = None,
        course: Optional[str] = None,
        year=None,
    ) -> Resident:
        resident_id = require_positive_int(resident_id, "resident_id")
        require(actor, ResourceKind.RESIDENT, Operation.WRITE, row_owner_id=resident_id)
        data = _clean(full_name=full_name, email=email, contact=contact, course=course, year=year)

        with self._uow() as tx:
            if tx.residents.get_by_id(resident_id, for_update=True) is None:
                raise RecordNotFound("resident", resident_id)
            tx.residents.update(
                resident_id,
                full_name=data.full_name,
                email=data.email,
                contact=data.contact,
                course=data.course,
                year=data.year,
            )
            self._audit.record(
                tx,
                actor=actor,
                action="update_resident",
                entity=ResourceKind.RESIDENT,
                entity_id=resident_id,
                details={"full_name": data.full_name, "email": data.email},
            )
            return tx.residents.get_by_id(resident_id)

    def disable(self, *, actor: Actor, resident_id: int) -> None:
        """Soft-disable a resident and vacate their room in the same transaction."""

        require(actor, ResourceKind.RESIDENT, Operation.WRITE)
        resident_id = require_positive_int(resident_id, "resident_id")

        with self._uow() as tx:
            resident = tx.residents.get_by_id(resident_id, for_update=True)
            if resident is None:
                raise RecordNotFound("resident", resident_id)
            if not resident.is_active:
                return
            tx.residents.set_active(resident_id, False)
            self._allocations.vacate_within(tx, actor=actor, resident_id=resident_id, reason="resident disabled")
            self._audit.record(
                tx,
                actor=actor,
                action="disable_resident",
                entity=ResourceKind.RESIDENT,
                entity_id=resident_id,
            )

        logger.info("Disabled resident %s", resident_id)

    def get(self, *, actor: Actor, resident_id: int) -> Resident:
        resident_id = require_positive_int(resident_id, "resident_id")
        require(actor, ResourceKind.RESIDENT, Operation.READ, row_owner_id=resident_id)
        with self._uow(readonly=True) as tx:
            resident = tx.residents.get_by_id(resident_id)
        if resident is None:
            raise RecordNotFound("resident", resident_id)
        return resident

    def list_unallocated(self, *, actor: Actor) -> list[Resident]:
        require(actor, ResourceKind.RESIDENT, Operation.READ)
        with self._uow(readonly=True) as tx:
            return list(tx.residents.list_unallocated())
