from __future__ import annotations

import logging
from typing import Optional

from ..audit.service import AuditLog
from ..common.validators import require_enum, require_non_empty, require_positive_int
from ..core.constants import MAX_IDENTITY_LEN
from ..core.enums import Operation, ResourceKind, Role
from ..core.exceptions import RecordNotFound, ValidationError
from ..database.unit_of_work import UnitOfWorkFactory
from .model import Actor, RoleBinding
from .policy import require

logger = logging.getLogger(__name__)


class IdentityService:
    def __init__(self, uow_factory: UnitOfWorkFactory, audit: AuditLog):
        self._uow = uow_factory
        self._audit = audit

    def bind_role(self, *, actor: Actor, identity_id: str, role, resident_id: Optional[int] = None) -> RoleBinding:
        """Grant ``role`` to an identity, optionally linking it to a resident."""

        require(actor, ResourceKind.ROLE_BINDING, Operation.WRITE)
        identity_id = require_non_empty(identity_id, "identity_id", max_len=MAX_IDENTITY_LEN)
        role = require_enum(Role, role, "role")
        if role == Role.ANONYMOUS:
            raise ValidationError("Anonymous is not a bindable role")
        if resident_id is not None:
            resident_id = require_positive_int(resident_id, "resident_id")

        with self._uow() as tx:
            if resident_id is not None:
                if tx.residents.get_by_id(resident_id, for_update=True) is None:
                    raise RecordNotFound("resident", resident_id)
                tx.residents.link_identity(resident_id, identity_id)
            tx.bindings.upsert(identity_id=identity_id, role=role)
            self._audit.record(
                tx,
                actor=actor,
                action="bind_role",
                entity=ResourceKind.ROLE_BINDING,
                entity_id=resident_id,
                details={"identity_id": identity_id, "role": role.value},
            )
            binding = tx.bindings.get(identity_id)

        logger.info("Bound identity %s to role %s", identity_id, role.value)
        return binding
