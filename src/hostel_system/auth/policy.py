"""Authorization engine.

Pure functions of (actor, resource kind, operation, row owner). No storage
access and no side effects besides logging a denial.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..core.enums import Decision, Operation, ResourceKind, Role
from ..core.exceptions import AuthorizationDenied
from .model import Actor

logger = logging.getLogger(__name__)

OPERATIONAL_KINDS = frozenset(
    {
        ResourceKind.ALLOCATION,
        ResourceKind.ATTENDANCE_SESSION,
        ResourceKind.ATTENDANCE_RECORD,
    }
)

# Kinds a resident may write when the row is their own.
RESIDENT_WRITABLE_KINDS = frozenset(
    {
        ResourceKind.RESIDENT,
        ResourceKind.ATTENDANCE_RECORD,
        ResourceKind.LEAVE,
    }
)


def authorize(
    actor: Actor,
    resource: ResourceKind,
    operation: Operation,
    row_owner_id: Optional[int] = None,
) -> Decision:
    role = actor.role

    if role == Role.ADMIN:
        return Decision.PERMIT

    if role == Role.STAFF:
        if operation == Operation.READ:
            return Decision.PERMIT
        return Decision.PERMIT if resource in OPERATIONAL_KINDS else Decision.DENY

    if role == Role.RESIDENT:
        # Ownership comes from the resident <-> identity link, never from a display field.
        if row_owner_id is None or actor.resident_id is None or int(row_owner_id) != actor.resident_id:
            return Decision.DENY
        if operation == Operation.WRITE and resource not in RESIDENT_WRITABLE_KINDS:
            return Decision.DENY
        return Decision.PERMIT

    return Decision.DENY


def require(
    actor: Actor,
    resource: ResourceKind,
    operation: Operation,
    row_owner_id: Optional[int] = None,
) -> None:
    """Raise AuthorizationDenied unless ``authorize`` permits."""

    if authorize(actor, resource, operation, row_owner_id) == Decision.PERMIT:
        return

    logger.warning(
        "Denied %s %s for identity=%s role=%s owner=%s",
        operation.value,
        resource.value,
        actor.identity_id,
        actor.role.value,
        row_owner_id,
    )
    raise AuthorizationDenied(
        identity_id=actor.identity_id,
        role=actor.role.value,
        resource=resource.value,
        operation=operation.value,
        row_owner_id=row_owner_id,
    )
