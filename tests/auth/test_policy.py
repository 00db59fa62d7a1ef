from __future__ import annotations

import pytest

from hostel_system.auth.model import Actor
from hostel_system.auth.policy import authorize, require
from hostel_system.core.enums import Decision, Operation, ResourceKind, Role
from hostel_system.core.exceptions import AuthorizationDenied


ADMIN = Actor(identity_id="a", role=Role.ADMIN)
STAFF = Actor(identity_id="s", role=Role.STAFF)
RESIDENT = Actor(identity_id="r", role=Role.RESIDENT, resident_id=7)
UNLINKED_RESIDENT = Actor(identity_id="u", role=Role.RESIDENT)
ANON = Actor.anonymous("x")


@pytest.mark.parametrize("kind", list(ResourceKind))
@pytest.mark.parametrize("op", list(Operation))
def test_admin_is_permitted_everything(kind, op):
    assert authorize(ADMIN, kind, op) == Decision.PERMIT


@pytest.mark.parametrize("kind", list(ResourceKind))
def test_staff_reads_every_kind(kind):
    assert authorize(STAFF, kind, Operation.READ) == Decision.PERMIT


def test_staff_writes_only_operational_kinds():
    assert authorize(STAFF, ResourceKind.ALLOCATION, Operation.WRITE) == Decision.PERMIT
    assert authorize(STAFF, ResourceKind.ATTENDANCE_SESSION, Operation.WRITE) == Decision.PERMIT
    assert authorize(STAFF, ResourceKind.ATTENDANCE_RECORD, Operation.WRITE) == Decision.PERMIT

    assert authorize(STAFF, ResourceKind.ROLE_BINDING, Operation.WRITE) == Decision.DENY
    assert authorize(STAFF, ResourceKind.ROOM, Operation.WRITE) == Decision.DENY
    assert authorize(STAFF, ResourceKind.RESIDENT, Operation.WRITE) == Decision.DENY


def test_resident_needs_ownership():
    assert authorize(RESIDENT, ResourceKind.ATTENDANCE_RECORD, Operation.READ, row_owner_id=7) == Decision.PERMIT
    assert authorize(RESIDENT, ResourceKind.ATTENDANCE_RECORD, Operation.READ, row_owner_id=8) == Decision.DENY
    assert authorize(RESIDENT, ResourceKind.ATTENDANCE_RECORD, Operation.READ) == Decision.DENY
    assert authorize(UNLINKED_RESIDENT, ResourceKind.RESIDENT, Operation.READ, row_owner_id=7) == Decision.DENY


def test_resident_cannot_allocate_even_own_row():
    assert authorize(RESIDENT, ResourceKind.ALLOCATION, Operation.READ, row_owner_id=7) == Decision.PERMIT
    assert authorize(RESIDENT, ResourceKind.ALLOCATION, Operation.WRITE, row_owner_id=7) == Decision.DENY
    assert authorize(RESIDENT, ResourceKind.ROLE_BINDING, Operation.WRITE, row_owner_id=7) == Decision.DENY


@pytest.mark.parametrize("op", list(Operation))
def test_anonymous_is_denied(op):
    assert authorize(ANON, ResourceKind.ROOM, op) == Decision.DENY


def test_require_raises_with_details():
    with pytest.raises(AuthorizationDenied) as exc:
        require(STAFF, ResourceKind.ROLE_BINDING, Operation.WRITE)

    details = exc.value.details()
    assert details["role"] == "staff"
    assert details["resource"] == "role_binding"
    assert details["operation"] == "write"
