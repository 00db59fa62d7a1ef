from __future__ import annotations

from datetime import date

import pytest

from hostel_system.auth.model import Actor
from hostel_system.core.enums import LeaveStatus, Role
from hostel_system.core.exceptions import AuthorizationDenied, InvalidDateRange, ValidationError


@pytest.fixture
def resident(store):
    rid = store.add_resident("Asha Verma")
    return rid, Actor(identity_id="asha", role=Role.RESIDENT, resident_id=rid)


def test_end_before_start_is_invalid_range(container, resident):
    rid, me = resident
    with pytest.raises(InvalidDateRange) as exc:
        container.leave_service.request_leave(
            actor=me, resident_id=rid, start_date=date(2025, 1, 10), end_date=date(2025, 1, 9), reason="trip"
        )
    assert exc.value.details() == {"start": "2025-01-10", "end": "2025-01-09"}


def test_request_then_approve(store, container, admin, resident):
    rid, me = resident
    svc = container.leave_service
    leave_id = svc.request_leave(
        actor=me, resident_id=rid, start_date=date(2025, 1, 10), end_date=date(2025, 1, 12), reason="home visit"
    )

    assert not svc.is_on_leave(actor=me, resident_id=rid, day=date(2025, 1, 11))

    approved = svc.approve_leave(actor=admin, leave_id=leave_id)
    assert approved.status == LeaveStatus.APPROVED
    assert approved.approved_by == admin.identity_id

    assert svc.is_on_leave(actor=me, resident_id=rid, day=date(2025, 1, 11))
    assert not svc.is_on_leave(actor=me, resident_id=rid, day=date(2025, 1, 13))

    with pytest.raises(ValidationError):
        svc.approve_leave(actor=admin, leave_id=leave_id)


def test_leave_does_not_touch_attendance(store, container, admin, resident):
    rid, me = resident
    leave_id = container.leave_service.request_leave(
        actor=me, resident_id=rid, start_date=date(2025, 1, 10), end_date=date(2025, 1, 10), reason="exam"
    )
    container.leave_service.approve_leave(actor=admin, leave_id=leave_id)

    assert store.records == {}
    assert store.sessions == {}


def test_resident_cannot_file_for_someone_else(store, container, resident, staff):
    other = store.add_resident("Other")
    _, me = resident
    with pytest.raises(AuthorizationDenied):
        container.leave_service.request_leave(
            actor=me, resident_id=other, start_date=date(2025, 1, 1), end_date=date(2025, 1, 2), reason="x"
        )
    with pytest.raises(AuthorizationDenied):
        container.leave_service.approve_leave(actor=staff, leave_id=1)


def test_reason_longer_than_its_column_is_rejected(store, container, resident):
    rid, me = resident
    with pytest.raises(ValidationError):
        container.leave_service.request_leave(
            actor=me, resident_id=rid, start_date=date(2025, 1, 10), end_date=date(2025, 1, 12), reason="r" * 256
        )
    assert store.leaves == {}
