from __future__ import annotations

from datetime import date

import pytest

from hostel_system.attendance.model import MarkRequest
from hostel_system.auth.model import Actor
from hostel_system.core.enums import AttendanceStatus, Role
from hostel_system.core.exceptions import AuthorizationDenied, RecordNotFound, ValidationError


@pytest.fixture
def session_id(container, staff):
    return container.session_registry.get_or_create(actor=staff, session_date=date(2025, 1, 10), session_type="Morning")


def final_state(store):
    return {k: (r.status, r.note, r.late_minutes) for k, r in store.records.items()}


def test_remark_overwrites_single_row(store, container, staff, session_id):
    s1 = store.add_resident("S One")
    svc = container.attendance_service

    svc.bulk_mark(actor=staff, session_id=session_id, records=[{"resident_id": s1, "status": "Present", "late_minutes": 0}])
    svc.bulk_mark(actor=staff, session_id=session_id, records=[{"resident_id": s1, "status": "Present", "late_minutes": 5}])

    assert len(store.records) == 1
    assert store.records[(session_id, s1)].late_minutes == 5


def test_same_batch_twice_is_idempotent(store, container, staff, session_id):
    s1 = store.add_resident("S One")
    s2 = store.add_resident("S Two")
    batch = [
        MarkRequest(resident_id=s1, status=AttendanceStatus.PRESENT),
        MarkRequest(resident_id=s2, status=AttendanceStatus.LATE, note="bus", late_minutes=12),
    ]
    svc = container.attendance_service

    svc.bulk_mark(actor=staff, session_id=session_id, records=batch)
    once = final_state(store)
    svc.bulk_mark(actor=staff, session_id=session_id, records=batch)

    assert final_state(store) == once


def test_missing_resident_applies_nothing(store, container, staff, session_id):
    s1 = store.add_resident("S One")

    with pytest.raises(RecordNotFound) as exc:
        container.attendance_service.bulk_mark(
            actor=staff,
            session_id=session_id,
            records=[{"resident_id": s1, "status": "Present"}, {"resident_id": 404, "status": "Absent"}],
        )

    assert exc.value.entity_id == 404
    assert store.records == {}


def test_missing_session(store, container, staff):
    s1 = store.add_resident("S One")
    with pytest.raises(RecordNotFound):
        container.attendance_service.bulk_mark(
            actor=staff, session_id=77, records=[{"resident_id": s1, "status": "Present"}]
        )


def test_last_entry_for_a_resident_wins(store, container, staff, session_id):
    s1 = store.add_resident("S One")

    count = container.attendance_service.bulk_mark(
        actor=staff,
        session_id=session_id,
        records=[{"resident_id": s1, "status": "Absent"}, {"resident_id": s1, "status": "Excused", "note": "leave"}],
    )

    assert count == 1
    assert store.records[(session_id, s1)].status == AttendanceStatus.EXCUSED


@pytest.mark.parametrize(
    "record",
    [
        {"resident_id": 1, "status": "Sleeping"},
        {"resident_id": 1, "status": "Late", "late_minutes": -3},
        {"resident_id": "abc", "status": "Present"},
        {"status": "Present"},
        {"resident_id": 1, "status": "Present", "note": "n" * 256},
        {"resident_id": 1.9, "status": "Present"},
        {"resident_id": True, "status": "Present"},
    ],
)
def test_invalid_records_are_rejected(store, container, staff, session_id, record):
    store.add_resident("S One")
    with pytest.raises(ValidationError):
        container.attendance_service.bulk_mark(actor=staff, session_id=session_id, records=[record])


def test_resident_may_mark_only_themselves(store, uow, container, session_id):
    me = store.add_resident("Me")
    other = store.add_resident("Other")
    actor = Actor(identity_id="me", role=Role.RESIDENT, resident_id=me)
    svc = container.attendance_service
    opened = uow.opened

    with pytest.raises(AuthorizationDenied):
        svc.bulk_mark(
            actor=actor,
            session_id=session_id,
            records=[{"resident_id": me, "status": "Present"}, {"resident_id": other, "status": "Present"}],
        )
    assert uow.opened == opened
    assert store.records == {}

    svc.bulk_mark(actor=actor, session_id=session_id, records=[{"resident_id": me, "status": "Present"}])
    assert store.records[(session_id, me)].marked_by == "me"


def test_self_check_in_creates_session_and_marks_present(store, container, clock):
    me = store.add_resident("Me")
    actor = Actor(identity_id="me", role=Role.RESIDENT, resident_id=me)

    session_id = container.attendance_service.self_check_in(actor=actor)
    again = container.attendance_service.self_check_in(actor=actor)

    assert session_id == again
    session = store.sessions[session_id]
    assert session.session_date == clock.now.date()
    assert store.records[(session_id, me)].status == AttendanceStatus.PRESENT
    assert len(store.records) == 1


def test_self_check_in_needs_linked_resident(container, staff, anonymous):
    with pytest.raises(ValidationError):
        container.attendance_service.self_check_in(actor=staff)
    with pytest.raises(AuthorizationDenied):
        container.attendance_service.self_check_in(actor=anonymous)
