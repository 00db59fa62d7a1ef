from __future__ import annotations

from datetime import date

import pytest

from hostel_system.auth.model import Actor
from hostel_system.core.enums import AttendanceStatus, Role, SessionType
from hostel_system.core.exceptions import AuthorizationDenied, RecordNotFound, ValidationError


def mark(container, staff, day, session_type, resident_id, status):
    sid = container.session_registry.get_or_create(actor=staff, session_date=day, session_type=session_type)
    container.attendance_service.bulk_mark(
        actor=staff, session_id=sid, records=[{"resident_id": resident_id, "status": status}]
    )
    return sid


def test_calendar_lists_month_in_day_order(store, container, staff):
    rid = store.add_resident("Asha Verma")
    mark(container, staff, date(2025, 1, 12), "Morning", rid, "Absent")
    mark(container, staff, date(2025, 1, 3), "Morning", rid, "Present")
    mark(container, staff, date(2025, 1, 3), "Evening", rid, "Late")
    mark(container, staff, date(2025, 2, 1), "Morning", rid, "Present")

    entries = container.attendance_service.calendar(actor=staff, resident_id=rid, month=1, year=2025)

    assert [(e.day, e.session_type, e.status) for e in entries] == [
        (date(2025, 1, 3), SessionType.MORNING, AttendanceStatus.PRESENT),
        (date(2025, 1, 3), SessionType.EVENING, AttendanceStatus.LATE),
        (date(2025, 1, 12), SessionType.MORNING, AttendanceStatus.ABSENT),
    ]


def test_summary_is_zero_filled(store, container, staff):
    rid = store.add_resident("Asha Verma")
    mark(container, staff, date(2025, 1, 3), "Morning", rid, "Present")
    mark(container, staff, date(2025, 1, 4), "Morning", rid, "Present")
    mark(container, staff, date(2025, 1, 5), "Morning", rid, "Holiday")

    summary = container.attendance_service.summary(actor=staff, resident_id=rid, month="1", year="2025")

    assert summary == {"Present": 2, "Absent": 0, "Late": 0, "Excused": 0, "Holiday": 1}


def test_resident_reads_only_own_calendar(store, container):
    me = store.add_resident("Me")
    other = store.add_resident("Other")
    actor = Actor(identity_id="me", role=Role.RESIDENT, resident_id=me)

    assert container.attendance_service.calendar(actor=actor, resident_id=me, month=1, year=2025) == []
    with pytest.raises(AuthorizationDenied):
        container.attendance_service.calendar(actor=actor, resident_id=other, month=1, year=2025)


def test_bad_month_and_unknown_resident(store, container, staff):
    rid = store.add_resident("Asha Verma")
    with pytest.raises(ValidationError):
        container.attendance_service.calendar(actor=staff, resident_id=rid, month=13, year=2025)
    with pytest.raises(RecordNotFound):
        container.attendance_service.summary(actor=staff, resident_id=999, month=1, year=2025)
