from __future__ import annotations

import pytest

from hostel_system.core.enums import Role, RoomType
from hostel_system.main import create_app


@pytest.fixture
def app(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()


def login(client, identity_id):
    with client.session_transaction() as sess:
        sess["identity_id"] = identity_id


@pytest.fixture
def as_staff(store, client):
    store.bind("staff-1", Role.STAFF)
    login(client, "staff-1")
    return client


def test_anonymous_is_forbidden_with_error_kind(client):
    resp = client.get("/api/rooms")

    assert resp.status_code == 403
    body = resp.get_json()
    assert body["error"] == "authorization_denied"
    assert body["role"] == "anonymous"


def test_whoami_reflects_binding(store, client):
    rid = store.add_resident("Asha Verma")
    store.bind("asha", Role.RESIDENT, resident_id=rid)
    login(client, "asha")

    body = client.get("/api/me").get_json()

    assert body == {"identity_id": "asha", "role": "resident", "resident_id": rid}


def test_allocation_flow_and_capacity_conflict(store, as_staff):
    room = store.add_room("101", RoomType.DOUBLE)
    ids = [store.add_resident(n) for n in ("S One", "S Two", "S Three")]

    for rid in ids[:2]:
        resp = as_staff.post("/api/allocations", json={"resident_id": rid, "room_id": room})
        assert resp.status_code == 201

    resp = as_staff.post("/api/allocations", json={"resident_id": ids[2], "room_id": room})
    assert resp.status_code == 409
    assert resp.get_json() == {
        "error": "capacity_exceeded",
        "message": "Room 1 is full (capacity 2)",
        "room_id": room,
        "capacity": 2,
    }

    details = as_staff.get(f"/api/rooms/{room}").get_json()
    assert details["room"]["status"] == "Occupied"
    assert details["room"]["occupant_count"] == 2
    assert len(details["occupants"]) == 2

    unallocated = as_staff.get("/api/residents/unallocated").get_json()
    assert [r["resident_id"] for r in unallocated] == [ids[2]]


def test_already_allocated_and_vacate(store, as_staff):
    a = store.add_room("101")
    b = store.add_room("102")
    rid = store.add_resident("Asha Verma")
    as_staff.post("/api/allocations", json={"resident_id": rid, "room_id": a})

    resp = as_staff.post("/api/allocations", json={"resident_id": rid, "room_id": b})
    assert resp.status_code == 409
    assert resp.get_json()["room_id"] == a

    resp = as_staff.post("/api/allocations/transfer", json={"resident_id": rid, "room_id": b})
    assert resp.status_code == 200

    resp = as_staff.post(f"/api/residents/{rid}/vacate", json={"reason": "graduated"})
    assert resp.status_code == 200
    assert resp.get_json()["room_id"] == b

    resp = as_staff.post(f"/api/residents/{rid}/vacate")
    assert resp.status_code == 404


def test_session_and_bulk_mark_round(store, as_staff):
    rid = store.add_resident("Asha Verma")

    first = as_staff.post("/api/attendance/sessions", json={"date": "2025-01-10", "session_type": "Morning"})
    second = as_staff.post("/api/attendance/sessions", json={"date": "2025-01-10", "session_type": "Morning"})
    session_id = first.get_json()["session_id"]
    assert second.get_json()["session_id"] == session_id

    resp = as_staff.post(
        f"/api/attendance/sessions/{session_id}/records",
        json={"records": [{"resident_id": rid, "status": "Late", "late_minutes": 5}]},
    )
    assert resp.get_json() == {"session_id": session_id, "count": 1}

    records = as_staff.get(f"/api/attendance/sessions/{session_id}/records").get_json()
    assert records[0]["status"] == "Late"
    assert records[0]["late_minutes"] == 5

    calendar = as_staff.get(f"/api/residents/{rid}/attendance?month=1&year=2025").get_json()
    assert calendar == [{"day": "2025-01-10", "session_type": "Morning", "status": "Late"}]

    summary = as_staff.get(f"/api/residents/{rid}/attendance/summary?month=1&year=2025").get_json()
    assert summary["Late"] == 1


def test_bad_input_is_400(as_staff):
    resp = as_staff.post("/api/attendance/sessions", json={"date": "10/01/2025", "session_type": "Morning"})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "validation_error"

    resp = as_staff.post("/api/attendance/sessions/1/records", json={"records": "nope"})
    assert resp.status_code == 400

    resp = as_staff.post(
        "/api/attendance/sessions",
        json={"date": "2025-01-10", "session_type": "Custom", "scope": {"block": "B" * 41}},
    )
    assert resp.status_code == 400
    assert "at most 40" in resp.get_json()["message"]

    resp = as_staff.post("/api/allocations", json={"resident_id": 1.9, "room_id": 1})
    assert resp.status_code == 400


def test_resident_self_service(store, client):
    rid = store.add_resident("Asha Verma")
    store.bind("asha", Role.RESIDENT, resident_id=rid)
    login(client, "asha")

    resp = client.post("/api/attendance/check-in", json={"session_type": "Evening"})
    assert resp.status_code == 200

    resp = client.post(
        f"/api/residents/{rid}/leaves",
        json={"start_date": "2025-02-02", "end_date": "2025-02-01", "reason": "trip"},
    )
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "invalid_date_range"

    resp = client.post(
        f"/api/residents/{rid}/leaves",
        json={"start_date": "2025-02-01", "end_date": "2025-02-02", "reason": "trip"},
    )
    assert resp.status_code == 201

    assert client.get(f"/api/residents/{rid}").status_code == 200
    assert client.get(f"/api/residents/{rid + 1}").status_code == 403
    assert client.get("/api/search?q=asha").status_code == 403


def test_admin_binds_role_then_lists_audit(store, client):
    store.bind("admin-1", Role.ADMIN)
    rid = store.add_resident("Asha Verma")
    login(client, "admin-1")

    resp = client.put("/api/identities/asha/role", json={"role": "resident", "resident_id": rid})
    assert resp.get_json() == {"identity_id": "asha", "role": "resident", "resident_id": rid}

    entries = client.get("/api/audit?limit=5").get_json()
    assert entries[0]["action"] == "bind_role"
    assert entries[0]["details"] == {"identity_id": "asha", "role": "resident"}
