from __future__ import annotations

import pytest

from hostel_system.core.exceptions import AuthorizationDenied, CapacityExceeded
from hostel_system.core.enums import RoomType


def test_entries_newest_first_with_actor_and_details(store, container, staff, clock):
    room = store.add_room("102", RoomType.SINGLE)
    a = store.add_resident("Asha Verma")
    container.allocation_manager.allocate(actor=staff, resident_id=a, room_id=room)
    clock.advance(hours=1)
    container.allocation_manager.end_allocation(actor=staff, resident_id=a)

    entries = container.audit_log.list_recent(actor=staff, limit=10)

    assert [e.action for e in entries] == ["vacate", "allocate"]
    assert entries[1].actor_id == "staff-1"
    assert entries[1].entity == "allocation"
    assert entries[1].details == {"resident_id": a, "room_id": room, "occupant_count": 1}


def test_failed_mutation_leaves_no_entry(store, container, staff):
    room = store.add_room("102", RoomType.SINGLE)
    a = store.add_resident("A Person")
    b = store.add_resident("B Person")
    container.allocation_manager.allocate(actor=staff, resident_id=a, room_id=room)

    with pytest.raises(CapacityExceeded):
        container.allocation_manager.allocate(actor=staff, resident_id=b, room_id=room)

    assert [e.action for e in store.audit] == ["allocate"]


def test_limit_and_access(store, container, admin, anonymous):
    for n in range(5):
        container.room_service.create_room(actor=admin, room_number=str(n), room_type="Single")

    assert len(container.audit_log.list_recent(actor=admin, limit=3)) == 3
    with pytest.raises(AuthorizationDenied):
        container.audit_log.list_recent(actor=anonymous)
