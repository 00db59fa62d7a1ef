from __future__ import annotations

import pytest

from hostel_system.auth.model import Actor
from hostel_system.core.enums import Role, RoomType
from hostel_system.core.exceptions import AuthorizationDenied


def test_search_matches_residents_and_rooms(store, container, staff):
    store.add_resident("Asha Verma", course="Computer Science")
    store.add_resident("Rahul Nair")
    store.add_room("101", RoomType.DOUBLE, block="A")
    store.add_room("A-12", RoomType.SINGLE, block="C")

    result = container.search_service.search(actor=staff, term="a-1")
    assert [r.room_number for r in result["rooms"]] == ["A-12"]

    result = container.search_service.search(actor=staff, term="science")
    assert [r.full_name for r in result["residents"]] == ["Asha Verma"]
    assert result["rooms"] == []


def test_blank_term_returns_empty(container, staff):
    assert container.search_service.search(actor=staff, term="   ") == {"residents": [], "rooms": []}


def test_residents_cannot_search(store, container):
    rid = store.add_resident("Asha Verma")
    with pytest.raises(AuthorizationDenied):
        container.search_service.search(actor=Actor("asha", Role.RESIDENT, rid), term="a")
