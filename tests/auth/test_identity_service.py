from __future__ import annotations

import pytest

from hostel_system.auth.resolver import RoleResolver
from hostel_system.core.enums import Role
from hostel_system.core.exceptions import AuthorizationDenied, RecordNotFound, ValidationError


def test_admin_binds_resident_identity(store, uow, container, admin):
    rid = store.add_resident("Rahul Nair")

    binding = container.identity_service.bind_role(actor=admin, identity_id="rahul", role="resident", resident_id=rid)

    assert binding.role == Role.RESIDENT
    assert binding.resident_id == rid
    assert RoleResolver(uow).resolve("rahul").resident_id == rid
    assert store.audit[-1].action == "bind_role"


def test_rebinding_moves_identity_link(store, container, admin):
    first = store.add_resident("First Person")
    second = store.add_resident("Second Person")

    container.identity_service.bind_role(actor=admin, identity_id="id-1", role=Role.RESIDENT, resident_id=first)
    container.identity_service.bind_role(actor=admin, identity_id="id-1", role=Role.RESIDENT, resident_id=second)

    assert store.residents[first].identity_id is None
    assert store.residents[second].identity_id == "id-1"


def test_staff_cannot_bind_roles(store, container, staff):
    with pytest.raises(AuthorizationDenied):
        container.identity_service.bind_role(actor=staff, identity_id="x", role=Role.ADMIN)
    assert "x" not in store.bindings


def test_anonymous_role_is_not_bindable(container, admin):
    with pytest.raises(ValidationError):
        container.identity_service.bind_role(actor=admin, identity_id="x", role="anonymous")


def test_unknown_resident_rolls_back_binding(store, container, admin):
    with pytest.raises(RecordNotFound):
        container.identity_service.bind_role(actor=admin, identity_id="x", role=Role.RESIDENT, resident_id=99)
    assert "x" not in store.bindings
    assert store.audit == []


def test_overlong_identity_is_rejected(store, container, admin):
    with pytest.raises(ValidationError):
        container.identity_service.bind_role(actor=admin, identity_id="i" * 191, role=Role.STAFF)
    assert store.bindings == {}
