from __future__ import annotations

import pytest

from fakes import FixedClock, InMemoryStore, InMemoryUnitOfWorkFactory
from hostel_system.auth.model import Actor
from hostel_system.container import wire
from hostel_system.core.enums import Role


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def uow(store):
    return InMemoryUnitOfWorkFactory(store)


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def container(uow, clock):
    return wire(uow, clock=clock)


@pytest.fixture
def admin():
    return Actor(identity_id="admin-1", role=Role.ADMIN)


@pytest.fixture
def staff():
    return Actor(identity_id="staff-1", role=Role.STAFF)


@pytest.fixture
def anonymous():
    return Actor.anonymous()
