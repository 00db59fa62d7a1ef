from __future__ import annotations

from typing import Protocol

from ..allocations.repository import AllocationRepository
from ..attendance.repository import RecordRepository, SessionRepository
from ..audit.repository import AuditRepository
from ..auth.repository import RoleBindingRepository
from ..leaves.repository import LeaveRepository
from ..residents.repository import ResidentRepository
from ..rooms.repository import RoomRepository


class UnitOfWork(Protocol):
    """One transaction with every repository bound to it.

    Usage::

        with uow_factory() as tx:
            tx.rooms.get_by_id(room_id, for_update=True)
            ...

    Leaving the block normally commits; an exception rolls everything back.
    """

    residents: ResidentRepository
    rooms: RoomRepository
    allocations: AllocationRepository
    sessions: SessionRepository
    records: RecordRepository
    leaves: LeaveRepository
    bindings: RoleBindingRepository
    audit: AuditRepository

    def __enter__(self) -> "UnitOfWork":
        raise NotImplementedError

    def __exit__(self, exc_type, exc, tb) -> None:
        raise NotImplementedError


class UnitOfWorkFactory(Protocol):
    def __call__(self, *, readonly: bool = False) -> UnitOfWork:
        raise NotImplementedError
