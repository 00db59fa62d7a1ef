"""Room allocation manager.

Every write path follows the same lock order: the resident row first, then
each affected room row in ascending id order. Capacity and exclusivity are
checked under those locks before anything is written, and the occupant count
of every touched room is recounted from the allocation rows afterwards.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from ..audit.service import AuditLog
from ..auth.model import Actor
from ..auth.policy import require
from ..common.datetime_utils import now_local
from ..common.validators import require_positive_int
from ..core.enums import Operation, ResourceKind
from ..core.exceptions import AlreadyAllocated, CapacityExceeded, RecordNotFound, ValidationError
from ..database.unit_of_work import UnitOfWork, UnitOfWorkFactory
from ..residents.model import Resident
from ..rooms.model import Room
from .model import Allocation

logger = logging.getLogger(__name__)


class AllocationManager:
    def __init__(self, uow_factory: UnitOfWorkFactory, audit: AuditLog, *, clock: Callable[[], datetime] = now_local):
        self._uow = uow_factory
        self._audit = audit
        self._clock = clock

    @staticmethod
    def _lock_resident(tx: UnitOfWork, resident_id: int) -> Resident:
        resident = tx.residents.get_by_id(resident_id, for_update=True)
        if resident is None:
            raise RecordNotFound("resident", resident_id)
        return resident

    @staticmethod
    def _lock_rooms(tx: UnitOfWork, *room_ids: int) -> dict[int, Room]:
        locked: dict[int, Room] = {}
        for room_id in sorted(set(room_ids)):
            room = tx.rooms.get_by_id(room_id, for_update=True)
            if room is None:
                raise RecordNotFound("room", room_id)
            locked[room_id] = room
        return locked

    @staticmethod
    def _check_can_receive(tx: UnitOfWork, room: Room) -> None:
        if room.maintenance:
            raise ValidationError(f"Room {room.room_number} is under maintenance")
        count = tx.allocations.count_active_for_room(room.room_id)
        if count >= room.capacity:
            raise CapacityExceeded(room.room_id, room.capacity)

    def allocate(self, *, actor: Actor, resident_id: int, room_id: int) -> int:
        """Place a resident without an active allocation into a room.

        Raises AlreadyAllocated when the resident already lives somewhere; use
        ``transfer`` to move them.
        """

        require(actor, ResourceKind.ALLOCATION, Operation.WRITE)
        resident_id = require_positive_int(resident_id, "resident_id")
        room_id = require_positive_int(room_id, "room_id")

        with self._uow() as tx:
            resident = self._lock_resident(tx, resident_id)
            if not resident.is_active:
                raise ValidationError(f"Resident {resident_id} is disabled")

            current = tx.allocations.get_active_for_resident(resident_id)
            if current is not None:
                raise AlreadyAllocated(resident_id, current.room_id, current.allocation_id)

            room = self._lock_rooms(tx, room_id)[room_id]
            self._check_can_receive(tx, room)

            allocation_id = tx.allocations.insert(resident_id=resident_id, room_id=room_id, started_at=self._clock())
            occupants = tx.rooms.refresh_occupancy(room_id)
            self._audit.record(
                tx,
                actor=actor,
                action="allocate",
                entity=ResourceKind.ALLOCATION,
                entity_id=allocation_id,
                details={"resident_id": resident_id, "room_id": room_id, "occupant_count": occupants},
            )

        logger.info("Allocated resident %s to room %s (allocation %s)", resident_id, room_id, allocation_id)
        return allocation_id

    def transfer(self, *, actor: Actor, resident_id: int, room_id: int) -> int:
        """End the resident's active allocation (if any) and allocate ``room_id``."""

        require(actor, ResourceKind.ALLOCATION, Operation.WRITE)
        resident_id = require_positive_int(resident_id, "resident_id")
        room_id = require_positive_int(room_id, "room_id")

        with self._uow() as tx:
            resident = self._lock_resident(tx, resident_id)
            if not resident.is_active:
                raise ValidationError(f"Resident {resident_id} is disabled")

            current = tx.allocations.get_active_for_resident(resident_id)
            if current is not None and current.room_id == room_id:
                raise AlreadyAllocated(resident_id, current.room_id, current.allocation_id)

            affected = [room_id] if current is None else [room_id, current.room_id]
            rooms = self._lock_rooms(tx, *affected)
            self._check_can_receive(tx, rooms[room_id])

            now = self._clock()
            if current is not None:
                tx.allocations.end(current.allocation_id, ended_at=now)
            allocation_id = tx.allocations.insert(resident_id=resident_id, room_id=room_id, started_at=now)
            for rid in sorted(rooms):
                tx.rooms.refresh_occupancy(rid)

            self._audit.record(
                tx,
                actor=actor,
                action="transfer",
                entity=ResourceKind.ALLOCATION,
                entity_id=allocation_id,
                details={
                    "resident_id": resident_id,
                    "from_room_id": current.room_id if current else None,
                    "to_room_id": room_id,
                    "ended_allocation_id": current.allocation_id if current else None,
                },
            )

        logger.info(
            "Transferred resident %s from room %s to room %s",
            resident_id,
            current.room_id if current else None,
            room_id,
        )
        return allocation_id

    def end_allocation(self, *, actor: Actor, resident_id: int, reason: Optional[str] = None) -> Allocation:
        require(actor, ResourceKind.ALLOCATION, Operation.WRITE)
        resident_id = require_positive_int(resident_id, "resident_id")

        with self._uow() as tx:
            ended = self.vacate_within(tx, actor=actor, resident_id=resident_id, reason=reason)
            if ended is None:
                raise RecordNotFound("active allocation for resident", resident_id)
        return ended

    def vacate_within(
        self,
        tx: UnitOfWork,
        *,
        actor: Actor,
        resident_id: int,
        reason: Optional[str] = None,
    ) -> Optional[Allocation]:
        """End the active allocation inside an already open unit of work.

        Returns the ended allocation, or None if the resident had none.
        """

        self._lock_resident(tx, resident_id)
        current = tx.allocations.get_active_for_resident(resident_id)
        if current is None:
            return None

        self._lock_rooms(tx, current.room_id)
        now = self._clock()
        tx.allocations.end(current.allocation_id, ended_at=now)
        occupants = tx.rooms.refresh_occupancy(current.room_id)
        self._audit.record(
            tx,
            actor=actor,
            action="vacate",
            entity=ResourceKind.ALLOCATION,
            entity_id=current.allocation_id,
            details={
                "resident_id": resident_id,
                "room_id": current.room_id,
                "occupant_count": occupants,
                "reason": reason,
            },
        )
        logger.info("Resident %s vacated room %s", resident_id, current.room_id)
        return Allocation(
            allocation_id=current.allocation_id,
            resident_id=current.resident_id,
            room_id=current.room_id,
            started_at=current.started_at,
            ended_at=now,
        )

    def history(self, *, actor: Actor, resident_id: int) -> list[Allocation]:
        require(actor, ResourceKind.ALLOCATION, Operation.READ, row_owner_id=resident_id)
        with self._uow(readonly=True) as tx:
            if tx.residents.get_by_id(int(resident_id)) is None:
                raise RecordNotFound("resident", resident_id)
            return list(tx.allocations.list_for_resident(int(resident_id)))
