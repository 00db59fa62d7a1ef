from __future__ import annotations

import logging
from typing import Optional

from ..audit.service import AuditLog
from ..auth.model import Actor
from ..auth.policy import require
from ..common.validators import optional_text, require_enum, require_non_empty
from ..core.constants import MAX_BLOCK_LEN, MAX_NOTE_LEN, MAX_ROOM_NUMBER_LEN
from ..core.enums import Operation, ResourceKind, RoomType
from ..core.exceptions import RecordNotFound
from ..database.unit_of_work import UnitOfWorkFactory
from .model import Room, RoomDetails

logger = logging.getLogger(__name__)


class RoomService:
    def __init__(self, uow_factory: UnitOfWorkFactory, audit: AuditLog):
        self._uow = uow_factory
        self._audit = audit

    def create_room(self, *, actor: Actor, room_number: str, room_type, block: Optional[str] = None) -> int:
        require(actor, ResourceKind.ROOM, Operation.WRITE)
        room_number = require_non_empty(room_number, "room_number", max_len=MAX_ROOM_NUMBER_LEN)
        room_type = require_enum(RoomType, room_type, "room_type")
        block = optional_text(block, "block", max_len=MAX_BLOCK_LEN)

        with self._uow() as tx:
            room_id = tx.rooms.create(room_number=room_number, room_type=room_type, block=block)
            self._audit.record(
                tx,
                actor=actor,
                action="create_room",
                entity=ResourceKind.ROOM,
                entity_id=room_id,
                details={"room_number": room_number, "room_type": room_type.value, "block": block},
            )

        logger.info("Created room %s (%s) id=%s", room_number, room_type.value, room_id)
        return room_id

    def set_maintenance(self, *, actor: Actor, room_id: int, maintenance: bool, notes: Optional[str] = None) -> Room:
        require(actor, ResourceKind.ROOM, Operation.WRITE)
        notes = optional_text(notes, "notes", max_len=MAX_NOTE_LEN) if maintenance else None

        with self._uow() as tx:
            room = tx.rooms.get_by_id(int(room_id), for_update=True)
            if room is None:
                raise RecordNotFound("room", room_id)
            tx.rooms.set_maintenance(room.room_id, maintenance=bool(maintenance), notes=notes)
            self._audit.record(
                tx,
                actor=actor,
                action="set_maintenance",
                entity=ResourceKind.ROOM,
                entity_id=room.room_id,
                details={"maintenance": bool(maintenance), "notes": notes},
            )
            updated = tx.rooms.get_by_id(room.room_id)

        logger.info("Room %s maintenance=%s", room.room_id, bool(maintenance))
        return updated

    def list_rooms(self, *, actor: Actor) -> list[Room]:
        require(actor, ResourceKind.ROOM, Operation.READ)
        with self._uow(readonly=True) as tx:
            return list(tx.rooms.list_all())

    def room_details(self, *, actor: Actor, room_id: int) -> RoomDetails:
        require(actor, ResourceKind.ROOM, Operation.READ)
        with self._uow(readonly=True) as tx:
            room = tx.rooms.get_by_id(int(room_id))
            if room is None:
                raise RecordNotFound("room", room_id)
            occupants = []
            for allocation in tx.allocations.list_active_for_room(room.room_id):
                resident = tx.residents.get_by_id(allocation.resident_id)
                if resident is not None:
                    occupants.append(resident)
        return RoomDetails(room=room, occupants=occupants)
