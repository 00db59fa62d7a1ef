from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.constants import ROOM_CAPACITY
from ..core.enums import RoomStatus, RoomType


def capacity_for(room_type: RoomType) -> int:
    return ROOM_CAPACITY[RoomType(room_type)]


def derive_status(maintenance: bool, occupant_count: int) -> RoomStatus:
    """Maintenance overrides; otherwise occupied iff someone lives there."""
    if maintenance:
        return RoomStatus.MAINTENANCE
    return RoomStatus.OCCUPIED if occupant_count > 0 else RoomStatus.VACANT


@dataclass(frozen=True)
class Room:
    room_id: int
    room_number: str
    room_type: RoomType
    block: Optional[str] = None
    maintenance: bool = False
    occupant_count: int = 0
    maintenance_notes: Optional[str] = None

    @property
    def capacity(self) -> int:
        return capacity_for(self.room_type)

    @property
    def status(self) -> RoomStatus:
        return derive_status(self.maintenance, self.occupant_count)


@dataclass(frozen=True)
class RoomDetails:
    room: Room
    occupants: list = field(default_factory=list)
