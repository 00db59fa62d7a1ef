from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import RoomType
from .model import Room


class RoomRepository(Protocol):
    def get_by_id(self, room_id: int, *, for_update: bool = False) -> Optional[Room]:
        raise NotImplementedError

    def create(self, *, room_number: str, room_type: RoomType, block: Optional[str]) -> int:
        raise NotImplementedError

    def set_maintenance(self, room_id: int, *, maintenance: bool, notes: Optional[str]) -> None:
        raise NotImplementedError

    def refresh_occupancy(self, room_id: int) -> int:
        """Recount active allocations into ``occupant_count`` and return it."""
        raise NotImplementedError

    def list_all(self) -> Sequence[Room]:
        raise NotImplementedError

    def search(self, term: str, limit: int) -> Sequence[Room]:
        raise NotImplementedError
