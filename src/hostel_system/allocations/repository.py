from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Allocation


class AllocationRepository(Protocol):
    def get_active_for_resident(self, resident_id: int) -> Optional[Allocation]:
        raise NotImplementedError

    def count_active_for_room(self, room_id: int) -> int:
        raise NotImplementedError

    def list_active_for_room(self, room_id: int) -> Sequence[Allocation]:
        raise NotImplementedError

    def insert(self, *, resident_id: int, room_id: int, started_at: datetime) -> int:
        """Insert an active allocation.

        Raises AlreadyAllocated if the resident already holds one.
        """
        raise NotImplementedError

    def end(self, allocation_id: int, *, ended_at: datetime) -> None:
        raise NotImplementedError

    def list_for_resident(self, resident_id: int) -> Sequence[Allocation]:
        raise NotImplementedError
