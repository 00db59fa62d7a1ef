from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Resident


class ResidentRepository(Protocol):
    def get_by_id(self, resident_id: int, *, for_update: bool = False) -> Optional[Resident]:
        raise NotImplementedError

    def create(
        self,
        *,
        full_name: str,
        email: str,
        contact: Optional[str],
        course: Optional[str],
        year: Optional[int],
        created_at: datetime,
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        resident_id: int,
        *,
        full_name: str,
        email: str,
        contact: Optional[str],
        course: Optional[str],
        year: Optional[int],
    ) -> None:
        raise NotImplementedError

    def set_active(self, resident_id: int, is_active: bool) -> None:
        raise NotImplementedError

    def link_identity(self, resident_id: int, identity_id: str) -> None:
        """Attach ``identity_id`` to this resident, detaching it from any other."""
        raise NotImplementedError

    def list_unallocated(self) -> Sequence[Resident]:
        """Active residents without an active allocation, ordered by name."""
        raise NotImplementedError

    def search(self, term: str, limit: int) -> Sequence[Resident]:
        raise NotImplementedError
