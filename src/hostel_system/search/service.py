from __future__ import annotations

from ..auth.model import Actor
from ..auth.policy import require
from ..core.constants import DEFAULT_SEARCH_LIMIT
from ..core.enums import Operation, ResourceKind
from ..database.unit_of_work import UnitOfWorkFactory


class SearchService:
    def __init__(self, uow_factory: UnitOfWorkFactory):
        self._uow = uow_factory

    def search(self, *, actor: Actor, term: str, limit: int = DEFAULT_SEARCH_LIMIT) -> dict[str, list]:
        require(actor, ResourceKind.RESIDENT, Operation.READ)
        require(actor, ResourceKind.ROOM, Operation.READ)

        term = (term or "").strip()
        if not term:
            return {"residents": [], "rooms": []}

        limit = max(1, min(int(limit), 100))
        with self._uow(readonly=True) as tx:
            return {
                "residents": list(tx.residents.search(term, limit)),
                "rooms": list(tx.rooms.search(term, limit)),
            }
