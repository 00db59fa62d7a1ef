from __future__ import annotations

from typing import Optional

from ..database.unit_of_work import UnitOfWorkFactory
from .model import Actor


class RoleResolver:
    """Map an authenticated identity to a role.

    A plain keyed lookup on the binding store. It never calls the
    authorization engine, so resolving a role cannot recurse into itself.
    A missing binding yields an anonymous actor instead of an error.
    """

    def __init__(self, uow_factory: UnitOfWorkFactory):
        self._uow = uow_factory

    def resolve(self, identity_id: Optional[str]) -> Actor:
        identity_id = (str(identity_id).strip() if identity_id is not None else "") or None
        if identity_id is None:
            return Actor.anonymous()

        with self._uow(readonly=True) as tx:
            binding = tx.bindings.get(identity_id)

        if binding is None:
            return Actor.anonymous(identity_id)
        return Actor.from_binding(binding)
