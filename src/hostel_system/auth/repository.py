from __future__ import annotations

from typing import Optional, Protocol

from ..core.enums import Role
from .model import RoleBinding


class RoleBindingRepository(Protocol):
    """Identity/role store read by the role resolver.

    Never read through the authorization engine: the engine consumes what this
    store returns.
    """

    def get(self, identity_id: str) -> Optional[RoleBinding]:
        raise NotImplementedError

    def upsert(self, *, identity_id: str, role: Role) -> None:
        raise NotImplementedError
