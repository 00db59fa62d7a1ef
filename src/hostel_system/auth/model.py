from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class RoleBinding:
    """Identity -> role, optionally linked to a resident for ownership checks."""

    identity_id: str
    role: Role
    resident_id: Optional[int] = None


@dataclass(frozen=True)
class Actor:
    """Caller context resolved once at request entry and passed down explicitly."""

    identity_id: Optional[str]
    role: Role
    resident_id: Optional[int] = None

    @classmethod
    def anonymous(cls, identity_id: Optional[str] = None) -> "Actor":
        return cls(identity_id=identity_id, role=Role.ANONYMOUS)

    @classmethod
    def from_binding(cls, binding: RoleBinding) -> "Actor":
        return cls(identity_id=binding.identity_id, role=binding.role, resident_id=binding.resident_id)

    @property
    def is_anonymous(self) -> bool:
        return self.role == Role.ANONYMOUS
