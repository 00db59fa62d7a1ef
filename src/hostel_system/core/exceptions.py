from __future__ import annotations

from typing import Any, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""

    kind = "domain_error"

    def details(self) -> dict[str, Any]:
        """Identifiers that let a caller render a precise message."""
        return {}


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    kind = "validation_error"


class InvalidDateRange(ValidationError):
    kind = "invalid_date_range"

    def __init__(self, start, end):
        super().__init__(f"End date {end} is before start date {start}")
        self.start = start
        self.end = end

    def details(self) -> dict[str, Any]:
        return {"start": str(self.start), "end": str(self.end)}


class RecordNotFound(DomainError):
    """Raised when a referenced resident/room/session/... does not exist."""

    kind = "record_not_found"

    def __init__(self, entity: str, entity_id: Any):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id

    def details(self) -> dict[str, Any]:
        return {"entity": self.entity, "entity_id": self.entity_id}


class AuthorizationDenied(DomainError):
    """Raised when a role/ownership check fails. Nothing has been written."""

    kind = "authorization_denied"

    def __init__(
        self,
        *,
        identity_id: Optional[str],
        role: str,
        resource: str,
        operation: str,
        row_owner_id: Optional[int] = None,
    ):
        target = f"{resource}" if row_owner_id is None else f"{resource} owned by resident {row_owner_id}"
        super().__init__(f"Role {role} may not {operation} {target}")
        self.identity_id = identity_id
        self.role = role
        self.resource = resource
        self.operation = operation
        self.row_owner_id = row_owner_id

    def details(self) -> dict[str, Any]:
        return {
            "identity_id": self.identity_id,
            "role": self.role,
            "resource": self.resource,
            "operation": self.operation,
            "row_owner_id": self.row_owner_id,
        }


class CapacityExceeded(DomainError):
    kind = "capacity_exceeded"

    def __init__(self, room_id: int, capacity: int):
        super().__init__(f"Room {room_id} is full (capacity {capacity})")
        self.room_id = room_id
        self.capacity = capacity

    def details(self) -> dict[str, Any]:
        return {"room_id": self.room_id, "capacity": self.capacity}


class AlreadyAllocated(DomainError):
    kind = "already_allocated"

    def __init__(self, resident_id: int, room_id: Optional[int] = None, allocation_id: Optional[int] = None):
        where = f" in room {room_id}" if room_id is not None else ""
        super().__init__(f"Resident {resident_id} already has an active allocation{where}")
        self.resident_id = resident_id
        self.room_id = room_id
        self.allocation_id = allocation_id

    def details(self) -> dict[str, Any]:
        return {"resident_id": self.resident_id, "room_id": self.room_id, "allocation_id": self.allocation_id}


class DuplicateSessionKey(DomainError):
    """Unique-key conflict on session creation. Resolved inside the registry."""

    kind = "duplicate_session_key"

    def __init__(self, key):
        super().__init__(f"Attendance session already exists for {key}")
        self.key = key
