from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles used for authorization decisions."""

    ADMIN = "admin"
    STAFF = "staff"
    RESIDENT = "resident"
    ANONYMOUS = "anonymous"


class ResourceKind(str, Enum):
    RESIDENT = "resident"
    ROOM = "room"
    ALLOCATION = "allocation"
    ATTENDANCE_SESSION = "attendance_session"
    ATTENDANCE_RECORD = "attendance_record"
    LEAVE = "leave"
    ROLE_BINDING = "role_binding"
    AUDIT_LOG = "audit_log"


class Operation(str, Enum):
    READ = "read"
    WRITE = "write"


class Decision(str, Enum):
    PERMIT = "permit"
    DENY = "deny"


class RoomType(str, Enum):
    SINGLE = "Single"
    DOUBLE = "Double"
    TRIPLE = "Triple"


class RoomStatus(str, Enum):
    """Derived from the maintenance flag and the active occupant count."""

    VACANT = "Vacant"
    OCCUPIED = "Occupied"
    MAINTENANCE = "Maintenance"


class SessionType(str, Enum):
    MORNING = "Morning"
    EVENING = "Evening"
    NIGHT_ROLL = "NightRoll"
    CUSTOM = "Custom"


class AttendanceStatus(str, Enum):
    """Attendance status stored per (session, resident)."""

    PRESENT = "Present"
    ABSENT = "Absent"
    LATE = "Late"
    EXCUSED = "Excused"
    HOLIDAY = "Holiday"


class LeaveStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
