from __future__ import annotations

from contextlib import ExitStack
from typing import Optional

from ..allocations.mysql_allocation_repository import MySQLAllocationRepository
from ..attendance.mysql_record_repository import MySQLRecordRepository
from ..attendance.mysql_session_repository import MySQLSessionRepository
from ..audit.mysql_audit_repository import MySQLAuditRepository
from ..auth.mysql_role_binding_repository import MySQLRoleBindingRepository
from ..leaves.mysql_leave_repository import MySQLLeaveRepository
from ..residents.mysql_resident_repository import MySQLResidentRepository
from ..rooms.mysql_room_repository import MySQLRoomRepository
from .connection import DatabaseConnection
from .mysql_base import transaction


class MySQLUnitOfWork:
    def __init__(self, conn_factory: DatabaseConnection, *, isolation_level: Optional[str], readonly: bool = False):
        self._conn_factory = conn_factory
        self._isolation_level = isolation_level
        self._readonly = readonly
        self._stack: Optional[ExitStack] = None

    def __enter__(self) -> "MySQLUnitOfWork":
        stack = ExitStack()
        _, cur = stack.enter_context(
            transaction(self._conn_factory, isolation_level=self._isolation_level, readonly=self._readonly)
        )
        self._stack = stack

        self.residents = MySQLResidentRepository(cur)
        self.rooms = MySQLRoomRepository(cur)
        self.allocations = MySQLAllocationRepository(cur)
        self.sessions = MySQLSessionRepository(cur)
        self.records = MySQLRecordRepository(cur)
        self.leaves = MySQLLeaveRepository(cur)
        self.bindings = MySQLRoleBindingRepository(cur)
        self.audit = MySQLAuditRepository(cur)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        stack, self._stack = self._stack, None
        if stack is not None:
            stack.__exit__(exc_type, exc, tb)


class MySQLUnitOfWorkFactory:
    """Write units run at ``write_isolation`` with explicit row locks; read
    units get a read-only snapshot at ``read_isolation``."""

    def __init__(
        self,
        conn_factory: DatabaseConnection,
        *,
        write_isolation: Optional[str] = "READ COMMITTED",
        read_isolation: Optional[str] = "REPEATABLE READ",
    ):
        self._conn_factory = conn_factory
        self._write_isolation = write_isolation
        self._read_isolation = read_isolation

    def __call__(self, *, readonly: bool = False) -> MySQLUnitOfWork:
        isolation = self._read_isolation if readonly else self._write_isolation
        return MySQLUnitOfWork(self._conn_factory, isolation_level=isolation, readonly=readonly)
