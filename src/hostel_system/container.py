from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .allocations.service import AllocationManager
from .attendance.registry import SessionRegistry
from .attendance.service import AttendanceService
from .audit.service import AuditLog
from .auth.resolver import RoleResolver
from .auth.service import IdentityService
from .database.connection import DBConfig, DatabaseConnection
from .database.mysql_unit_of_work import MySQLUnitOfWorkFactory
from .database.unit_of_work import UnitOfWorkFactory
from .leaves.service import LeaveService
from .residents.service import ResidentService
from .rooms.service import RoomService
from .search.service import SearchService


@dataclass(frozen=True)
class Container:
    uow_factory: UnitOfWorkFactory

    role_resolver: RoleResolver
    audit_log: AuditLog
    identity_service: IdentityService
    allocation_manager: AllocationManager
    resident_service: ResidentService
    room_service: RoomService
    session_registry: SessionRegistry
    attendance_service: AttendanceService
    leave_service: LeaveService
    search_service: SearchService


def wire(uow_factory: UnitOfWorkFactory, *, clock=None) -> Container:
    """Build every service on top of one unit-of-work factory."""

    kwargs = {} if clock is None else {"clock": clock}

    audit_log = AuditLog(uow_factory, **kwargs)
    allocation_manager = AllocationManager(uow_factory, audit_log, **kwargs)
    session_registry = SessionRegistry(uow_factory, audit_log, **kwargs)

    return Container(
        uow_factory=uow_factory,
        role_resolver=RoleResolver(uow_factory),
        audit_log=audit_log,
        identity_service=IdentityService(uow_factory, audit_log),
        allocation_manager=allocation_manager,
        resident_service=ResidentService(uow_factory, audit_log, allocation_manager, **kwargs),
        room_service=RoomService(uow_factory, audit_log),
        session_registry=session_registry,
        attendance_service=AttendanceService(uow_factory, session_registry, audit_log, **kwargs),
        leave_service=LeaveService(uow_factory, audit_log, **kwargs),
        search_service=SearchService(uow_factory),
    )


def build_container(
    *,
    db_config: dict,
    write_isolation: Optional[str] = "READ COMMITTED",
    read_isolation: Optional[str] = "REPEATABLE READ",
) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection.get_instance(config)
    uow_factory = MySQLUnitOfWorkFactory(
        conn,
        write_isolation=write_isolation,
        read_isolation=read_isolation,
    )
    return wire(uow_factory)
