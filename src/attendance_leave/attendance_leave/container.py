from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.memory_attendance_repository import InMemoryAttendanceRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.policy import Policy
from .database.connection import DBConfig, DatabaseConnection
from .employees.memory_employee_repository import InMemoryEmployeeRepository
from .employees.model import Employee
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .leaves.memory_leave_repository import InMemoryLeaveRepository
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService


@dataclass(frozen=True)
class Container:
    """Explicit wiring: one container per app, nothing global."""

    policy: Policy
    conn: Optional[DatabaseConnection]

    employees_repo: EmployeeRepository
    attendance_repo: AttendanceRepository
    leaves_repo: LeaveRepository

    employee_service: EmployeeService
    attendance_service: AttendanceService
    leave_service: LeaveService


def _wire(
    *,
    policy: Policy,
    conn: Optional[DatabaseConnection],
    employees_repo: EmployeeRepository,
    attendance_repo: AttendanceRepository,
    leaves_repo: LeaveRepository,
) -> Container:
    employee_service = EmployeeService(employees_repo)
    attendance_service = AttendanceService(
        attendance_repo,
        employee_service,
        policy=policy,
        strategy_factory=AttendanceStrategyFactory(),
    )
    leave_service = LeaveService(leaves_repo, employee_service, policy=policy)

    return Container(
        policy=policy,
        conn=conn,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        employee_service=employee_service,
        attendance_service=attendance_service,
        leave_service=leave_service,
    )


def build_container(*, db_config: dict, policy: Policy | None = None) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))
    return _wire(
        policy=policy or Policy(),
        conn=conn,
        employees_repo=MySQLEmployeeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
    )


def build_memory_container(*, policy: Policy | None = None, employees: Iterable[Employee] = ()) -> Container:
    return _wire(
        policy=policy or Policy(),
        conn=None,
        employees_repo=InMemoryEmployeeRepository(employees),
        attendance_repo=InMemoryAttendanceRepository(),
        leaves_repo=InMemoryLeaveRepository(),
    )
