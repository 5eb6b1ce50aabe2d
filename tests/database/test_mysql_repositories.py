"""MySQL repositories against a scripted connection (no server needed)."""

from __future__ import annotations

from datetime import date, datetime

import mysql.connector
import pytest
import pytz
from mysql.connector import errorcode

from src.attendance_leave.attendance_leave.attendance.model import Location, NewCheckIn
from src.attendance_leave.attendance_leave.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from src.attendance_leave.attendance_leave.core.enums import AttendanceStatus, LeaveStatus, LeaveType
from src.attendance_leave.attendance_leave.core.exceptions import (
    DuplicateCheckIn,
    EmailInUse,
    InfrastructureError,
    NotFound,
    OverlappingRequest,
)
from src.attendance_leave.attendance_leave.employees.mysql_employee_repository import MySQLEmployeeRepository
from src.attendance_leave.attendance_leave.leaves.model import LeaveDecision, NewLeave
from src.attendance_leave.attendance_leave.leaves.mysql_leave_repository import MySQLLeaveRepository
from src.attendance_leave.attendance_leave.leaves.overlap import ensure_no_overlap

HCM = pytz.timezone("Asia/Ho_Chi_Minh")


class FakeCursor:
    def __init__(self, script):
        self._script = script
        self.rowcount = script.get("rowcount", 0)
        self.lastrowid = script.get("lastrowid")
        self._rows = list(script.get("rows", []))

    def execute(self, sql, params=()):
        self._script.setdefault("executed", []).append((" ".join(sql.split()), params))
        error = self._script.get("error")
        if error is not None:
            raise error

    def fetchone(self):
        return self._rows.pop(0) if self._rows else None

    def fetchall(self):
        return self._script.get("all", [])

    def close(self):
        pass


class FakeConn:
    def __init__(self, script):
        self.script = script
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=False):
        return FakeCursor(self.script)

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeConnFactory:
    def __init__(self, **script):
        self.script = script
        self.connections: list[FakeConn] = []

    def connect(self):
        if "connect_error" in self.script:
            raise self.script["connect_error"]
        conn = FakeConn(self.script)
        self.connections.append(conn)
        return conn

    @property
    def last(self) -> FakeConn:
        return self.connections[-1]


def _new_checkin():
    return NewCheckIn(
        employee_id=2,
        work_date=date(2024, 6, 3),
        check_in=HCM.localize(datetime(2024, 6, 3, 9, 5)),
        status=AttendanceStatus.PRESENT,
        location=Location(latitude=10.77, longitude=106.7),
        photo=None,
        notes="from the office",
    )


def test_checkin_insert_stores_utc_and_commits():
    factory = FakeConnFactory(lastrowid=17)

    record = MySQLAttendanceRepository(factory).create_checkin(_new_checkin())

    assert record.attendance_id == 17
    assert record.location == Location(latitude=10.77, longitude=106.7)
    _, params = factory.script["executed"][0]
    assert params[2] == datetime(2024, 6, 3, 2, 5)
    assert params[6] == "present"
    assert factory.last.committed and factory.last.closed


def test_duplicate_key_maps_to_duplicate_checkin():
    error = mysql.connector.IntegrityError(msg="Duplicate entry", errno=errorcode.ER_DUP_ENTRY)
    factory = FakeConnFactory(error=error)

    with pytest.raises(DuplicateCheckIn) as exc:
        MySQLAttendanceRepository(factory).create_checkin(_new_checkin())

    assert exc.value.context["work_date"] == date(2024, 6, 3)
    assert factory.last.rolled_back and not factory.last.committed


def test_other_integrity_errors_are_opaque():
    error = mysql.connector.IntegrityError(msg="fk violation", errno=errorcode.ER_NO_REFERENCED_ROW_2)

    with pytest.raises(InfrastructureError):
        MySQLAttendanceRepository(FakeConnFactory(error=error)).create_checkin(_new_checkin())


def test_driver_errors_become_infrastructure_errors():
    factory = FakeConnFactory(error=mysql.connector.OperationalError(msg="Lost connection"))

    with pytest.raises(InfrastructureError) as exc:
        MySQLAttendanceRepository(factory).list_all(10)

    assert "Lost connection" not in str(exc.value)
    assert factory.last.rolled_back and factory.last.closed


def test_connection_failure_is_infrastructure_error():
    factory = FakeConnFactory(connect_error=mysql.connector.InterfaceError(msg="refused"))

    with pytest.raises(InfrastructureError):
        MySQLAttendanceRepository(factory).get_for_employee_and_date(2, date(2024, 6, 3))


def test_checkout_is_conditional_on_open_record():
    factory = FakeConnFactory(rowcount=0)

    ok = MySQLAttendanceRepository(factory).update_checkout(
        attendance_id=5, check_out=pytz.utc.localize(datetime(2024, 6, 3, 17, 0))
    )

    assert ok is False
    sql, params = factory.script["executed"][0]
    assert "check_out_time IS NULL" in sql
    assert params == (datetime(2024, 6, 3, 17, 0), 5)


def test_rows_are_read_back_as_aware_utc():
    factory = FakeConnFactory(
        rows=[
            {
                "attendance_id": 5,
                "employee_id": 2,
                "work_date": date(2024, 6, 3),
                "check_in_time": datetime(2024, 6, 3, 2, 5),
                "check_out_time": None,
                "latitude": None,
                "longitude": None,
                "photo": None,
                "status": "late",
                "notes": None,
            }
        ]
    )

    record = MySQLAttendanceRepository(factory).get_for_employee_and_date(2, date(2024, 6, 3))

    assert record.status == AttendanceStatus.LATE
    assert record.check_in == pytz.utc.localize(datetime(2024, 6, 3, 2, 5))
    assert record.location is None
    assert record.check_out is None


def _new_leave():
    return NewLeave(
        employee_id=2,
        leave_type=LeaveType.SICK,
        start_date=date(2024, 6, 12),
        end_date=date(2024, 6, 14),
        reason="Doctor appointment and rest",
        created_at=pytz.utc.localize(datetime(2024, 6, 3, 8, 0)),
    )


def _leave_row(**overrides):
    row = {
        "request_id": 9,
        "employee_id": 2,
        "leave_type": "annual",
        "start_date": date(2024, 6, 10),
        "end_date": date(2024, 6, 12),
        "reason": "Family trip out of town",
        "status": "pending",
        "created_at": datetime(2024, 6, 1, 8, 0),
        "approved_by_id": None,
        "approved_at": None,
        "comments": None,
    }
    row.update(overrides)
    return row


def test_leave_application_locks_employee_row_then_inserts():
    factory = FakeConnFactory(rows=[{"employee_id": 2}], all=[], lastrowid=31)
    new = _new_leave()

    request = MySQLLeaveRepository(factory).create_leave(
        new, guard=lambda active: ensure_no_overlap(new.start_date, new.end_date, active)
    )

    assert request.request_id == 31
    assert request.status == LeaveStatus.PENDING
    statements = [sql for sql, _ in factory.script["executed"]]
    assert statements[0].endswith("FOR UPDATE")
    assert statements[2].startswith("INSERT INTO leave_requests")
    assert factory.last.committed


def test_leave_overlap_rolls_back_without_insert():
    factory = FakeConnFactory(rows=[{"employee_id": 2}], all=[_leave_row()])
    new = _new_leave()

    with pytest.raises(OverlappingRequest):
        MySQLLeaveRepository(factory).create_leave(
            new, guard=lambda active: ensure_no_overlap(new.start_date, new.end_date, active)
        )

    assert len(factory.script["executed"]) == 2
    assert factory.last.rolled_back and not factory.last.committed


def test_leave_application_for_missing_employee():
    factory = FakeConnFactory(rows=[])

    with pytest.raises(NotFound):
        MySQLLeaveRepository(factory).create_leave(_new_leave(), guard=lambda active: None)


def test_decide_only_touches_pending_rows():
    factory = FakeConnFactory(rowcount=0)
    decision = LeaveDecision(
        status=LeaveStatus.APPROVED,
        approved_by_id=1,
        approved_at=pytz.utc.localize(datetime(2024, 6, 4, 9, 0)),
        comments=None,
    )

    assert MySQLLeaveRepository(factory).decide(9, decision) is False
    sql, params = factory.script["executed"][0]
    assert "status=%s" in sql.split("WHERE")[1]
    assert params[-1] == "pending"


def test_email_duplicate_on_update_maps_to_email_in_use():
    error = mysql.connector.IntegrityError(msg="Duplicate entry", errno=errorcode.ER_DUP_ENTRY)

    with pytest.raises(EmailInUse):
        MySQLEmployeeRepository(FakeConnFactory(error=error)).update(2, email="john@example.com")
