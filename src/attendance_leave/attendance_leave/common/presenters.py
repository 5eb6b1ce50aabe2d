"""Read-time composition of records with directory display fields.

Nothing here is stored: the employee's current name/email are looked up each
time a record is rendered, so renames never leave stale copies behind.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Callable, Iterable, Optional

from ..attendance.model import AttendanceRecord, TodayStatus
from ..employees.model import Employee
from ..leaves.model import LeaveRequest

EmployeeLookup = Callable[[Optional[int]], Optional[Employee]]


def _iso(value: date | datetime | None) -> Optional[str]:
    return value.isoformat() if value is not None else None


def employee_to_dict(employee: Employee) -> dict:
    return {
        "id": employee.employee_id,
        "name": employee.name,
        "email": employee.email,
        "role": employee.role.value,
        "isActive": employee.is_active,
        "createdAt": _iso(employee.created_at),
    }


def attendance_to_dict(record: AttendanceRecord, employee: Optional[Employee] = None) -> dict:
    out = {
        "id": record.attendance_id,
        "employeeId": record.employee_id,
        "date": _iso(record.work_date),
        "checkIn": _iso(record.check_in),
        "checkOut": _iso(record.check_out),
        "location": (
            {"latitude": record.location.latitude, "longitude": record.location.longitude}
            if record.location
            else None
        ),
        "photo": record.photo,
        "status": record.status.value,
        "notes": record.notes,
    }
    if employee is not None:
        out["employee"] = employee.display()
    return out


def attendance_list(records: Iterable[AttendanceRecord], lookup: Optional[EmployeeLookup] = None) -> list[dict]:
    return [attendance_to_dict(r, lookup(r.employee_id) if lookup else None) for r in records]


def today_to_dict(today: TodayStatus) -> dict:
    out: dict = {"status": today.status.value}
    if today.record is not None:
        out["attendance"] = attendance_to_dict(today.record)
    return out


def leave_to_dict(
    request: LeaveRequest,
    employee: Optional[Employee] = None,
    approver: Optional[Employee] = None,
) -> dict:
    out = {
        "id": request.request_id,
        "employeeId": request.employee_id,
        "leaveType": request.leave_type.value,
        "startDate": _iso(request.start_date),
        "endDate": _iso(request.end_date),
        "duration": request.duration,
        "reason": request.reason,
        "status": request.status.value,
        "approvedById": request.approved_by_id,
        "approvedAt": _iso(request.approved_at),
        "comments": request.comments,
        "createdAt": _iso(request.created_at),
    }
    if employee is not None:
        out["employee"] = employee.display()
    if approver is not None:
        out["approver"] = {"id": approver.employee_id, "name": approver.name}
    return out


def leave_list(requests: Iterable[LeaveRequest], lookup: Optional[EmployeeLookup] = None) -> list[dict]:
    if lookup is None:
        return [leave_to_dict(r) for r in requests]
    return [leave_to_dict(r, lookup(r.employee_id), lookup(r.approved_by_id)) for r in requests]
