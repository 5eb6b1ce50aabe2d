"""Example: drive the services directly (no Flask, no database).

Controllers are a thin layer; the attendance and leave rules live in the services.
"""

from datetime import date, datetime

from src.attendance_leave.attendance_leave.container import build_memory_container
from src.attendance_leave.attendance_leave.core.enums import Role
from src.attendance_leave.attendance_leave.core.exceptions import DomainError
from src.attendance_leave.attendance_leave.employees.model import Employee


def main():
    container = build_memory_container(
        employees=[
            Employee(employee_id=1, name="Admin", email="admin@example.com", role=Role.ADMIN),
            Employee(employee_id=2, name="Jane Doe", email="jane@example.com", role=Role.EMPLOYEE),
        ]
    )
    attendance = container.attendance_service
    leaves = container.leave_service

    print(attendance.check_in(2, now=datetime(2024, 6, 3, 9, 5)))
    try:
        attendance.check_in(2, now=datetime(2024, 6, 3, 9, 30))
    except DomainError as e:
        print(e.to_dict())
    print(attendance.check_out(2, now=datetime(2024, 6, 3, 17, 0)))

    first = leaves.apply(
        2,
        leave_type="annual",
        start_date=date(2024, 6, 10),
        end_date=date(2024, 6, 12),
        reason="Family trip out of town",
        today=date(2024, 6, 3),
    )
    try:
        leaves.apply(
            2,
            leave_type="casual",
            start_date=date(2024, 6, 12),
            end_date=date(2024, 6, 14),
            reason="Moving to a new apartment",
            today=date(2024, 6, 3),
        )
    except DomainError as e:
        print(e.to_dict())
    print(leaves.reject(first.request_id, admin_id=1, comments="Peak week"))


if __name__ == "__main__":
    main()
