from __future__ import annotations

from datetime import datetime

import pytest

from src.attendance_leave.attendance_leave.container import build_memory_container
from src.attendance_leave.attendance_leave.core.enums import Role
from src.attendance_leave.attendance_leave.core.policy import Policy
from src.attendance_leave.attendance_leave.employees.model import Employee

ADMIN_ID = 1
EMPLOYEE_ID = 2
OTHER_EMPLOYEE_ID = 3
INACTIVE_ID = 4


@pytest.fixture
def people():
    return [
        Employee(employee_id=ADMIN_ID, name="Admin", email="admin@example.com", role=Role.ADMIN),
        Employee(employee_id=EMPLOYEE_ID, name="Jane Doe", email="jane@example.com", role=Role.EMPLOYEE),
        Employee(employee_id=OTHER_EMPLOYEE_ID, name="John Roe", email="john@example.com", role=Role.EMPLOYEE),
        Employee(
            employee_id=INACTIVE_ID, name="Gone", email="gone@example.com", role=Role.EMPLOYEE, is_active=False
        ),
    ]


@pytest.fixture
def policy():
    return Policy(timezone="UTC")


@pytest.fixture
def container(people, policy):
    return build_memory_container(policy=policy, employees=people)


@pytest.fixture
def fixed_now():
    return datetime(2024, 6, 3, 9, 5, 0)
