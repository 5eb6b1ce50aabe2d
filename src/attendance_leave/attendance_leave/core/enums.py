from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles used for route guards."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class AttendanceStatus(str, Enum):
    """Status stored on an attendance record."""

    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"


class DayStatus(str, Enum):
    """Where an employee stands for the current calendar day."""

    NOT_CHECKED_IN = "not_checked_in"
    CHECKED_IN = "checked_in"
    CHECKED_OUT = "checked_out"


class LeaveType(str, Enum):
    SICK = "sick"
    CASUAL = "casual"
    ANNUAL = "annual"
    MATERNITY = "maternity"
    PATERNITY = "paternity"
    OTHER = "other"


class LeaveStatus(str, Enum):
    """Approval flow of a leave request."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


# Statuses that take part in the overlap check.
ACTIVE_LEAVE_STATUSES = frozenset({LeaveStatus.PENDING, LeaveStatus.APPROVED})

# Statuses an admin may set when deciding.
DECISION_STATUSES = frozenset({LeaveStatus.APPROVED, LeaveStatus.REJECTED})
