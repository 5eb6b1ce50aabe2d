from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import inclusive_days
from ..core.enums import ACTIVE_LEAVE_STATUSES, LeaveStatus, LeaveType


@dataclass(frozen=True)
class LeaveRequest:
    request_id: int
    employee_id: int
    leave_type: LeaveType
    start_date: date
    end_date: date
    reason: str
    status: LeaveStatus
    created_at: datetime
    approved_by_id: Optional[int] = None
    approved_at: Optional[datetime] = None
    comments: Optional[str] = None

    @property
    def duration(self) -> int:
        """Inclusive day count, computed on read."""
        return inclusive_days(self.start_date, self.end_date)

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_LEAVE_STATUSES


@dataclass(frozen=True)
class NewLeave:
    employee_id: int
    leave_type: LeaveType
    start_date: date
    end_date: date
    reason: str
    created_at: datetime

    def to_request(self, request_id: int) -> LeaveRequest:
        return LeaveRequest(
            request_id=request_id,
            employee_id=self.employee_id,
            leave_type=self.leave_type,
            start_date=self.start_date,
            end_date=self.end_date,
            reason=self.reason,
            status=LeaveStatus.PENDING,
            created_at=self.created_at,
        )


@dataclass(frozen=True)
class LeaveDecision:
    status: LeaveStatus
    approved_by_id: int
    approved_at: datetime
    comments: Optional[str] = None
