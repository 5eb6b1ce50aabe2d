from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus, DayStatus


@dataclass(frozen=True)
class Location:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one calendar day."""

    attendance_id: int
    employee_id: int
    work_date: date
    check_in: datetime
    check_out: Optional[datetime]
    status: AttendanceStatus
    location: Optional[Location] = None
    photo: Optional[str] = None
    notes: Optional[str] = None

    @property
    def day_status(self) -> DayStatus:
        return DayStatus.CHECKED_OUT if self.check_out is not None else DayStatus.CHECKED_IN


@dataclass(frozen=True)
class NewCheckIn:
    """Values for a record about to be inserted."""

    employee_id: int
    work_date: date
    check_in: datetime
    status: AttendanceStatus
    location: Optional[Location] = None
    photo: Optional[str] = None
    notes: Optional[str] = None

    def to_record(self, attendance_id: int) -> AttendanceRecord:
        return AttendanceRecord(
            attendance_id=attendance_id,
            employee_id=self.employee_id,
            work_date=self.work_date,
            check_in=self.check_in,
            check_out=None,
            status=self.status,
            location=self.location,
            photo=self.photo,
            notes=self.notes,
        )


@dataclass(frozen=True)
class TodayStatus:
    status: DayStatus
    record: Optional[AttendanceRecord] = None
