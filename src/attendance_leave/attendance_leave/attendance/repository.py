from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord, NewCheckIn


class AttendanceRepository(Protocol):
    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int, limit: int) -> Sequence[AttendanceRecord]:
        """Newest work_date first."""

        raise NotImplementedError

    def list_all(self, limit: int) -> Sequence[AttendanceRecord]:
        """Ordered by work_date desc, then check_in desc."""

        raise NotImplementedError

    def create_checkin(self, new: NewCheckIn) -> AttendanceRecord:
        """Insert atomically.

        Must raise ``DuplicateCheckIn`` when a record for
        (employee_id, work_date) already exists at commit time.
        """

        raise NotImplementedError

    def update_checkout(self, *, attendance_id: int, check_out: datetime) -> bool:
        """Set check_out only if still unset. False when nothing was updated."""

        raise NotImplementedError
