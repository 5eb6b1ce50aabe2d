from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import calendar_day, now_local, to_local
from ..core.enums import DayStatus
from ..core.exceptions import AlreadyCheckedOut, DuplicateCheckIn, InvalidCheckOutTime, NoCheckInFound
from ..core.policy import Policy
from ..employees.service import EmployeeService
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, Location, NewCheckIn, TodayStatus
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Daily check-in/check-out lifecycle, one record per employee per day."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeService,
        *,
        policy: Policy | None = None,
        strategy_factory: AttendanceStrategyFactory | None = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._policy = policy or Policy()
        self._factory = strategy_factory or AttendanceStrategyFactory()

    def _local_now(self, now: datetime | None) -> datetime:
        tz = self._policy.tz
        return to_local(now, tz) if now is not None else now_local(tz)

    def check_in(
        self,
        employee_id: int,
        *,
        now: datetime | None = None,
        location: Optional[Location] = None,
        photo: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> AttendanceRecord:
        employee = self._employees.resolve_active(employee_id)
        now = self._local_now(now)
        today = calendar_day(now, self._policy.tz)

        existing = self._attendance.get_for_employee_and_date(employee.employee_id, today)
        if existing:
            logger.info("duplicate check-in for employee %s on %s", employee.employee_id, today.isoformat())
            raise DuplicateCheckIn(employee_id=employee.employee_id, work_date=today)

        strategy = self._factory.for_checkin(local_now=now, late_cutoff=self._policy.late_cutoff)
        decision = strategy.decide_checkin(local_now=now, late_cutoff=self._policy.late_cutoff)

        # the repository re-checks uniqueness at commit; a concurrent winner makes this raise
        record = self._attendance.create_checkin(
            NewCheckIn(
                employee_id=employee.employee_id,
                work_date=today,
                check_in=now,
                status=decision.status,
                location=location,
                photo=photo or None,
                notes=notes or None,
            )
        )
        logger.info(
            "employee %s checked in on %s (%s)", employee.employee_id, today.isoformat(), record.status.value
        )
        return record

    def check_out(self, employee_id: int, *, now: datetime | None = None) -> AttendanceRecord:
        employee_id = int(employee_id)
        now = self._local_now(now)
        today = calendar_day(now, self._policy.tz)

        record = self._attendance.get_for_employee_and_date(employee_id, today)
        if not record:
            raise NoCheckInFound(employee_id=employee_id, work_date=today)
        if record.check_out is not None:
            raise AlreadyCheckedOut(employee_id=employee_id, work_date=today, check_out=record.check_out)
        if now < record.check_in:
            raise InvalidCheckOutTime(check_in=record.check_in, check_out=now)

        if not self._attendance.update_checkout(attendance_id=record.attendance_id, check_out=now):
            logger.warning("concurrent check-out lost for attendance %s", record.attendance_id)
            raise AlreadyCheckedOut(employee_id=employee_id, work_date=today)

        logger.info("employee %s checked out on %s", employee_id, today.isoformat())
        return self._attendance.get_for_employee_and_date(employee_id, today)

    def today_status(self, employee_id: int, *, now: datetime | None = None) -> TodayStatus:
        today = calendar_day(self._local_now(now), self._policy.tz)
        record = self._attendance.get_for_employee_and_date(int(employee_id), today)
        if not record:
            return TodayStatus(status=DayStatus.NOT_CHECKED_IN)
        return TodayStatus(status=record.day_status, record=record)

    def list_history(self, employee_id: int, *, limit: int | None = None) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_employee(int(employee_id), limit or self._policy.history_limit)

    def list_all(self, *, limit: int | None = None) -> Sequence[AttendanceRecord]:
        return self._attendance.list_all(limit or self._policy.history_limit)
