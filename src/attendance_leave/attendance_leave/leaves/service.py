from __future__ import annotations

import logging
from datetime import date, datetime
from functools import partial
from typing import Optional, Sequence, Union

from ..common.datetime_utils import calendar_day, now_local, to_local
from ..common.validators import require_length_between
from ..core.enums import DECISION_STATUSES, LeaveStatus, LeaveType
from ..core.exceptions import (
    AlreadyDecided,
    CommentsTooLong,
    InvalidDateRange,
    InvalidDecision,
    InvalidLeaveType,
    NotFound,
    OverlappingRequest,
    ReasonTooLong,
    ReasonTooShort,
)
from ..core.policy import Policy
from ..employees.service import EmployeeService
from .model import LeaveDecision, LeaveRequest, NewLeave
from .overlap import ensure_no_overlap
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


def _coerce_leave_type(value: Union[LeaveType, str]) -> LeaveType:
    try:
        return LeaveType(value)
    except ValueError:
        raise InvalidLeaveType(leave_type=value, allowed=[t.value for t in LeaveType]) from None


def _coerce_decision(value: Union[LeaveStatus, str]) -> LeaveStatus:
    try:
        status = LeaveStatus(value)
    except ValueError:
        status = None
    if status not in DECISION_STATUSES:
        raise InvalidDecision(status=str(getattr(value, "value", value)))
    return status


class LeaveService:
    """Leave lifecycle: pending -> approved | rejected, decided once."""

    def __init__(self, leaves: LeaveRepository, employees: EmployeeService, *, policy: Policy | None = None):
        self._leaves = leaves
        self._employees = employees
        self._policy = policy or Policy()

    def _now(self, now: datetime | None) -> datetime:
        tz = self._policy.tz
        return to_local(now, tz) if now is not None else now_local(tz)

    def apply(
        self,
        employee_id: int,
        *,
        leave_type: Union[LeaveType, str],
        start_date: date,
        end_date: date,
        reason: str,
        today: date | None = None,
        now: datetime | None = None,
    ) -> LeaveRequest:
        employee = self._employees.resolve_active(employee_id)
        leave_type = _coerce_leave_type(leave_type)

        now = self._now(now)
        today = today or calendar_day(now, self._policy.tz)
        if start_date < today:
            raise InvalidDateRange("Start date cannot be in the past", start_date=start_date, today=today)
        if end_date < start_date:
            raise InvalidDateRange("End date must not be before start date", start_date=start_date, end_date=end_date)

        reason = require_length_between(
            reason,
            "Reason",
            min_len=self._policy.reason_min_length,
            max_len=self._policy.reason_max_length,
            too_short=ReasonTooShort,
            too_long=ReasonTooLong,
        )

        try:
            request = self._leaves.create_leave(
                NewLeave(
                    employee_id=employee.employee_id,
                    leave_type=leave_type,
                    start_date=start_date,
                    end_date=end_date,
                    reason=reason,
                    created_at=now,
                ),
                guard=partial(ensure_no_overlap, start_date, end_date),
            )
        except OverlappingRequest as e:
            logger.info("overlapping leave for employee %s: %s", employee.employee_id, e.context)
            raise
        logger.info(
            "leave request %s created for employee %s (%s..%s)",
            request.request_id,
            employee.employee_id,
            start_date.isoformat(),
            end_date.isoformat(),
        )
        return request

    def decide(
        self,
        request_id: int,
        *,
        admin_id: int,
        new_status: Union[LeaveStatus, str],
        comments: Optional[str] = None,
        now: datetime | None = None,
    ) -> LeaveRequest:
        current = self.get(request_id)
        if current.status != LeaveStatus.PENDING:
            raise AlreadyDecided(request_id=current.request_id, status=current.status)

        status = _coerce_decision(new_status)

        comments = (comments or "").strip() or None
        if comments and len(comments) > self._policy.comments_max_length:
            raise CommentsTooLong(length=len(comments), max_length=self._policy.comments_max_length)

        decision = LeaveDecision(
            status=status,
            approved_by_id=int(admin_id),
            approved_at=self._now(now),
            comments=comments,
        )
        if not self._leaves.decide(current.request_id, decision):
            logger.warning("concurrent decision lost for leave request %s", current.request_id)
            latest = self._leaves.get(current.request_id)
            raise AlreadyDecided(
                request_id=current.request_id,
                status=latest.status if latest else None,
            )

        logger.info("leave request %s %s by admin %s", current.request_id, status.value, admin_id)
        return self.get(current.request_id)

    def approve(self, request_id: int, *, admin_id: int, comments: Optional[str] = None, now: datetime | None = None):
        return self.decide(request_id, admin_id=admin_id, new_status=LeaveStatus.APPROVED, comments=comments, now=now)

    def reject(self, request_id: int, *, admin_id: int, comments: Optional[str] = None, now: datetime | None = None):
        return self.decide(request_id, admin_id=admin_id, new_status=LeaveStatus.REJECTED, comments=comments, now=now)

    def get(self, request_id: int) -> LeaveRequest:
        request = self._leaves.get(int(request_id))
        if not request:
            raise NotFound("Leave request not found", request_id=int(request_id))
        return request

    def list_for_employee(self, employee_id: int, *, limit: int | None = None) -> Sequence[LeaveRequest]:
        return self._leaves.list_for_employee(int(employee_id), limit or self._policy.history_limit)

    def list_all(self, *, limit: int | None = None) -> Sequence[LeaveRequest]:
        return self._leaves.list_all(limit or self._policy.history_limit)
