from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import from_utc_naive, to_utc_naive
from ..core.enums import ACTIVE_LEAVE_STATUSES, LeaveStatus, LeaveType
from ..core.exceptions import NotFound
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LeaveDecision, LeaveRequest, NewLeave
from .repository import LeaveRepository, OverlapGuard

_COLUMNS = """
    request_id, employee_id, leave_type, start_date, end_date, reason, status,
    created_at, approved_by_id, approved_at, comments
"""


def _row_to_request(r: Dict[str, Any]) -> LeaveRequest:
    approved_by = r.get("approved_by_id")
    return LeaveRequest(
        request_id=int(r["request_id"]),
        employee_id=int(r["employee_id"]),
        leave_type=LeaveType(r["leave_type"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        reason=r["reason"],
        status=LeaveStatus(r["status"]),
        created_at=from_utc_naive(r["created_at"]),
        approved_by_id=int(approved_by) if approved_by is not None else None,
        approved_at=from_utc_naive(r.get("approved_at")),
        comments=r.get("comments"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests WHERE request_id=%s", (int(request_id),))
            r = fetchone(cur)
            return _row_to_request(r) if r else None

    def list_for_employee(self, employee_id: int, limit: int) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE employee_id=%s
                ORDER BY created_at DESC, request_id DESC
                LIMIT %s
                """,
                (int(employee_id), int(limit)),
            )
            return [_row_to_request(r) for r in fetchall(cur)]

    def list_all(self, limit: int) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                ORDER BY created_at DESC, request_id DESC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [_row_to_request(r) for r in fetchall(cur)]

    def create_leave(self, new: NewLeave, *, guard: OverlapGuard) -> LeaveRequest:
        active = sorted(s.value for s in ACTIVE_LEAVE_STATUSES)
        with db_cursor(self._conn_factory) as (_, cur):
            # Row lock on the employee serializes concurrent applications of one employee.
            cur.execute(
                "SELECT employee_id FROM employees WHERE employee_id=%s FOR UPDATE",
                (int(new.employee_id),),
            )
            if not fetchone(cur):
                raise NotFound("Employee not found", employee_id=int(new.employee_id))

            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE employee_id=%s AND status IN (%s, %s)
                """,
                (int(new.employee_id), *active),
            )
            guard([_row_to_request(r) for r in fetchall(cur)])

            cur.execute(
                """
                INSERT INTO leave_requests(employee_id, leave_type, start_date, end_date, reason, status, created_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(new.employee_id),
                    new.leave_type.value,
                    new.start_date,
                    new.end_date,
                    new.reason,
                    LeaveStatus.PENDING.value,
                    to_utc_naive(new.created_at),
                ),
            )
            return new.to_request(int(cur.lastrowid))

    def decide(self, request_id: int, decision: LeaveDecision) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, approved_by_id=%s, approved_at=%s, comments=COALESCE(%s, comments)
                WHERE request_id=%s AND status=%s
                """,
                (
                    decision.status.value,
                    int(decision.approved_by_id),
                    to_utc_naive(decision.approved_at),
                    decision.comments,
                    int(request_id),
                    LeaveStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0
