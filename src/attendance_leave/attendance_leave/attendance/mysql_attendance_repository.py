from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

import mysql.connector

from ..common.datetime_utils import from_utc_naive, to_utc_naive
from ..core.enums import AttendanceStatus
from ..core.exceptions import DuplicateCheckIn, InfrastructureError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import AttendanceRecord, Location, NewCheckIn
from .repository import AttendanceRepository

_COLUMNS = """
    attendance_id, employee_id, work_date, check_in_time, check_out_time,
    latitude, longitude, photo, status, notes
"""


def _row_to_record(r: Dict[str, Any]) -> AttendanceRecord:
    location = None
    if r.get("latitude") is not None and r.get("longitude") is not None:
        location = Location(latitude=float(r["latitude"]), longitude=float(r["longitude"]))
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        check_in=from_utc_naive(r["check_in_time"]),
        check_out=from_utc_naive(r.get("check_out_time")),
        status=AttendanceStatus(r["status"]),
        location=location,
        photo=r.get("photo"),
        notes=r.get("notes"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    """Uniqueness of (employee_id, work_date) is the ``uq_attendance_day`` index."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s AND work_date=%s
                """,
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def list_for_employee(self, employee_id: int, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s
                ORDER BY work_date DESC
                LIMIT %s
                """,
                (int(employee_id), int(limit)),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_all(self, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                ORDER BY work_date DESC, check_in_time DESC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def create_checkin(self, new: NewCheckIn) -> AttendanceRecord:
        location = new.location
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(
                        employee_id, work_date, check_in_time, latitude, longitude, photo, status, notes
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        int(new.employee_id),
                        new.work_date,
                        to_utc_naive(new.check_in),
                        location.latitude if location else None,
                        location.longitude if location else None,
                        new.photo,
                        new.status.value,
                        new.notes,
                    ),
                )
                attendance_id = int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e):
                raise DuplicateCheckIn(employee_id=new.employee_id, work_date=new.work_date) from e
            raise InfrastructureError("Database operation failed") from e

        return new.to_record(attendance_id)

    def update_checkout(self, *, attendance_id: int, check_out: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out_time=%s
                WHERE attendance_id=%s AND check_out_time IS NULL
                """,
                (to_utc_naive(check_out), int(attendance_id)),
            )
            return cur.rowcount > 0
