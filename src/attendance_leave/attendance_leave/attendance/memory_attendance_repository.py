from __future__ import annotations

import itertools
from dataclasses import replace
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.locking import KeyedLock
from ..core.exceptions import DuplicateCheckIn
from .model import AttendanceRecord, NewCheckIn
from .repository import AttendanceRepository


class InMemoryAttendanceRepository(AttendanceRepository):
    """Dict-backed store keyed by (employee_id, work_date).

    Insert and checkout each run under the lock of their day key, which plays
    the part of the unique index.
    """

    def __init__(self):
        self._by_employee_date: dict[tuple[int, date], AttendanceRecord] = {}
        self._keys_by_id: dict[int, tuple[int, date]] = {}
        self._ids = itertools.count(1)
        self._locks = KeyedLock()

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return self._by_employee_date.get((int(employee_id), work_date))

    def list_for_employee(self, employee_id: int, limit: int) -> Sequence[AttendanceRecord]:
        items = [r for r in list(self._by_employee_date.values()) if r.employee_id == int(employee_id)]
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items[:limit]

    def list_all(self, limit: int) -> Sequence[AttendanceRecord]:
        items = list(self._by_employee_date.values())
        items.sort(key=lambda r: (r.work_date, r.check_in), reverse=True)
        return items[:limit]

    def create_checkin(self, new: NewCheckIn) -> AttendanceRecord:
        key = (int(new.employee_id), new.work_date)
        with self._locks.hold(key):
            if key in self._by_employee_date:
                raise DuplicateCheckIn(employee_id=new.employee_id, work_date=new.work_date)
            record = new.to_record(next(self._ids))
            self._by_employee_date[key] = record
            self._keys_by_id[record.attendance_id] = key
            return record

    def update_checkout(self, *, attendance_id: int, check_out: datetime) -> bool:
        key = self._keys_by_id.get(int(attendance_id))
        if key is None:
            return False
        with self._locks.hold(key):
            current = self._by_employee_date[key]
            if current.check_out is not None:
                return False
            self._by_employee_date[key] = replace(current, check_out=check_out)
            return True
