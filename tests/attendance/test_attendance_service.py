from __future__ import annotations

import threading
from datetime import date, datetime, time

import pytest
import pytz

from src.attendance_leave.attendance_leave.attendance.model import Location
from src.attendance_leave.attendance_leave.container import build_memory_container
from src.attendance_leave.attendance_leave.core.enums import AttendanceStatus, DayStatus
from src.attendance_leave.attendance_leave.core.exceptions import (
    AlreadyCheckedOut,
    DuplicateCheckIn,
    InactiveEmployee,
    InvalidCheckOutTime,
    NoCheckInFound,
    NotFound,
)
from src.attendance_leave.attendance_leave.core.policy import Policy

EMPLOYEE_ID = 2
OTHER_EMPLOYEE_ID = 3
INACTIVE_ID = 4


@pytest.fixture
def svc(container):
    return container.attendance_service


def test_day_lifecycle_check_in_then_out(svc, fixed_now):
    rec = svc.check_in(EMPLOYEE_ID, now=fixed_now)
    assert rec.status == AttendanceStatus.PRESENT
    assert rec.work_date == date(2024, 6, 3)
    assert rec.check_out is None

    with pytest.raises(DuplicateCheckIn):
        svc.check_in(EMPLOYEE_ID, now=datetime(2024, 6, 3, 11, 0))

    out = svc.check_out(EMPLOYEE_ID, now=datetime(2024, 6, 3, 17, 0))
    assert out.check_out is not None
    assert out.check_out.hour == 17
    assert out.attendance_id == rec.attendance_id

    with pytest.raises(AlreadyCheckedOut):
        svc.check_out(EMPLOYEE_ID, now=datetime(2024, 6, 3, 17, 30))


def test_duplicate_check_in_keeps_single_record(svc, container, fixed_now):
    svc.check_in(EMPLOYEE_ID, now=fixed_now)
    for minute in (10, 20, 30):
        with pytest.raises(DuplicateCheckIn):
            svc.check_in(EMPLOYEE_ID, now=datetime(2024, 6, 3, 10, minute))

    assert len(svc.list_history(EMPLOYEE_ID)) == 1


def test_check_in_after_cutoff_is_late(svc):
    rec = svc.check_in(EMPLOYEE_ID, now=datetime(2024, 6, 3, 9, 16))
    assert rec.status == AttendanceStatus.LATE


def test_late_cutoff_comes_from_policy(people):
    container = build_memory_container(policy=Policy(late_cutoff=time(8, 0)), employees=people)
    rec = container.attendance_service.check_in(EMPLOYEE_ID, now=datetime(2024, 6, 3, 8, 30))
    assert rec.status == AttendanceStatus.LATE


def test_check_out_without_check_in_fails(svc, fixed_now):
    with pytest.raises(NoCheckInFound):
        svc.check_out(EMPLOYEE_ID, now=fixed_now)


def test_check_out_yesterday_record_does_not_count(svc):
    svc.check_in(EMPLOYEE_ID, now=datetime(2024, 6, 2, 9, 0))
    with pytest.raises(NoCheckInFound):
        svc.check_out(EMPLOYEE_ID, now=datetime(2024, 6, 3, 9, 0))


def test_check_out_before_check_in_is_rejected(svc):
    svc.check_in(EMPLOYEE_ID, now=datetime(2024, 6, 3, 10, 0))
    with pytest.raises(InvalidCheckOutTime):
        svc.check_out(EMPLOYEE_ID, now=datetime(2024, 6, 3, 9, 0))

    assert svc.today_status(EMPLOYEE_ID, now=datetime(2024, 6, 3, 10, 0)).status == DayStatus.CHECKED_IN


def test_today_status_transitions(svc, fixed_now):
    assert svc.today_status(EMPLOYEE_ID, now=fixed_now).status == DayStatus.NOT_CHECKED_IN
    assert svc.today_status(EMPLOYEE_ID, now=fixed_now).record is None

    svc.check_in(EMPLOYEE_ID, now=fixed_now)
    today = svc.today_status(EMPLOYEE_ID, now=fixed_now)
    assert today.status == DayStatus.CHECKED_IN
    assert today.record is not None

    svc.check_out(EMPLOYEE_ID, now=datetime(2024, 6, 3, 17, 0))
    assert svc.today_status(EMPLOYEE_ID, now=datetime(2024, 6, 3, 18, 0)).status == DayStatus.CHECKED_OUT


def test_location_photo_and_notes_are_kept_verbatim(svc, fixed_now):
    rec = svc.check_in(
        EMPLOYEE_ID,
        now=fixed_now,
        location=Location(latitude=10.762622, longitude=106.660172),
        photo="data:image/png;base64,iVBORw0KGgo=",
        notes="client site",
    )
    assert rec.location == Location(latitude=10.762622, longitude=106.660172)
    assert rec.photo == "data:image/png;base64,iVBORw0KGgo="
    assert rec.notes == "client site"


def test_unknown_employee_cannot_check_in(svc, fixed_now):
    with pytest.raises(NotFound):
        svc.check_in(999, now=fixed_now)


def test_inactive_employee_cannot_check_in(svc, fixed_now):
    with pytest.raises(InactiveEmployee):
        svc.check_in(INACTIVE_ID, now=fixed_now)


def test_history_is_per_employee_and_newest_first(svc):
    svc.check_in(EMPLOYEE_ID, now=datetime(2024, 6, 1, 9, 0))
    svc.check_in(EMPLOYEE_ID, now=datetime(2024, 6, 3, 9, 0))
    svc.check_in(EMPLOYEE_ID, now=datetime(2024, 6, 2, 9, 0))
    svc.check_in(OTHER_EMPLOYEE_ID, now=datetime(2024, 6, 3, 8, 0))

    history = svc.list_history(EMPLOYEE_ID)
    assert [r.work_date.day for r in history] == [3, 2, 1]
    assert all(r.employee_id == EMPLOYEE_ID for r in history)


def test_list_all_orders_by_date_then_check_in(svc):
    svc.check_in(EMPLOYEE_ID, now=datetime(2024, 6, 3, 8, 0))
    svc.check_in(OTHER_EMPLOYEE_ID, now=datetime(2024, 6, 3, 9, 0))
    svc.check_in(EMPLOYEE_ID, now=datetime(2024, 6, 2, 9, 30))

    rows = svc.list_all()
    assert [(r.work_date.day, r.employee_id) for r in rows] == [
        (3, OTHER_EMPLOYEE_ID),
        (3, EMPLOYEE_ID),
        (2, EMPLOYEE_ID),
    ]


def test_calendar_day_follows_organization_timezone(people):
    container = build_memory_container(policy=Policy(timezone="Asia/Ho_Chi_Minh"), employees=people)
    svc = container.attendance_service

    # 20:00 UTC on the 3rd is 03:00 on the 4th in UTC+7
    rec = svc.check_in(EMPLOYEE_ID, now=pytz.utc.localize(datetime(2024, 6, 3, 20, 0)))

    assert rec.work_date == date(2024, 6, 4)
    assert rec.status == AttendanceStatus.PRESENT
    with pytest.raises(DuplicateCheckIn):
        svc.check_in(EMPLOYEE_ID, now=datetime(2024, 6, 4, 10, 0))


def test_concurrent_check_ins_only_one_wins(svc):
    attempts = 12
    barrier = threading.Barrier(attempts)
    wins: list[int] = []
    duplicates: list[Exception] = []
    lock = threading.Lock()

    def worker():
        barrier.wait()
        try:
            rec = svc.check_in(EMPLOYEE_ID, now=datetime(2024, 6, 3, 9, 0))
            with lock:
                wins.append(rec.attendance_id)
        except DuplicateCheckIn as e:
            with lock:
                duplicates.append(e)

    threads = [threading.Thread(target=worker) for _ in range(attempts)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(wins) == 1
    assert len(duplicates) == attempts - 1
    assert len(svc.list_history(EMPLOYEE_ID)) == 1
