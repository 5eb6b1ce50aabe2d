from __future__ import annotations

from datetime import date, datetime, time

import pytest
import pytz

from src.attendance_leave.attendance_leave.common.datetime_utils import (
    calendar_day,
    from_utc_naive,
    inclusive_days,
    parse_hhmm,
    parse_iso_date,
    to_local,
    to_utc_naive,
)

HCM = pytz.timezone("Asia/Ho_Chi_Minh")


def test_parse_helpers():
    assert parse_iso_date("2024-06-03") == date(2024, 6, 3)
    assert parse_hhmm(" 09:15 ") == time(9, 15)
    with pytest.raises(ValueError):
        parse_iso_date("03/06/2024")


def test_naive_values_are_local_wall_time():
    local = to_local(datetime(2024, 6, 3, 9, 0), HCM)

    assert local.hour == 9
    assert local.utcoffset().total_seconds() == 7 * 3600


def test_aware_values_are_converted():
    utc_evening = pytz.utc.localize(datetime(2024, 6, 3, 20, 0))

    assert calendar_day(utc_evening, HCM) == date(2024, 6, 4)
    assert calendar_day(utc_evening, pytz.utc) == date(2024, 6, 3)


def test_utc_round_trip_for_storage():
    local = HCM.localize(datetime(2024, 6, 4, 3, 0))

    stored = to_utc_naive(local)
    assert stored == datetime(2024, 6, 3, 20, 0)
    assert from_utc_naive(stored) == local
    assert to_utc_naive(None) is None
    assert from_utc_naive(None) is None


def test_inclusive_days():
    assert inclusive_days(date(2024, 6, 10), date(2024, 6, 10)) == 1
    assert inclusive_days(date(2024, 12, 30), date(2025, 1, 2)) == 4


@pytest.mark.parametrize("raw", ["2024-06-10garbage", "2024-06-1", "2024-13-01", ""])
def test_parse_iso_date_rejects_partial_matches(raw):
    with pytest.raises(ValueError):
        parse_iso_date(raw)


def test_parse_iso_date_keeps_the_date_of_a_timestamp():
    assert parse_iso_date("2024-06-10T23:30:00") == date(2024, 6, 10)
