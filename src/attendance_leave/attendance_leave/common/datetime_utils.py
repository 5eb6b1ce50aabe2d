from __future__ import annotations

from datetime import date, datetime, time, tzinfo

import pytz


def parse_iso_date(value: str) -> date:
    """Parse an ISO 8601 date; a full timestamp keeps its date part.

    The whole string must parse, otherwise ``ValueError``.
    """
    try:
        return date.fromisoformat(value)
    except ValueError:
        return datetime.fromisoformat(value).date()


def parse_hhmm(value: str) -> time:
    """Parse HH:MM string into time."""
    return datetime.strptime(value.strip(), "%H:%M").time()


def now_local(tz: tzinfo) -> datetime:
    """Current time in the organization timezone.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(tz)


def to_local(value: datetime, tz: tzinfo) -> datetime:
    """Express ``value`` in ``tz``.

    Naive datetimes are taken to already be organization-local wall time.
    """
    if value.tzinfo is None:
        return tz.localize(value) if hasattr(tz, "localize") else value.replace(tzinfo=tz)
    return value.astimezone(tz)


def calendar_day(value: datetime, tz: tzinfo) -> date:
    """The organization calendar day ``value`` falls on (time truncated)."""
    return to_local(value, tz).date()


def inclusive_days(start: date, end: date) -> int:
    """Number of calendar days in the closed range [start, end]."""
    return (end - start).days + 1


def to_utc_naive(value: datetime | None) -> datetime | None:
    """Aware datetime -> naive UTC for DATETIME columns."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value
    return value.astimezone(pytz.utc).replace(tzinfo=None)


def from_utc_naive(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is not None:
        return value
    return pytz.utc.localize(value)
