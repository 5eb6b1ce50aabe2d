"""Closed-interval overlap rules for leave requests.

Two inclusive ranges [s1, e1] and [s2, e2] intersect iff s1 <= e2 and s2 <= e1.
Only requests in an active status (pending, approved) take part; a rejected
request never blocks new dates.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from ..core.exceptions import OverlappingRequest
from .model import LeaveRequest


def ranges_overlap(start1: date, end1: date, start2: date, end2: date) -> bool:
    return start1 <= end2 and start2 <= end1


def find_overlapping(requests: Iterable[LeaveRequest], start: date, end: date) -> Optional[LeaveRequest]:
    """First active request whose range intersects [start, end], if any."""
    for req in requests:
        if req.is_active and ranges_overlap(req.start_date, req.end_date, start, end):
            return req
    return None


def ensure_no_overlap(start: date, end: date, requests: Iterable[LeaveRequest]) -> None:
    conflict = find_overlapping(requests, start, end)
    if conflict is not None:
        raise OverlappingRequest(
            request_id=conflict.request_id,
            start_date=conflict.start_date,
            end_date=conflict.end_date,
            status=conflict.status,
        )
