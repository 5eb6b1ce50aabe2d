from __future__ import annotations

from datetime import datetime, time

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Check-in after the cutoff."""

    def decide_checkin(self, *, local_now: datetime, late_cutoff: time) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.LATE)
