from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time

from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.on_time_strategy import OnTimeStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_checkin(self, *, local_now: datetime, late_cutoff: time) -> AttendanceStrategy:
        # local_now is organization wall time; compare time-of-day only
        if local_now.time().replace(tzinfo=None) <= late_cutoff:
            return OnTimeStrategy()
        return LateStrategy()
