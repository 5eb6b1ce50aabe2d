from __future__ import annotations

from dataclasses import dataclass
from datetime import time, tzinfo

import pytz

from ..common.datetime_utils import parse_hhmm
from .constants import (
    DEFAULT_COMMENTS_MAX_LENGTH,
    DEFAULT_HISTORY_LIMIT,
    DEFAULT_LATE_CUTOFF,
    DEFAULT_REASON_MAX_LENGTH,
    DEFAULT_REASON_MIN_LENGTH,
    DEFAULT_TIMEZONE,
)


@dataclass(frozen=True)
class Policy:
    """Organization policy values fed into the services.

    The late cutoff and the reason bounds are configuration, not rules of the
    state machines, so they are passed in rather than hardcoded.
    """

    timezone: str = DEFAULT_TIMEZONE
    late_cutoff: time = DEFAULT_LATE_CUTOFF
    reason_min_length: int = DEFAULT_REASON_MIN_LENGTH
    reason_max_length: int = DEFAULT_REASON_MAX_LENGTH
    comments_max_length: int = DEFAULT_COMMENTS_MAX_LENGTH
    history_limit: int = DEFAULT_HISTORY_LIMIT

    def __post_init__(self):
        if self.reason_min_length > self.reason_max_length:
            raise ValueError("reason_min_length must be <= reason_max_length")
        # fail fast on typos in ORG_TIMEZONE
        pytz.timezone(self.timezone)

    @property
    def tz(self) -> tzinfo:
        return pytz.timezone(self.timezone)

    @classmethod
    def from_settings(cls, settings) -> "Policy":
        cutoff = getattr(settings, "LATE_CUTOFF", None)
        return cls(
            timezone=str(getattr(settings, "ORG_TIMEZONE", DEFAULT_TIMEZONE)),
            late_cutoff=parse_hhmm(cutoff) if cutoff else DEFAULT_LATE_CUTOFF,
            reason_min_length=int(getattr(settings, "LEAVE_REASON_MIN", DEFAULT_REASON_MIN_LENGTH)),
            reason_max_length=int(getattr(settings, "LEAVE_REASON_MAX", DEFAULT_REASON_MAX_LENGTH)),
            comments_max_length=int(getattr(settings, "LEAVE_COMMENTS_MAX", DEFAULT_COMMENTS_MAX_LENGTH)),
            history_limit=int(getattr(settings, "HISTORY_LIMIT", DEFAULT_HISTORY_LIMIT)),
        )
