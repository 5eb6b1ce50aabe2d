from __future__ import annotations

from typing import Callable, Optional, Protocol, Sequence

from .model import LeaveDecision, LeaveRequest, NewLeave

# Receives the employee's active requests; raises to abort the insert.
OverlapGuard = Callable[[Sequence[LeaveRequest]], None]


class LeaveRepository(Protocol):
    def get(self, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int, limit: int) -> Sequence[LeaveRequest]:
        """Newest created_at first."""

        raise NotImplementedError

    def list_all(self, limit: int) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def create_leave(self, new: NewLeave, *, guard: OverlapGuard) -> LeaveRequest:
        """Run ``guard`` over the employee's active requests, then insert.

        Both steps form one atomic unit per employee: no other application for
        the same employee can commit in between.
        """

        raise NotImplementedError

    def decide(self, request_id: int, decision: LeaveDecision) -> bool:
        """Apply ``decision`` only while the request is still pending.

        ``comments`` is written only when not None. False when nothing was updated.
        """

        raise NotImplementedError
