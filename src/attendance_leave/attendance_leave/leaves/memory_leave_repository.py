from __future__ import annotations

import itertools
from dataclasses import replace
from typing import Optional, Sequence

from ..common.locking import KeyedLock
from ..core.enums import LeaveStatus
from .model import LeaveDecision, LeaveRequest, NewLeave
from .repository import LeaveRepository, OverlapGuard


class InMemoryLeaveRepository(LeaveRepository):
    """Dict-backed store; applications are serialized per employee, decisions per request."""

    def __init__(self):
        self._by_id: dict[int, LeaveRequest] = {}
        self._ids = itertools.count(1)
        self._employee_locks = KeyedLock()
        self._request_locks = KeyedLock()

    def get(self, request_id: int) -> Optional[LeaveRequest]:
        return self._by_id.get(int(request_id))

    @staticmethod
    def _newest_first(items: list[LeaveRequest]) -> list[LeaveRequest]:
        items.sort(key=lambda r: (r.created_at, r.request_id), reverse=True)
        return items

    def list_for_employee(self, employee_id: int, limit: int) -> Sequence[LeaveRequest]:
        items = [r for r in list(self._by_id.values()) if r.employee_id == int(employee_id)]
        return self._newest_first(items)[:limit]

    def list_all(self, limit: int) -> Sequence[LeaveRequest]:
        return self._newest_first(list(self._by_id.values()))[:limit]

    def create_leave(self, new: NewLeave, *, guard: OverlapGuard) -> LeaveRequest:
        with self._employee_locks.hold(int(new.employee_id)):
            active = [r for r in list(self._by_id.values()) if r.employee_id == int(new.employee_id) and r.is_active]
            guard(active)
            request = new.to_request(next(self._ids))
            self._by_id[request.request_id] = request
            return request

    def decide(self, request_id: int, decision: LeaveDecision) -> bool:
        with self._request_locks.hold(int(request_id)):
            current = self._by_id.get(int(request_id))
            if not current or current.status != LeaveStatus.PENDING:
                return False
            self._by_id[current.request_id] = replace(
                current,
                status=decision.status,
                approved_by_id=decision.approved_by_id,
                approved_at=decision.approved_at,
                comments=decision.comments if decision.comments is not None else current.comments,
            )
            return True
