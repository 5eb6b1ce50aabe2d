from __future__ import annotations

import threading
from dataclasses import replace
from typing import Iterable, Optional, Sequence

from ..core.enums import Role
from ..core.exceptions import EmailInUse
from .model import Employee
from .repository import EmployeeRepository


class InMemoryEmployeeRepository(EmployeeRepository):
    """Process-local directory, used by tests and the ``memory`` storage mode."""

    def __init__(self, employees: Iterable[Employee] = ()):
        self._lock = threading.Lock()
        self._by_id: dict[int, Employee] = {e.employee_id: e for e in employees}

    def add(self, employee: Employee) -> None:
        with self._lock:
            self._by_id[employee.employee_id] = employee

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._by_id.get(int(employee_id))

    def get_by_email(self, email: str) -> Optional[Employee]:
        for e in list(self._by_id.values()):
            if e.email == email:
                return e
        return None

    def list_by_role(self, role: Role) -> Sequence[Employee]:
        items = [e for e in list(self._by_id.values()) if e.role == role]
        items.sort(key=lambda e: (e.created_at is not None, e.created_at, e.employee_id), reverse=True)
        return items

    def update(
        self,
        employee_id: int,
        *,
        name: Optional[str] = None,
        email: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> bool:
        with self._lock:
            current = self._by_id.get(int(employee_id))
            if not current:
                return False
            if email is not None and any(
                e.email == email and e.employee_id != current.employee_id for e in self._by_id.values()
            ):
                raise EmailInUse(email=email)
            changes: dict = {}
            if name is not None:
                changes["name"] = name
            if email is not None:
                changes["email"] = email
            if is_active is not None:
                changes["is_active"] = bool(is_active)
            self._by_id[current.employee_id] = replace(current, **changes)
            return True
