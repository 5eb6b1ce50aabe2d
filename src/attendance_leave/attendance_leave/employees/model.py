from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: a directory entry (employee or admin).

    Plain data object; password and login live with the authentication
    collaborator, not here.
    """

    employee_id: int
    name: str
    email: str
    role: Role
    is_active: bool = True
    created_at: Optional[datetime] = None

    def display(self) -> dict:
        """Fields attached to records on read."""
        return {"id": self.employee_id, "name": self.name, "email": self.email}
