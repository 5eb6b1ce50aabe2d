from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_NAME_LENGTH
from ..core.enums import Role
from ..core.exceptions import EmailInUse, InactiveEmployee, NotFound, ValidationError
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class EmployeeService:
    """Directory lookups for the core plus the admin's employee maintenance."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def resolve(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFound("Employee not found", employee_id=int(employee_id))
        return employee

    def resolve_active(self, employee_id: int) -> Employee:
        employee = self.resolve(employee_id)
        if not employee.is_active:
            raise InactiveEmployee(employee_id=employee.employee_id)
        return employee

    def find(self, employee_id: Optional[int]) -> Optional[Employee]:
        """Lenient lookup for read-side joins; a dangling id yields None."""
        if employee_id is None:
            return None
        return self._employees.get_by_id(int(employee_id))

    def list_employees(self) -> Sequence[Employee]:
        return self._employees.list_by_role(Role.EMPLOYEE)

    def get_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee or employee.role != Role.EMPLOYEE:
            raise NotFound("Employee not found", employee_id=int(employee_id))
        return employee

    def update_employee(
        self,
        employee_id: int,
        *,
        name: Optional[str] = None,
        email: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> Employee:
        current = self.get_employee(employee_id)

        if name is not None:
            name = require_min_length(require_non_empty(name, "Name"), "Name", MIN_NAME_LENGTH)

        if email is not None:
            email = require_non_empty(email, "Email").lower()
            if "@" not in email:
                raise ValidationError("Email is invalid", email=email)
            if email == current.email:
                email = None
            else:
                other = self._employees.get_by_email(email)
                if other and other.employee_id != current.employee_id:
                    raise EmailInUse(email=email)

        self._employees.update(current.employee_id, name=name, email=email, is_active=is_active)
        logger.info("employee %s updated", current.employee_id)
        return self.get_employee(current.employee_id)

    def deactivate_employee(self, employee_id: int) -> Employee:
        """Soft delete: the record stays, the account is switched off."""
        current = self.get_employee(employee_id)
        self._employees.update(current.employee_id, is_active=False)
        logger.info("employee %s deactivated", current.employee_id)
        return self.get_employee(current.employee_id)
