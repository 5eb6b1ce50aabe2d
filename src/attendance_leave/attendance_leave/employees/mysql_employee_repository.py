from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

import mysql.connector

from ..common.datetime_utils import from_utc_naive
from ..core.enums import Role
from ..core.exceptions import EmailInUse, InfrastructureError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "employee_id, name, email, role, is_active, created_at"


def _row_to_employee(row: Dict[str, Any]) -> Employee:
    return Employee(
        employee_id=int(row["employee_id"]),
        name=row["name"],
        email=row["email"],
        role=Role(row["role"]),
        is_active=bool(row.get("is_active", True)),
        created_at=from_utc_naive(row.get("created_at")),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            row = fetchone(cur)
            return _row_to_employee(row) if row else None

    def get_by_email(self, email: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE email=%s", (email,))
            row = fetchone(cur)
            return _row_to_employee(row) if row else None

    def list_by_role(self, role: Role) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM employees
                WHERE role=%s
                ORDER BY created_at DESC, employee_id DESC
                """,
                (role.value,),
            )
            return [_row_to_employee(r) for r in fetchall(cur)]

    def update(
        self,
        employee_id: int,
        *,
        name: Optional[str] = None,
        email: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> bool:
        sets: list[str] = []
        params: list[object] = []
        if name is not None:
            sets.append("name=%s")
            params.append(name)
        if email is not None:
            sets.append("email=%s")
            params.append(email)
        if is_active is not None:
            sets.append("is_active=%s")
            params.append(1 if is_active else 0)
        if not sets:
            return self.get_by_id(employee_id) is not None

        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"UPDATE employees SET {', '.join(sets)} WHERE employee_id=%s",
                    tuple(params + [int(employee_id)]),
                )
                # MySQL reports 0 affected rows when values are unchanged
                if cur.rowcount > 0:
                    return True
                cur.execute("SELECT 1 AS found FROM employees WHERE employee_id=%s", (int(employee_id),))
                return fetchone(cur) is not None
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e):
                raise EmailInUse(email=email) from e
            raise InfrastructureError("Database operation failed") from e
