from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import error_response, json_body, optional_bool, optional_str, role_required, server_error
from ..common.presenters import employee_to_dict
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    employees = container.employee_service

    @app.route("/api/admin/employees", methods=["GET"], endpoint="admin_employees")
    @role_required(Role.ADMIN)
    def admin_employees():
        try:
            return jsonify([employee_to_dict(e) for e in employees.list_employees()])
        except Exception as e:
            return server_error("employee listing", e)

    @app.route("/api/admin/employees/<int:employee_id>", methods=["GET"], endpoint="admin_employee")
    @role_required(Role.ADMIN)
    def admin_employee(employee_id: int):
        try:
            return jsonify(employee_to_dict(employees.get_employee(employee_id)))
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return server_error("employee lookup", e)

    @app.route("/api/admin/employees/<int:employee_id>", methods=["PUT"], endpoint="admin_update_employee")
    @role_required(Role.ADMIN)
    def admin_update_employee(employee_id: int):
        try:
            data = json_body()
            employee = employees.update_employee(
                employee_id,
                name=optional_str(data, "name"),
                email=optional_str(data, "email"),
                is_active=optional_bool(data, "isActive"),
            )
            return jsonify(employee_to_dict(employee))
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return server_error("employee update", e)

    @app.route("/api/admin/employees/<int:employee_id>", methods=["DELETE"], endpoint="admin_deactivate_employee")
    @role_required(Role.ADMIN)
    def admin_deactivate_employee(employee_id: int):
        try:
            employees.deactivate_employee(employee_id)
            return jsonify({"message": "Employee deactivated successfully"})
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return server_error("employee deactivation", e)
