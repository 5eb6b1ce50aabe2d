from __future__ import annotations

from datetime import date

from flask import Flask, jsonify

from ..common.datetime_utils import parse_iso_date
from ..common.http import (
    current_actor_id,
    error_response,
    json_body,
    optional_str,
    query_limit,
    role_required,
    server_error,
)
from ..common.presenters import leave_list, leave_to_dict
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import DomainError, ValidationError


def _date_field(data: dict, key: str) -> date:
    raw = data.get(key)
    if not isinstance(raw, str) or not raw:
        raise ValidationError(f"{key} is required (YYYY-MM-DD)", field=key)
    try:
        return parse_iso_date(raw)
    except ValueError:
        raise ValidationError(f"{key} must be an ISO 8601 date", field=key) from None


def register(app: Flask, container: Container) -> None:
    employees = container.employee_service
    leaves = container.leave_service

    @app.route("/api/employee/leave", methods=["POST"], endpoint="apply_leave")
    @role_required(Role.EMPLOYEE)
    def apply_leave():
        try:
            data = json_body()
            leave = leaves.apply(
                current_actor_id(),
                leave_type=optional_str(data, "leaveType") or "",
                start_date=_date_field(data, "startDate"),
                end_date=_date_field(data, "endDate"),
                reason=optional_str(data, "reason") or "",
            )
            return jsonify(
                {
                    "message": "Leave application submitted successfully",
                    "leave": leave_to_dict(leave, employees.find(leave.employee_id)),
                }
            )
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return server_error("leave application", e)

    @app.route("/api/employee/leave", methods=["GET"], endpoint="my_leaves")
    @role_required(Role.EMPLOYEE)
    def my_leaves():
        try:
            items = leaves.list_for_employee(current_actor_id(), limit=query_limit())
            return jsonify(leave_list(items, employees.find))
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return server_error("leave history", e)

    @app.route("/api/admin/leaves", methods=["GET"], endpoint="admin_leaves")
    @role_required(Role.ADMIN)
    def admin_leaves():
        try:
            return jsonify(leave_list(leaves.list_all(limit=query_limit()), employees.find))
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return server_error("leave listing", e)

    @app.route("/api/admin/leaves/<int:request_id>", methods=["PUT"], endpoint="decide_leave")
    @role_required(Role.ADMIN)
    def decide_leave(request_id: int):
        try:
            data = json_body()
            leave = leaves.decide(
                request_id,
                admin_id=current_actor_id(),
                new_status=optional_str(data, "status") or "",
                comments=optional_str(data, "comments"),
            )
            return jsonify(
                {
                    "message": f"Leave request {leave.status.value}",
                    "leave": leave_to_dict(
                        leave,
                        employees.find(leave.employee_id),
                        employees.find(leave.approved_by_id),
                    ),
                }
            )
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return server_error("leave decision", e)
