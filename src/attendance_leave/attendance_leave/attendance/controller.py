from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import (
    current_actor_id,
    error_response,
    json_body,
    optional_float,
    optional_str,
    query_limit,
    role_required,
    server_error,
)
from ..common.presenters import attendance_list, attendance_to_dict, today_to_dict
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import DomainError, ValidationError
from .model import Location


def _location_from(data: dict):
    latitude = optional_float(data, "latitude")
    longitude = optional_float(data, "longitude")
    if latitude is None and longitude is None:
        return None
    if latitude is None or longitude is None:
        raise ValidationError("latitude and longitude must be sent together")
    if not (-90 <= latitude <= 90 and -180 <= longitude <= 180):
        raise ValidationError("Coordinates out of range", latitude=latitude, longitude=longitude)
    return Location(latitude=latitude, longitude=longitude)


def register(app: Flask, container: Container) -> None:
    employees = container.employee_service
    attendance = container.attendance_service

    @app.route("/api/employee/checkin", methods=["POST"], endpoint="checkin")
    @role_required(Role.EMPLOYEE)
    def checkin():
        try:
            data = json_body()
            record = attendance.check_in(
                current_actor_id(),
                location=_location_from(data),
                photo=optional_str(data, "photo"),
                notes=optional_str(data, "notes"),
            )
            return jsonify(
                {
                    "message": "Checked in successfully",
                    "attendance": attendance_to_dict(record, employees.find(record.employee_id)),
                }
            )
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return server_error("check-in", e)

    @app.route("/api/employee/checkout", methods=["PUT"], endpoint="checkout")
    @role_required(Role.EMPLOYEE)
    def checkout():
        try:
            record = attendance.check_out(current_actor_id())
            return jsonify(
                {
                    "message": "Checked out successfully",
                    "attendance": attendance_to_dict(record, employees.find(record.employee_id)),
                }
            )
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return server_error("check-out", e)

    @app.route("/api/employee/attendance", methods=["GET"], endpoint="my_attendance")
    @role_required(Role.EMPLOYEE)
    def my_attendance():
        try:
            records = attendance.list_history(current_actor_id(), limit=query_limit())
            return jsonify(attendance_list(records))
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return server_error("attendance history", e)

    @app.route("/api/employee/today", methods=["GET"], endpoint="today")
    @role_required(Role.EMPLOYEE)
    def today():
        try:
            return jsonify(today_to_dict(attendance.today_status(current_actor_id())))
        except Exception as e:
            return server_error("today status", e)

    @app.route("/api/admin/attendance", methods=["GET"], endpoint="admin_attendance")
    @role_required(Role.ADMIN)
    def admin_attendance():
        try:
            records = attendance.list_all(limit=query_limit())
            return jsonify(attendance_list(records, employees.find))
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return server_error("attendance listing", e)
