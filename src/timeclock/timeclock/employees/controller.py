from __future__ import annotations

from flask import Flask, request

from ..auth.controller import admin_required
from ..common.responses import error_response, ok, server_error
from ..core.exceptions import DomainError
from ..container import Container
from .model import Employee


def _to_dict(e: Employee) -> dict:
    return {
        "employee_id": e.employee_id,
        "name": e.name,
        "hourly_rate": f"{e.hourly_rate:.2f}",
        "position": e.position,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees", methods=["GET"], endpoint="api_employees")
    def api_employees():
        """Clock-in picker."""
        try:
            return ok(employees=[_to_dict(e) for e in container.employee_service.list_all()])
        except Exception:
            return server_error("System error while loading employees")

    @app.route("/admin/employees", methods=["POST"], endpoint="admin_employee_create")
    @admin_required
    def admin_employee_create():
        data = request.get_json(silent=True) or {}
        try:
            employee_id = container.employee_service.add_employee(
                name=str(data.get("name") or ""),
                hourly_rate=data.get("hourly_rate"),
                position=data.get("position"),
            )
            return ok("Employee added", employee_id=employee_id)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("System error while adding employee")

    @app.route("/admin/employees/<int:employee_id>/rate", methods=["PATCH"], endpoint="admin_employee_rate")
    @admin_required
    def admin_employee_rate(employee_id: int):
        data = request.get_json(silent=True) or {}
        try:
            rate = container.employee_service.change_rate(employee_id=employee_id, hourly_rate=data.get("hourly_rate"))
            return ok("Hourly rate updated", hourly_rate=f"{rate:.2f}")
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("System error while updating rate")
