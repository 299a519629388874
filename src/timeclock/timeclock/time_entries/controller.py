from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.controller import admin_required
from ..common.datetime_utils import business_date, now_utc, parse_iso_date
from ..common.responses import error_response, ok, server_error
from ..common.validators import parse_bool, require_positive_int
from ..core.enums import ClockAction
from ..core.exceptions import DomainError
from ..container import Container

_ACTION_MESSAGES = {
    ClockAction.CLOCK_IN: "Successfully clocked in!",
    ClockAction.LUNCH_OUT: "Enjoy your lunch!",
    ClockAction.LUNCH_IN: "Welcome back from lunch!",
    ClockAction.CLOCK_OUT: "Successfully clocked out!",
}


def register(app: Flask, container: Container) -> None:
    tz = app.config.get("BUSINESS_TIMEZONE")

    @app.route("/api/clock/<action>", methods=["POST"], endpoint="api_clock")
    def api_clock(action: str):
        """Employee punch: in, lunch-out, lunch-in, out."""
        try:
            clock_action = ClockAction(action)
        except ValueError:
            return jsonify({"success": False, "message": f"Unknown action: {action}"}), 404

        data = request.get_json(silent=True) or {}
        try:
            employee_id = require_positive_int(data.get("employee_id"), "Employee")
            container.time_entry_service.perform(clock_action, employee_id, now=now_utc())
            return ok(_ACTION_MESSAGES[clock_action])
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("System error while recording the punch")

    @app.route("/api/today", methods=["GET"], endpoint="api_today")
    def api_today():
        try:
            rows = container.time_entry_service.today_board(now=now_utc())
            return ok(rows=rows)
        except Exception:
            return server_error("System error while loading today's entries")

    @app.route("/admin/entries", methods=["POST"], endpoint="admin_entry_create")
    @admin_required
    def admin_entry_create():
        """Quick clock-in: add a finished shift for any date."""
        data = request.get_json(silent=True) or {}
        try:
            entry_date_s = data.get("entry_date")
            entry_date = parse_iso_date(entry_date_s) if entry_date_s else business_date(now_utc(), tz)
            shift = {k: data[k] for k in ("clock_in", "clock_out") if data.get(k)}
            entry_id = container.time_entry_service.admin_create(data.get("employee_id"), entry_date=entry_date, **shift)
            return ok("Shift added", entry_id=entry_id)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("System error while adding the shift")

    @app.route("/admin/entries/<int:entry_id>", methods=["PATCH"], endpoint="admin_entry_update")
    @admin_required
    def admin_entry_update(entry_id: int):
        data = request.get_json(silent=True) or {}
        fields = {
            k: data[k]
            for k in ("clock_in", "clock_out", "lunch_out", "lunch_in", "paid_amount")
            if k in data
        }
        try:
            if "is_paid" in data:
                fields["is_paid"] = parse_bool(data["is_paid"], "Paid")
            container.time_entry_service.admin_update(entry_id, now=now_utc(), **fields)
            return ok("Time entry updated")
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("System error while updating the entry")

    @app.route("/admin/entries/bulk-clock-out", methods=["POST"], endpoint="admin_bulk_clock_out")
    @admin_required
    def admin_bulk_clock_out():
        data = request.get_json(silent=True) or {}
        try:
            closed = container.time_entry_service.bulk_clock_out(data.get("entry_ids") or [], now=now_utc())
            return ok(f"Successfully clocked out {closed} employee(s)!", closed=closed)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("System error during bulk clock-out")
