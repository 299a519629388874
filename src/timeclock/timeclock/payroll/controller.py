from __future__ import annotations

from datetime import timedelta
from typing import Optional

from flask import Flask, request

from ..auth.controller import admin_required
from ..common.datetime_utils import business_date, now_utc, parse_iso_date
from ..common.responses import error_response, ok, server_error
from ..common.validators import require_positive_int
from ..core.constants import DEFAULT_TABLE_DAYS
from ..core.exceptions import DomainError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    tz = app.config.get("BUSINESS_TIMEZONE")

    def _optional_date(name: str):
        value = request.args.get(name)
        return parse_iso_date(value) if value else None

    @app.route("/admin/entries", methods=["GET"], endpoint="admin_entries")
    @admin_required
    def admin_entries():
        try:
            today = business_date(now_utc(), tz)
            start = _optional_date("start") or today - timedelta(days=DEFAULT_TABLE_DAYS)
            end = _optional_date("end") or today
            employee_id_s = request.args.get("employee_id")
            employee_id: Optional[int] = require_positive_int(employee_id_s, "Employee") if employee_id_s else None

            rows = container.payroll_service.entries_table(start=start, end=end, employee_id=employee_id)
            return ok(start=start.isoformat(), end=end.isoformat(), rows=rows)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("System error while loading time entries")

    @app.route("/admin/payroll", methods=["GET"], endpoint="admin_payroll")
    @admin_required
    def admin_payroll():
        """Hours & pay calculator over a date range (end optional)."""
        try:
            start = _optional_date("start")
            if start is None:
                raise ValidationError("Please select a start date")
            summary = container.payroll_service.calculate(start=start, end=_optional_date("end"))
            return ok(**summary.to_dict(app.config["CURRENCY_SYMBOL"]))
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("System error while calculating payroll")

    @app.route("/admin/entries/<int:entry_id>/paid", methods=["POST"], endpoint="admin_mark_paid")
    @admin_required
    def admin_mark_paid(entry_id: int):
        try:
            amount = container.payroll_service.mark_paid(entry_id, now=now_utc())
            return ok("Payment recorded", paid_amount=str(amount))
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("System error while recording payment")

    @app.route("/admin/payments", methods=["POST"], endpoint="admin_record_payment")
    @admin_required
    def admin_record_payment():
        data = request.get_json(silent=True) or {}
        try:
            paid_date_s = data.get("paid_date")
            paid_date = parse_iso_date(paid_date_s) if paid_date_s else business_date(now_utc(), tz)
            entry_id = container.payroll_service.record_payment(
                data.get("employee_id"),
                amount=data.get("amount"),
                paid_date=paid_date,
            )
            return ok("Payment recorded", entry_id=entry_id)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("System error while recording payment")

    @app.route("/admin/timesheet.csv", methods=["GET"], endpoint="admin_timesheet_csv")
    @admin_required
    def admin_timesheet_csv():
        try:
            sheet = container.payroll_service.timesheet_csv(
                now=now_utc(),
                start=_optional_date("start"),
                end=_optional_date("end"),
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("System error while exporting the timesheet")

        return app.response_class(
            sheet.content,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={sheet.filename}"},
        )
