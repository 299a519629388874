from __future__ import annotations

from flask import Flask, request

from ..auth.controller import admin_required
from ..common.datetime_utils import business_date, now_utc, parse_iso_date
from ..common.responses import error_response, ok, server_error
from ..core.exceptions import DomainError
from ..container import Container
from .service import new_invoice_number


def register(app: Flask, container: Container) -> None:
    tz = app.config.get("BUSINESS_TIMEZONE")

    def _date(value):
        return parse_iso_date(value) if value else None

    @app.route("/admin/invoices/line", methods=["POST"], endpoint="admin_invoice_line")
    @admin_required
    def admin_invoice_line():
        """Generate a line item from an employee's rate."""
        data = request.get_json(silent=True) or {}
        try:
            item = container.invoice_service.line_from_employee(
                data.get("employee_id"),
                hours=data.get("hours"),
                start=_date(data.get("start")),
                end=_date(data.get("end")),
            )
            return ok(
                item={
                    "description": item.description,
                    "quantity": str(item.quantity),
                    "rate": str(item.rate),
                    "amount": f"{item.amount:.2f}",
                }
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("System error while building the invoice line")

    @app.route("/admin/invoices", methods=["POST"], endpoint="admin_invoice_create")
    @admin_required
    def admin_invoice_create():
        data = request.get_json(silent=True) or {}
        try:
            now = now_utc()
            invoice = container.invoice_service.build_invoice(
                invoice_number=data.get("invoice_number") or new_invoice_number(now),
                client_name=str(data.get("client_name") or ""),
                issue_date=_date(data.get("issue_date")) or business_date(now, tz),
                due_date=_date(data.get("due_date")),
                items=data.get("items") or [],
                notes=data.get("notes"),
            )
            return ok(invoice=container.invoice_service.to_dict(invoice, app.config["CURRENCY_SYMBOL"]))
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("System error while building the invoice")
