from __future__ import annotations

from decimal import Decimal

import pytest

from src.timeclock.timeclock.container import wire_services
from src.timeclock.timeclock.employees.model import Employee
from src.timeclock.timeclock.main import create_app
from tests.fakes import InMemoryEmployees, InMemoryTimeEntries


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    employees = InMemoryEmployees([Employee(employee_id=1, name="Maria Santos", hourly_rate=Decimal("75.00"))])
    container = wire_services(
        employees_repo=employees,
        entries_repo=InMemoryTimeEntries(employees),
        admin_passkey="4321",
        business_timezone="Asia/Manila",
    )
    app = create_app(container=container)
    return app.test_client()


def _unlock(client):
    resp = client.post("/admin/unlock", json={"passkey": "4321"})
    assert resp.status_code == 200


def test_employee_picker(client):
    resp = client.get("/api/employees")
    assert resp.status_code == 200
    assert resp.get_json()["employees"] == [
        {"employee_id": 1, "name": "Maria Santos", "hourly_rate": "75.00", "position": None}
    ]


def test_clock_flow(client):
    resp = client.post("/api/clock/in", json={"employee_id": 1})
    assert resp.status_code == 200
    assert resp.get_json()["message"] == "Successfully clocked in!"

    again = client.post("/api/clock/in", json={"employee_id": 1})
    assert again.status_code == 400
    assert again.get_json()["success"] is False

    assert client.post("/api/clock/lunch-out", json={"employee_id": 1}).status_code == 200
    rows = client.get("/api/today").get_json()["rows"]
    assert [r["status"] for r in rows] == ["On lunch"]

    assert client.post("/api/clock/out", json={"employee_id": 1}).status_code == 200
    rows = client.get("/api/today").get_json()["rows"]
    assert rows[0]["status"] == "Finished"
    assert rows[0]["lunch_in"] != "-"


def test_clock_rejects_bad_input(client):
    assert client.post("/api/clock/teleport", json={"employee_id": 1}).status_code == 404
    assert client.post("/api/clock/in", json={}).status_code == 400
    assert client.post("/api/clock/in", json={"employee_id": 77}).status_code == 404
    assert client.post("/api/clock/out", json={"employee_id": 1}).status_code == 400


def test_admin_routes_need_passkey(client):
    assert client.get("/admin/payroll?start=2025-03-03").status_code == 403
    assert client.post("/admin/unlock", json={"passkey": "1111"}).status_code == 403
    assert client.post("/admin/unlock", json={"passkey": "12"}).status_code == 400

    _unlock(client)
    assert client.get("/admin/payroll?start=2025-03-03").status_code == 200

    client.post("/admin/lock")
    assert client.get("/admin/payroll?start=2025-03-03").status_code == 403


def test_payroll_needs_start_date(client):
    _unlock(client)
    resp = client.get("/admin/payroll")
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Please select a start date"
    assert client.get("/admin/payroll?start=2025-03-05&end=2025-03-01").status_code == 400


def test_manual_payment_and_timesheet(client):
    _unlock(client)
    resp = client.post("/admin/payments", json={"employee_id": 1, "amount": "500", "paid_date": "2025-03-03"})
    assert resp.status_code == 200

    payroll = client.get("/admin/payroll?start=2025-03-03").get_json()
    assert payroll["total_hours"] == "0.00"

    entries = client.get("/admin/entries?start=2025-03-01&end=2025-03-07").get_json()["rows"]
    assert entries[0]["paid_amount"] == "500.00"
    assert entries[0]["status"] == "Not started"

    sheet = client.get("/admin/timesheet.csv?start=2025-03-01&end=2025-03-07")
    assert sheet.status_code == 200
    assert sheet.mimetype == "text/csv"
    assert "timesheet-2025-03-01-to-2025-03-07.csv" in sheet.headers["Content-Disposition"]
    assert "Maria Santos" in sheet.data.decode("utf-8-sig")


def test_admin_manages_employees(client):
    _unlock(client)
    resp = client.post("/admin/employees", json={"name": "Jose Reyes", "hourly_rate": "68.5"})
    assert resp.status_code == 200
    employee_id = resp.get_json()["employee_id"]

    rate = client.patch(f"/admin/employees/{employee_id}/rate", json={"hourly_rate": "70"})
    assert rate.get_json()["hourly_rate"] == "70.00"

    assert client.post("/admin/employees", json={"name": "", "hourly_rate": "10"}).status_code == 400


def test_admin_invoice(client):
    _unlock(client)
    line = client.post("/admin/invoices/line", json={"employee_id": 1, "hours": "4"}).get_json()["item"]
    assert line["amount"] == "300.00"

    resp = client.post(
        "/admin/invoices",
        json={"client_name": "Acme", "items": [{"description": line["description"], "quantity": "4", "rate": "75"}]},
    )
    invoice = resp.get_json()["invoice"]
    assert invoice["invoice_number"].startswith("INV-")
    assert invoice["total"] == "300.00"


def test_admin_quick_entry(client):
    _unlock(client)
    resp = client.post(
        "/admin/entries",
        json={"employee_id": 1, "entry_date": "2025-03-03", "clock_in": "09:00", "clock_out": "17:00"},
    )
    assert resp.status_code == 200

    payroll = client.get("/admin/payroll?start=2025-03-03").get_json()
    assert payroll["total_hours"] == "8.00"
    assert payroll["total_pay_display"] == "₱600.00"

    again = client.post("/admin/entries", json={"employee_id": 1, "entry_date": "2025-03-03"})
    assert again.status_code == 400


def test_admin_edit_parses_paid_flag(client):
    _unlock(client)
    entry_id = client.post("/admin/entries", json={"employee_id": 1, "entry_date": "2025-03-03"}).get_json()[
        "entry_id"
    ]

    assert client.patch(f"/admin/entries/{entry_id}", json={"is_paid": "false"}).status_code == 200
    row = client.get("/admin/entries?start=2025-03-03&end=2025-03-03").get_json()["rows"][0]
    assert row["is_paid"] is False

    assert client.patch(f"/admin/entries/{entry_id}", json={"is_paid": True}).status_code == 200
    row = client.get("/admin/entries?start=2025-03-03&end=2025-03-03").get_json()["rows"][0]
    assert row["is_paid"] is True

    assert client.patch(f"/admin/entries/{entry_id}", json={"is_paid": "maybe"}).status_code == 400
