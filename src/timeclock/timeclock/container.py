from __future__ import annotations

from dataclasses import dataclass

from .auth.service import PasskeyService
from .core.constants import DEFAULT_BUSINESS_TIMEZONE
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .invoices.service import InvoiceService
from .payroll.calculator.base import PayrollCalculator
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.service import PayrollService
from .time_entries.mysql_time_entry_repository import MySQLTimeEntryRepository
from .time_entries.repository import TimeEntryRepository
from .time_entries.service import TimeEntryService


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    entries_repo: TimeEntryRepository

    passkey_service: PasskeyService
    employee_service: EmployeeService
    time_entry_service: TimeEntryService
    payroll_service: PayrollService
    invoice_service: InvoiceService


def wire_services(
    *,
    employees_repo: EmployeeRepository,
    entries_repo: TimeEntryRepository,
    admin_passkey: str,
    business_timezone: str = DEFAULT_BUSINESS_TIMEZONE,
) -> Container:
    # Shared by every view.
    calculator: PayrollCalculator = StandardPayrollCalculator()

    return Container(
        employees_repo=employees_repo,
        entries_repo=entries_repo,
        passkey_service=PasskeyService(admin_passkey),
        employee_service=EmployeeService(employees_repo),
        time_entry_service=TimeEntryService(
            entries_repo,
            employees_repo,
            business_timezone=business_timezone,
            calculator=calculator,
        ),
        payroll_service=PayrollService(
            entries_repo,
            employees_repo,
            business_timezone=business_timezone,
            calculator=calculator,
        ),
        invoice_service=InvoiceService(employees_repo, entries_repo, calculator=calculator),
    )


def build_container(
    *,
    db_config: dict,
    admin_passkey: str,
    business_timezone: str = DEFAULT_BUSINESS_TIMEZONE,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return wire_services(
        employees_repo=MySQLEmployeeRepository(conn),
        entries_repo=MySQLTimeEntryRepository(conn),
        admin_passkey=admin_passkey,
        business_timezone=business_timezone,
    )
