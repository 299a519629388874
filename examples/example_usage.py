"""Example: use the service layer directly (no Flask).

Prints today's live board and this week's payroll totals.
"""

import importlib
from datetime import timedelta

from config import get_settings_module

from src.timeclock.timeclock.common.datetime_utils import business_date, now_utc
from src.timeclock.timeclock.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        db_config=settings.DB_CONFIG,
        admin_passkey=settings.ADMIN_PASSKEY,
        business_timezone=settings.BUSINESS_TIMEZONE,
    )
    now = now_utc()
    for row in container.time_entry_service.today_board(now=now):
        print(row["employee_name"], row["status"], row["hours"], row["pay"])

    today = business_date(now, settings.BUSINESS_TIMEZONE)
    summary = container.payroll_service.calculate(start=today - timedelta(days=6), end=today)
    print(summary.to_dict())


if __name__ == "__main__":
    main()
