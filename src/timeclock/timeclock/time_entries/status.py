from __future__ import annotations

from ..core.enums import WorkStatus
from .model import TimeEntry

STATUS_LABELS = {
    WorkStatus.NOT_STARTED: "Not started",
    WorkStatus.WORKING: "Working",
    WorkStatus.ON_LUNCH: "On lunch",
    WorkStatus.FINISHED: "Finished",
}

STATUS_BADGES = {
    WorkStatus.WORKING: "info",
    WorkStatus.ON_LUNCH: "warning",
    WorkStatus.FINISHED: "secondary",
    WorkStatus.NOT_STARTED: "destructive",
}


def work_status(entry: TimeEntry) -> WorkStatus:
    """Derive the badge state from the punches; FINISHED is terminal."""
    if entry.clock_in is None:
        return WorkStatus.NOT_STARTED
    if entry.clock_out is not None:
        return WorkStatus.FINISHED
    if entry.lunch_out is not None and entry.lunch_in is None:
        return WorkStatus.ON_LUNCH
    return WorkStatus.WORKING


def status_label(status: WorkStatus) -> str:
    return STATUS_LABELS.get(status, status.value)


def status_badge(status: WorkStatus) -> str:
    return STATUS_BADGES.get(status, "destructive")


def paid_badge(is_paid: bool) -> str:
    return "success" if is_paid else "warning"


def is_live(status: WorkStatus) -> bool:
    """Hours still counting up (dashboard highlights these)."""
    return status in (WorkStatus.WORKING, WorkStatus.ON_LUNCH)
