# -*- coding: utf-8 -*-

"""
Deadline urgency classification and display helpers.

Urgency is derived from the deadline and the current date on every call.
Nothing here caches across different values of "now".
"""

from datetime import date, datetime
from typing import Optional

from taskboard.models_tasks import DeadlineUrgency, TaskPriority, TaskStatus

SOON_DAYS = 3


def _local_day(value: datetime) -> date:
    # astimezone() on a naive datetime assumes local time
    return value.astimezone().date()


def classify(deadline: datetime, now: Optional[datetime] = None) -> DeadlineUrgency:
    """
    Map a deadline to an urgency category relative to `now`.

    Both timestamps are truncated to their local calendar day before
    differencing, so two times on the same day are always `today`.

    Args:
        deadline: Task deadline (aware or naive-local)
        now: Reference time, defaults to the current time

    Returns:
        overdue, today, soon (1-3 days out) or normal
    """
    if now is None:
        now = datetime.now().astimezone()
    diff_days = (_local_day(deadline) - _local_day(now)).days

    if diff_days < 0:
        return DeadlineUrgency.overdue
    if diff_days == 0:
        return DeadlineUrgency.today
    if diff_days <= SOON_DAYS:
        return DeadlineUrgency.soon
    return DeadlineUrgency.normal


def format_deadline(deadline: datetime) -> str:
    """Short local date, e.g. 'Oct 19, 2026'."""
    day = deadline.astimezone()
    return f"{day:%b} {day.day}, {day.year}"


def deadline_badge_class(urgency: DeadlineUrgency) -> str:
    return f"deadline-badge deadline-{urgency.value}"


def deadline_marker(urgency: DeadlineUrgency) -> str:
    if urgency == DeadlineUrgency.overdue:
        return " ⚠️"
    if urgency == DeadlineUrgency.today:
        return " 🔔"
    return ""


def status_badge_class(status: TaskStatus) -> str:
    return f"status-badge status-{status.value}"


def priority_badge_class(priority: TaskPriority) -> str:
    return f"priority-badge priority-{priority.value}"


_PRIORITY_MARKERS = {
    TaskPriority.urgent: "🔴",
    TaskPriority.high: "🟠",
    TaskPriority.medium: "🟡",
    TaskPriority.low: "🟢",
}


def priority_marker(priority: TaskPriority) -> str:
    return _PRIORITY_MARKERS[priority]
