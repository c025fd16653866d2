# -*- coding: utf-8 -*-

"""
Task Management - Form validation and submission.

Turns raw form fields into a submittable TaskPayload, and converts stored
tasks back into form fields for edit mode.
"""

from datetime import datetime, timezone
from typing import Optional, Union

from loguru import logger
from pydantic import ValidationError

from taskboard.errors import (
    FetchError,
    InvalidDeadline,
    InvalidField,
    MissingDeadline,
    MissingTitle,
    StoreError,
    SubmitError,
)
from taskboard.models_tasks import Task, TaskFormInput, TaskPayload, TaskPriority, TaskStatus
from taskboard.store_tasks import RemoteTaskStore


def parse_deadline(value: str) -> datetime:
    """
    Parse a local-time form string into an absolute UTC timestamp.

    Strings without an offset are interpreted in the local timezone; a wall
    time repeated when clocks go back resolves to its first occurrence.

    Raises:
        ValueError: If the string is not a valid date/time
    """
    parsed = datetime.fromisoformat(value.strip())
    if parsed.tzinfo is None:
        parsed = parsed.astimezone()
    return parsed.astimezone(timezone.utc)


def to_form_string(deadline: datetime) -> str:
    """
    Render an absolute timestamp as a local datetime-local input value.

    Minutes are the default precision; seconds and microseconds are kept
    when present. If the local wall time alone would parse back to a
    different instant (the second pass through a repeated hour), the UTC
    offset is appended.
    """
    local = deadline.astimezone()
    if local.microsecond:
        timespec = "microseconds"
    elif local.second:
        timespec = "seconds"
    else:
        timespec = "minutes"

    text = local.replace(tzinfo=None).isoformat(timespec=timespec)
    if parse_deadline(text) != deadline:
        text = local.isoformat(timespec=timespec)
    return text


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def validate(raw: Union[TaskFormInput, dict]) -> TaskPayload:
    """
    Validate and normalize raw form input.

    Checks run in order and stop at the first failure: title, deadline
    presence, deadline parse.

    Raises:
        MissingTitle, MissingDeadline, InvalidDeadline: On the checks above
        InvalidField: If status, priority or a field length is out of range
    """
    if isinstance(raw, dict):
        raw = TaskFormInput(**raw)

    if _blank(raw.title):
        raise MissingTitle()
    if _blank(raw.deadline):
        raise MissingDeadline()
    try:
        deadline = parse_deadline(raw.deadline)
    except (ValueError, OverflowError, OSError):
        # year outside the platform's local-time range
        raise InvalidDeadline() from None

    status = _choice(TaskStatus, raw.status, TaskStatus.pending, "status")
    priority = _choice(TaskPriority, raw.priority, TaskPriority.medium, "priority")
    try:
        return TaskPayload(
            title=raw.title.strip(),
            description=raw.description or "",
            deadline=deadline,
            status=status,
            priority=priority,
        )
    except ValidationError as e:
        field = str(e.errors()[0]["loc"][0])
        raise InvalidField(field, f"{field.capitalize()} is too long") from None


def _choice(enum_cls, value: Optional[str], default, field: str):
    if _blank(value):
        return default
    try:
        return enum_cls(value.strip())
    except ValueError:
        raise InvalidField(field, f"Invalid {field}") from None


def task_to_form(task: Task) -> TaskFormInput:
    """Form fields prefilled from an existing task."""
    return TaskFormInput(
        title=task.title,
        description=task.description,
        deadline=to_form_string(task.deadline),
        status=task.status.value,
        priority=task.priority.value,
    )


class TaskFormController:
    """Create/edit form: prefill in edit mode, validate and submit."""

    def __init__(self, store: RemoteTaskStore, task_id: Optional[str] = None):
        self._store = store
        self.task_id = task_id

    @property
    def is_edit(self) -> bool:
        return self.task_id is not None

    async def prefill(self) -> TaskFormInput:
        """Load the edited task and return its form fields."""
        if not self.is_edit:
            return TaskFormInput(description="", status=TaskStatus.pending.value, priority=TaskPriority.medium.value)
        try:
            tasks = await self._store.list()
        except StoreError as e:
            logger.error(f"Error fetching task {self.task_id}: {e}")
            raise FetchError("Failed to load task. Please try again.", cause=e) from e

        for task in tasks:
            if task.id == self.task_id:
                return task_to_form(task)
        raise FetchError("Task not found")

    async def submit(self, raw: Union[TaskFormInput, dict]) -> Task:
        """
        Validate the form and send it to the store.

        Validation errors propagate unchanged so the form can stay open.
        Store failures are raised as SubmitError.
        """
        payload = validate(raw)
        action = "update" if self.is_edit else "create"
        try:
            if self.is_edit:
                task = await self._store.update(self.task_id, payload)
            else:
                task = await self._store.create(payload)
        except StoreError as e:
            logger.error(f"Failed to {action} task: {e}")
            message = e.detail or f"Failed to {action} task. Please try again."
            raise SubmitError(message, cause=e) from e

        logger.info(f"Task {action}d: {task.id} - {task.title}")
        return task
