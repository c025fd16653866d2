# -*- coding: utf-8 -*-

"""
Task Management - Pydantic Models.

Data models for tasks as the remote store returns them, and for the
payloads the client submits back.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class TaskStatus(str, Enum):
    """Task status options."""
    pending = "pending"
    in_progress = "in-progress"
    completed = "completed"


class TaskPriority(str, Enum):
    """Task priority levels."""
    low = "low"
    medium = "medium"
    high = "high"
    urgent = "urgent"


class DeadlineUrgency(str, Enum):
    """Deadline proximity category, derived for display only."""
    overdue = "overdue"
    today = "today"
    soon = "soon"
    normal = "normal"


class FilterCriterion(str, Enum):
    """Task list filter selected in the view."""
    all = "all"
    pending = "pending"
    in_progress = "in-progress"
    completed = "completed"


class Task(BaseModel):
    """Complete task representation as returned by the store."""
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: str = Field(..., validation_alias=AliasChoices("id", "_id"))
    # Length limits are enforced on submission (TaskPayload), not on read
    title: str = Field(..., min_length=1)
    description: str = ""
    deadline: datetime
    status: TaskStatus = TaskStatus.pending
    priority: TaskPriority = TaskPriority.medium

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        if value is None:
            raise ValueError("id must not be null")
        return str(value)

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be blank")
        return value

    @field_validator("description", mode="before")
    @classmethod
    def _description_default(cls, value):
        return "" if value is None else value

    @field_validator("priority", mode="before")
    @classmethod
    def _priority_default(cls, value):
        return TaskPriority.medium if value is None else value

    @field_validator("deadline")
    @classmethod
    def _deadline_aware(cls, value: datetime) -> datetime:
        # Naive timestamps from the wire are UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class TaskPayload(BaseModel):
    """Normalized, validated body for create (POST) and full update (PUT)."""
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field("", max_length=1000)
    deadline: datetime
    status: TaskStatus = TaskStatus.pending
    priority: TaskPriority = TaskPriority.medium

    def to_wire(self) -> dict:
        """Serialize with the deadline as a UTC ISO string."""
        data = self.model_dump(mode="json")
        data["deadline"] = (
            self.deadline.astimezone(timezone.utc)
            .isoformat(timespec="milliseconds")
            .replace("+00:00", "Z")
        )
        return data


class TaskStatusUpdate(BaseModel):
    """Request body for a status-only update (PUT)."""
    status: TaskStatus


class TaskFormInput(BaseModel):
    """Raw form fields as typed by a user."""
    title: Optional[str] = None
    description: Optional[str] = None
    deadline: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None


class TaskListResponse(BaseModel):
    """Task list response."""
    model_config = ConfigDict(extra="ignore")

    tasks: List[Task]
