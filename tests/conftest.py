# tests/conftest.py

from __future__ import annotations

import os
import time
from datetime import datetime, timedelta, timezone

import pytest

from taskboard.models_tasks import Task, TaskPriority, TaskStatus
from taskboard.view_tasks import TaskCollection

from .fakes import FakeTaskStore


@pytest.fixture()
def new_york():
    """Run the test with the process timezone set to America/New_York."""
    previous = os.environ.get("TZ")
    os.environ["TZ"] = "America/New_York"
    time.tzset()
    yield
    if previous is None:
        del os.environ["TZ"]
    else:
        os.environ["TZ"] = previous
    time.tzset()


@pytest.fixture()
def now() -> datetime:
    return datetime(2026, 3, 10, 12, 0).astimezone()


@pytest.fixture()
def tasks(now: datetime) -> list[Task]:
    """Three tasks in server order, one per status."""
    return [
        Task(
            id="a1",
            title="Write report",
            deadline=now + timedelta(days=1),
            status=TaskStatus.pending,
        ),
        Task(
            id="b2",
            title="Review PR",
            description="Backend changes",
            deadline=now - timedelta(days=2),
            status=TaskStatus.completed,
            priority=TaskPriority.high,
        ),
        Task(
            id="c3",
            title="Plan sprint",
            deadline=(now + timedelta(days=10)).astimezone(timezone.utc),
            status=TaskStatus.in_progress,
            priority=TaskPriority.urgent,
        ),
    ]


@pytest.fixture()
def store(tasks: list[Task]) -> FakeTaskStore:
    return FakeTaskStore(tasks)


@pytest.fixture()
def collection() -> TaskCollection:
    return TaskCollection()
