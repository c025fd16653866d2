# -*- coding: utf-8 -*-

"""
Task Management - List view-model and status updates.

The task collection is owned by the screen that shows it: created when the
screen activates and closed when the user navigates away. All mutations
happen after the awaited store call resolves, so readers never observe a
partially-applied change. Responses are applied in arrival order
(last response wins); results arriving after close are discarded.
"""

import inspect
from datetime import datetime
from typing import Awaitable, Callable, Iterable, Iterator, List, Optional, Tuple, Union

from loguru import logger
from pydantic import BaseModel, ConfigDict

from taskboard.deadlines import (
    classify,
    deadline_badge_class,
    deadline_marker,
    format_deadline,
    priority_badge_class,
    priority_marker,
    status_badge_class,
)
from taskboard.errors import DeleteError, FetchError, StoreError, UpdateError
from taskboard.models_tasks import DeadlineUrgency, FilterCriterion, Task, TaskStatus, TaskStatusUpdate
from taskboard.store_tasks import RemoteTaskStore

DELETE_PROMPT = "Are you sure you want to delete this task?"

ConfirmCallback = Callable[[str], Union[bool, Awaitable[bool]]]


class TaskCollection:
    """
    In-memory task list in load order.

    Every mutation swaps in a new tuple, so an iteration or snapshot taken
    before an update keeps seeing the old state.
    """

    def __init__(self, tasks: Iterable[Task] = ()):
        self._tasks: Tuple[Task, ...] = tuple(tasks)
        self.closed = False

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def snapshot(self) -> Tuple[Task, ...]:
        return self._tasks

    def get(self, task_id: str) -> Optional[Task]:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def replace_all(self, tasks: Iterable[Task]) -> None:
        self._tasks = tuple(tasks)

    def replace(self, task: Task) -> bool:
        """Swap in `task` at the position of the task with the same id."""
        if self.get(task.id) is None:
            return False
        self._tasks = tuple(task if t.id == task.id else t for t in self._tasks)
        return True

    def discard(self, task_id: str) -> bool:
        """Drop the task with `task_id`. Returns True if it was present."""
        remaining = tuple(t for t in self._tasks if t.id != task_id)
        removed = len(remaining) != len(self._tasks)
        self._tasks = remaining
        return removed

    def close(self) -> None:
        """Mark the owning screen as gone; later results are ignored."""
        self.closed = True


class TaskRow(BaseModel):
    """Display state for one task, derived at render time."""
    model_config = ConfigDict(frozen=True)

    task: Task
    urgency: DeadlineUrgency
    deadline_text: str
    deadline_class: str
    status_class: str
    priority_class: str
    priority_marker: str


def build_row(task: Task, now: Optional[datetime] = None) -> TaskRow:
    urgency = classify(task.deadline, now)
    return TaskRow(
        task=task,
        urgency=urgency,
        deadline_text=format_deadline(task.deadline) + deadline_marker(urgency),
        deadline_class=deadline_badge_class(urgency),
        status_class=status_badge_class(task.status),
        priority_class=priority_badge_class(task.priority),
        priority_marker=priority_marker(task.priority),
    )


class TaskListViewModel:
    """Loads, filters and deletes tasks in a caller-owned collection."""

    def __init__(self, store: RemoteTaskStore, collection: TaskCollection):
        self._store = store
        self.collection = collection

    async def load(self) -> Tuple[Task, ...]:
        """
        Replace the collection with a full fetch from the store.

        On failure the previous collection is left as it was.

        Raises:
            FetchError: If the store call fails
        """
        try:
            tasks = await self._store.list()
        except StoreError as e:
            logger.error(f"Error fetching tasks: {e}")
            raise FetchError("Failed to load tasks. Please try again.", cause=e) from e

        if self.collection.closed:
            logger.debug(f"Discarding task list ({len(tasks)} tasks) for closed view")
            return tuple(tasks)
        self.collection.replace_all(tasks)
        logger.info(f"Loaded {len(tasks)} task(s)")
        return self.collection.snapshot()

    def filter(self, criterion: Union[FilterCriterion, str] = FilterCriterion.all) -> List[Task]:
        """Tasks matching `criterion`, in load order. Does not mutate."""
        criterion = FilterCriterion(criterion)
        if criterion == FilterCriterion.all:
            return list(self.collection)
        status = TaskStatus(criterion.value)
        return [task for task in self.collection if task.status == status]

    def rows(
        self,
        criterion: Union[FilterCriterion, str] = FilterCriterion.all,
        now: Optional[datetime] = None,
    ) -> List[TaskRow]:
        """Display rows for the filtered tasks; urgency is recomputed each call."""
        return [build_row(task, now) for task in self.filter(criterion)]

    @staticmethod
    def empty_message(criterion: Union[FilterCriterion, str] = FilterCriterion.all) -> str:
        criterion = FilterCriterion(criterion)
        if criterion == FilterCriterion.all:
            return "You don't have any tasks yet. Create your first task!"
        return f"No {criterion.value} tasks found."

    async def remove(self, task_id: str, confirm: ConfirmCallback) -> bool:
        """
        Delete a task after the user confirms.

        Returns:
            False if the user declined, True once the task is deleted

        Raises:
            DeleteError: If the store call fails; the collection is unchanged
        """
        answer = confirm(DELETE_PROMPT)
        if inspect.isawaitable(answer):
            answer = await answer
        if not answer:
            return False

        try:
            await self._store.delete(task_id)
        except StoreError as e:
            logger.error(f"Error deleting task {task_id}: {e}")
            raise DeleteError("Failed to delete task. Please try again.", cause=e) from e

        logger.info(f"Task deleted: {task_id}")
        if self.collection.closed:
            logger.debug(f"Delete of {task_id} resolved after view closed")
        else:
            self.collection.discard(task_id)
        return True


class StatusUpdateController:
    """Status transitions applied only after the store confirms them."""

    def __init__(self, store: RemoteTaskStore, collection: TaskCollection):
        self._store = store
        self.collection = collection

    async def set_status(self, task_id: str, new_status: Union[TaskStatus, str]) -> Task:
        """
        Change a task's status on the store, then show the server's task.

        The returned task replaces the local one in place, even if the
        server changed other fields or kept a different status.

        Raises:
            UpdateError: If the store call fails; the collection is unchanged
            ValueError: If `new_status` is not a known status
        """
        update = TaskStatusUpdate(status=TaskStatus(new_status))
        try:
            task = await self._store.update(task_id, update)
        except StoreError as e:
            logger.error(f"Error updating task {task_id}: {e}")
            raise UpdateError("Failed to update task status. Please try again.", cause=e) from e

        if self.collection.closed:
            logger.debug(f"Status update for {task_id} resolved after view closed")
        elif not self.collection.replace(task):
            logger.debug(f"Status update for {task_id} ignored, task no longer listed")
        else:
            logger.info(f"Task status updated: {task_id} -> {task.status.value}")
        return task
