"""
Productivity Dashboard — Task collection.

Owns every Task and derives the filtered, sorted task list shown for the
current query. Intents that name an unknown task are ignored rather than
raised, so a stale UI click never breaks the dashboard.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date

from pydantic import ValidationError

from src.core.clock import Clock, local_now
from src.core.inputs import TaskInput
from src.core.view_filter import TaskQuery, in_task_view, task_matches
from src.core.view_sorter import sort_tasks
from src.data.models import Priority, Task, TaskView

logger = logging.getLogger(__name__)

_PATCHABLE = {"title", "description", "due_date", "priority", "completed"}


@dataclass
class TaskCounts:
    """Badge counts per view tab. Search text does not affect them."""

    all: int = 0
    today: int = 0
    upcoming: int = 0
    completed: int = 0


class TaskCollection:
    """In-memory task store with derived views."""

    def __init__(self, clock: Clock = local_now) -> None:
        self._clock = clock
        self._tasks: list[Task] = []

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks))

    def today(self) -> date:
        return self._clock().date()

    def get(self, task_id: str) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------

    def create(
        self,
        title: str,
        description: str = "",
        due_date: date | str | None = None,
        priority: Priority | str = Priority.MEDIUM,
    ) -> Task | None:
        """Add a task. Returns None when the input is rejected."""
        try:
            data = TaskInput(
                title=title, description=description,
                due_date=due_date, priority=priority,
            )
        except ValidationError as exc:
            logger.warning("Task rejected: %s", exc.errors()[0]["msg"])
            return None

        task = Task(
            id=uuid.uuid4().hex,
            title=data.title,
            description=data.description,
            due_date=data.due_date,
            priority=data.priority,
            completed=False,
            created_at=self._clock(),
        )
        self._tasks.append(task)
        logger.info("Task created: %s '%s'", task.id, task.title)
        return task

    def update(self, task_id: str, **patch: object) -> bool:
        """Merge ``patch`` into a task.

        Unknown ids and invalid patches are ignored (returns False).
        ``created_at`` is never touched.
        """
        task = self.get(task_id)
        if task is None:
            logger.debug("Update ignored, unknown task %s", task_id)
            return False

        unknown = set(patch) - _PATCHABLE
        if unknown:
            raise TypeError(f"Unknown task fields: {sorted(unknown)}")

        merged = {
            "title": task.title,
            "description": task.description,
            "due_date": task.due_date,
            "priority": task.priority,
            "completed": task.completed,
            **patch,
        }
        try:
            data = TaskInput(**merged)
        except ValidationError as exc:
            logger.warning("Task %s update rejected: %s", task_id, exc.errors()[0]["msg"])
            return False

        task.title = data.title
        task.description = data.description
        task.due_date = data.due_date
        task.priority = data.priority
        task.completed = data.completed
        logger.info("Task updated: %s", task_id)
        return True

    def toggle_complete(self, task_id: str) -> bool:
        task = self.get(task_id)
        if task is None:
            logger.debug("Toggle ignored, unknown task %s", task_id)
            return False
        task.completed = not task.completed
        return True

    def delete(self, task_id: str) -> bool:
        """Remove a task permanently. Deleting twice is harmless."""
        before = len(self._tasks)
        self._tasks = [t for t in self._tasks if t.id != task_id]
        removed = len(self._tasks) < before
        if removed:
            logger.info("Task deleted: %s", task_id)
        return removed

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def view(self, query: TaskQuery, today: date | None = None) -> list[Task]:
        """Filter then sort the tasks for ``query``."""
        if today is None:
            today = self.today()
        visible = [t for t in self._tasks if task_matches(t, query, today)]
        return sort_tasks(visible, query.sort)

    def counts(self, today: date | None = None) -> TaskCounts:
        if today is None:
            today = self.today()

        def count(view: TaskView) -> int:
            return sum(1 for t in self._tasks if in_task_view(t, view, today))

        return TaskCounts(
            all=len(self._tasks),
            today=count(TaskView.TODAY),
            upcoming=count(TaskView.UPCOMING),
            completed=count(TaskView.COMPLETED),
        )
