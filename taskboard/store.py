"""
Taskboard Store — In-Memory Task Collection
============================================
Owns the ordered sequence of tasks the HTTP layer reads and mutates.

Components:
    TaskFilter  — Optional title-substring / date-prefix query
    TaskStore   — The collection plus its create/read/update/delete operations
    SEED_TASKS  — Records every fresh store starts with

One store is created per application and handed to the request handlers,
so tests can build as many isolated stores as they need. Nothing is ever
written to disk.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Callable, Iterator, Optional

from taskboard.errors import TaskNotFound, TaskValidationError
from taskboard.models import Task, TaskUpdate, format_timestamp

logger = logging.getLogger(__name__)


SEED_TASKS: list[dict] = [
    {
        "id": "1",
        "title": "Fix UI glitches",
        "description": "Resolve layout shift issues on the dashboard when switching themes.",
        "category": "Bug",
        "status": "To Do",
        "priority": "Low",
        "createdAt": "2025-07-15T09:00:00Z",
    },
    {
        "id": "2",
        "title": "Add unit tests",
        "description": "Cover edge cases for the authentication module.",
        "category": "Feature",
        "status": "To Do",
        "priority": "High",
        "createdAt": "2025-07-16T10:30:00Z",
    },
    {
        "id": "4",
        "title": "Refactor auth middleware",
        "description": "Improve code readability and separate concerns for easier testing.",
        "category": "Refactor",
        "status": "Done",
        "priority": "Medium",
        "createdAt": "2025-07-12T08:20:00Z",
    },
    {
        "id": "5",
        "title": "Fix login redirect bug",
        "description": "Users are not redirected properly after logging in.",
        "category": "Bug",
        "status": "In Progress",
        "priority": "Medium",
        "createdAt": "2025-07-17T11:10:00Z",
    },
    {
        "id": "7",
        "title": "Document CLI usage",
        "description": "Write user-facing documentation for the new CLI tool.",
        "category": "Documentation",
        "status": "Done",
        "priority": "Medium",
        "createdAt": "2025-07-10T15:40:00Z",
    },
]


def _new_id() -> str:
    return uuid.uuid4().hex[:21]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ─────────────────────────────────────────────────────────────
#  Filter
# ─────────────────────────────────────────────────────────────

@dataclass
class TaskFilter:
    """Query for TaskStore.list(). Empty strings count as "no filter"."""

    title: Optional[str] = None   # Case-insensitive substring of the title
    date: Optional[str] = None    # Prefix of createdAt, e.g. "2025-07-1"

    def matches(self, task: Task) -> bool:
        if self.title and self.title.lower() not in task.title.lower():
            return False
        if self.date and not task.created_at.startswith(self.date):
            return False
        return True


# ─────────────────────────────────────────────────────────────
#  Store
# ─────────────────────────────────────────────────────────────

class TaskStore:
    """Ordered, in-memory collection of tasks.

    Tasks keep insertion order. Ids are unique within the live collection;
    `id_factory` is called again whenever it returns an id already in use.

    Args:
        seed: Start with SEED_TASKS (True) or empty (False).
        id_factory: Returns a candidate id for a new task.
        clock: Returns the current time used for createdAt.
    """

    def __init__(
        self,
        seed: bool = True,
        id_factory: Callable[[], str] = _new_id,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._tasks: list[Task] = []
        self._seed = seed
        self._id_factory = id_factory
        self._clock = clock
        self.reset()

    def reset(self):
        """Drop every task and restore the seed records (if seeding is on)."""
        self._tasks = [Task.from_dict(d) for d in SEED_TASKS] if self._seed else []

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks))

    def ids(self) -> list[str]:
        return [t.id for t in self._tasks]

    def _index_of(self, task_id: str) -> int:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        raise TaskNotFound()

    def _fresh_id(self) -> str:
        taken = set(self.ids())
        task_id = self._id_factory()
        while task_id in taken:
            task_id = self._id_factory()
        return task_id

    # ─── Queries ──────────────────────────────────────────

    def list(self, query: Optional[TaskFilter] = None) -> list[Task]:
        """Tasks matching `query`, in storage order. No query returns all."""
        if query is None:
            return list(self._tasks)
        return [t for t in self._tasks if query.matches(t)]

    def get(self, task_id: str) -> Task:
        """Return the task with `task_id` or raise TaskNotFound."""
        return self._tasks[self._index_of(task_id)]

    # ─── Mutations ────────────────────────────────────────

    def create(
        self,
        title: Optional[str],
        category: Optional[str],
        status: Optional[str],
        priority: Optional[str],
        description: Optional[str] = None,
    ) -> Task:
        """Append a new task with a fresh id and the current timestamp.

        Raises:
            TaskValidationError: title is missing or blank, or any of
                category/status/priority is missing.
        """
        if not title or not title.strip():
            raise TaskValidationError("Task title is required")
        if not category or not status or not priority:
            raise TaskValidationError("Category, status and priority are required")

        task = Task(
            id=self._fresh_id(),
            title=title.strip(),
            description=description or "",
            category=category,
            status=status,
            priority=priority,
            created_at=format_timestamp(self._clock()),
        )
        self._tasks.append(task)
        logger.info("Created task %s (%r)", task.id, task.title)
        return task

    def update(self, task_id: str, changes: TaskUpdate) -> Task:
        """Merge the supplied fields of `changes` into the task.

        Raises:
            TaskNotFound: no task has `task_id`.
            TaskValidationError: a supplied title is blank.
        """
        index = self._index_of(task_id)
        if changes.title is not None:
            if not changes.title.strip():
                raise TaskValidationError("Task title cannot be empty")
            changes = replace(changes, title=changes.title.strip())

        merged = changes.apply(self._tasks[index])
        self._tasks[index] = merged
        logger.info("Updated task %s (%s)", task_id,
                    "no fields" if changes.is_empty else ", ".join(sorted(changes.supplied)))
        return merged

    def delete(self, task_id: str) -> Task:
        """Remove and return the task, or raise TaskNotFound."""
        task = self._tasks.pop(self._index_of(task_id))
        logger.info("Deleted task %s", task_id)
        return task
