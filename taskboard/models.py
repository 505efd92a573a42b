"""
Taskboard Models — Task Record and Partial Updates
===================================================
Plain data types shared by the store and the HTTP layer.

Components:
    TaskCategory / TaskStatus / TaskPriority — Vocabularies of a task
    Task        — One stored task record (wire format via to_dict)
    TaskUpdate  — Optional-field struct applied by PATCH

The vocabularies document the values clients are expected to send. They
are not enforced: any non-empty value is stored as given.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


# ─────────────────────────────────────────────────────────────
#  Vocabularies
# ─────────────────────────────────────────────────────────────

class TaskCategory(str, Enum):
    BUG = "Bug"
    FEATURE = "Feature"
    DOCUMENTATION = "Documentation"
    REFACTOR = "Refactor"
    TEST = "Test"


class TaskStatus(str, Enum):
    TODO = "To Do"
    IN_PROGRESS = "In Progress"
    DONE = "Done"


class TaskPriority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


def format_timestamp(moment: datetime) -> str:
    """Format a datetime as UTC ISO-8601 with milliseconds and a Z suffix.

    >>> format_timestamp(datetime(2025, 7, 15, 9, 0, tzinfo=timezone.utc))
    '2025-07-15T09:00:00.000Z'
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    """Parse a timestamp produced by format_timestamp (or the seed data)."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


# ─────────────────────────────────────────────────────────────
#  Task
# ─────────────────────────────────────────────────────────────

@dataclass
class Task:
    """A single task record.

    `id` and `created_at` are assigned by the store and never change.
    """

    id: str
    title: str
    category: str
    status: str
    priority: str
    created_at: str
    description: str = ""

    def to_dict(self) -> dict:
        """Serialize to the JSON shape used on the wire."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "status": self.status,
            "priority": self.priority,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Task:
        """Build a task from its wire shape."""
        return cls(
            id=data["id"],
            title=data["title"],
            description=data.get("description") or "",
            category=data["category"],
            status=data["status"],
            priority=data["priority"],
            created_at=data["createdAt"],
        )


# ─────────────────────────────────────────────────────────────
#  Partial Update
# ─────────────────────────────────────────────────────────────

@dataclass
class TaskUpdate:
    """Fields a PATCH may change. None means "not supplied"."""

    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None

    @property
    def supplied(self) -> dict[str, str]:
        """The fields that carry a value, by name."""
        return {f.name: getattr(self, f.name) for f in fields(self)
                if getattr(self, f.name) is not None}

    @property
    def is_empty(self) -> bool:
        return not self.supplied

    def apply(self, task: Task) -> Task:
        """Return a copy of `task` with the supplied fields overriding it."""
        return replace(task, **self.supplied)
