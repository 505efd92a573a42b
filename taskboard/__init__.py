"""
Taskboard — In-Memory Task Management Server
=============================================
A small HTTP/JSON service for creating, listing, updating and deleting
task records held in memory.

Layout:
    models  — Task record, vocabularies, partial updates
    store   — TaskStore, the in-memory collection
    server  — FastAPI application and uvicorn launcher
    cli     — Command-line entry point
"""

__version__ = "0.1.0"

from taskboard.errors import TaskboardError, TaskValidationError, TaskNotFound
from taskboard.models import (
    Task, TaskUpdate, TaskCategory, TaskStatus, TaskPriority,
)
from taskboard.store import TaskStore, TaskFilter, SEED_TASKS

__all__ = [
    "TaskboardError", "TaskValidationError", "TaskNotFound",
    "Task", "TaskUpdate", "TaskCategory", "TaskStatus", "TaskPriority",
    "TaskStore", "TaskFilter", "SEED_TASKS",
]
