"""
Persistence providers for the TUI.

Protocols define the interface; implementations can be swapped
for testing or alternative storage backends.
"""

import uuid
from typing import Protocol, Sequence

from terminaltask.task import Task


class TaskStoreError(Exception):
    """Raised when a task store cannot read or write its backing data."""


class TaskStore(Protocol):
    """Protocol for durable task storage."""

    def load(self) -> list[Task]:
        """Load all tasks in their persisted order."""
        ...

    def save(self, tasks: Sequence[Task]) -> None:
        """Persist tasks, replacing whatever was stored before."""
        ...

    def name(self) -> str:
        """Human readable name used in diagnostics."""
        ...


class TaskService(Protocol):
    """Protocol for task operations used by the application."""

    def load_tasks(self) -> list[Task]:
        """Load all tasks."""
        ...

    def save_tasks(self, tasks: Sequence[Task]) -> None:
        """Save the given tasks, overwriting existing ones."""
        ...

    def toggle_completed(self, task: Task) -> Task:
        """Flip the done flag of a stored task and return the new value."""
        ...

    def delete_by_id(self, task_id: uuid.UUID) -> None:
        """Remove the stored task with the given id."""
        ...

    def upsert_task(self, task: Task) -> None:
        """Replace the stored task with the same id, or append it."""
        ...

    def name(self) -> str:
        """Name of the backing store, for logging."""
        ...
