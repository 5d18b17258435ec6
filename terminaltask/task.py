"""
Task entity.

A Task is an immutable snapshot of a single to-do item. Changes are made
by building a modified copy; the identifier never changes once assigned.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime


@dataclass(frozen=True)
class Task:
    """Immutable snapshot of one to-do item."""

    id: uuid.UUID = field(default_factory=uuid.uuid4)
    title: str = ""
    description: str = ""
    due_date: datetime | None = None
    done: bool = False

    def is_empty(self) -> bool:
        """True for a freshly created task nobody has filled in yet."""
        return (
            self.title == ""
            and self.description == ""
            and self.due_date is None
            and not self.done
        )

    def with_done(self, done: bool) -> Task:
        return replace(self, done=done)

    def with_id(self, task_id: uuid.UUID) -> Task:
        return replace(self, id=task_id)

    def filter_value(self) -> str:
        return self.title


def create() -> Task:
    """New empty task with a generated id and no due date."""
    return Task()


def create_with_fields(
    title: str,
    description: str,
    due_date: datetime | None,
    done: bool,
) -> Task:
    """New task with the given values and a generated id."""
    return Task(
        title=title,
        description=description,
        due_date=due_date,
        done=done,
    )
