"""
TaskService backed by a TaskStore.

Every mutating operation holds one lock for its whole load-modify-save
cycle, so concurrent callers cannot interleave writes to the store.
"""

from __future__ import annotations

import logging
import threading
import uuid
from typing import Sequence

from terminaltask.providers import TaskStore, TaskStoreError
from terminaltask.task import Task

logger = logging.getLogger(__name__)


class FileTaskService:
    """TaskService implementation delegating persistence to a TaskStore."""

    def __init__(self, store: TaskStore):
        self._store = store
        self._lock = threading.RLock()

    def name(self) -> str:
        return self._store.name()

    def load_tasks(self) -> list[Task]:
        return self._store.load()

    def save_tasks(self, tasks: Sequence[Task]) -> None:
        with self._lock:
            self._store.save(list(tasks))

    def toggle_completed(self, task: Task) -> Task:
        """Flip ``done`` on the stored copy of ``task`` and return the new value."""
        toggled = task.with_done(not task.done)
        with self._lock:
            tasks = self._load("toggle")
            tasks = [toggled if t.id == task.id else t for t in tasks]
            self._save(tasks, "toggle")
        return toggled

    def delete_by_id(self, task_id: uuid.UUID) -> None:
        with self._lock:
            tasks = self._load("delete")
            remaining = [t for t in tasks if t.id != task_id]
            if len(remaining) == len(tasks):
                logger.debug("delete: no stored task with id %s", task_id)
            self._save(remaining, "delete")

    def upsert_task(self, task: Task) -> None:
        with self._lock:
            tasks = self._load("upsert")
            for i, existing in enumerate(tasks):
                if existing.id == task.id:
                    tasks[i] = task
                    break
            else:
                tasks.append(task)
            self._save(tasks, "upsert")

    def _load(self, op: str) -> list[Task]:
        try:
            return self._store.load()
        except TaskStoreError as e:
            raise TaskStoreError(f"{op}: load tasks: {e}") from e

    def _save(self, tasks: list[Task], op: str) -> None:
        try:
            self._store.save(tasks)
        except TaskStoreError as e:
            raise TaskStoreError(f"{op}: save tasks: {e}") from e
