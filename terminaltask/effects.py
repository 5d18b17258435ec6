"""
Persistence effects.

Effects produced by the state machine are resolved here against a
TaskService. ``resolve`` is synchronous and never raises for storage
failures; they come back as failure messages. ``EffectRunner`` moves the
blocking calls off the event loop onto a single worker thread, so effects
finish in the order they were issued.
"""

from __future__ import annotations

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor

from terminaltask.messages import (
    DeleteEffect,
    DeleteFailed,
    Effect,
    LoadEffect,
    Loaded,
    LoadFailed,
    Message,
    Saved,
    SaveEffect,
    SaveFailed,
)
from terminaltask.providers import TaskService, TaskStoreError

logger = logging.getLogger(__name__)

# Effects resolved by the service; timers and quit are handled by the app.
PERSISTENCE_EFFECTS = (LoadEffect, SaveEffect)


def resolve(effect: Effect, service: TaskService) -> Message:
    """Run a persistence effect and return the resulting message."""
    if isinstance(effect, LoadEffect):
        try:
            tasks = service.load_tasks()
        except (TaskStoreError, OSError) as e:
            return LoadFailed(error=e, store=service.name())
        logger.info("Loaded %d task(s) from %s", len(tasks), service.name())
        return Loaded(tasks=tuple(tasks))

    # DeleteEffect is a SaveEffect, check it first.
    if isinstance(effect, DeleteEffect):
        try:
            service.delete_by_id(effect.task.id)
        except (TaskStoreError, OSError) as e:
            return DeleteFailed(error=e, task=effect.task, index=effect.index, store=service.name())
        return Saved(status_text=effect.status_text)

    if isinstance(effect, SaveEffect):
        try:
            service.save_tasks(effect.tasks)
        except (TaskStoreError, OSError) as e:
            return SaveFailed(error=e, store=service.name())
        return Saved(status_text=effect.status_text)

    raise TypeError(f"not a persistence effect: {effect!r}")


class EffectRunner:
    """Resolves persistence effects on one background thread."""

    def __init__(self, service: TaskService):
        self._service = service
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="terminaltask-effects")

    async def run(self, effect: Effect) -> Message:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, resolve, effect, self._service)

    def shutdown(self) -> None:
        """Wait for queued effects to finish and stop the worker."""
        self._executor.shutdown(wait=True)
