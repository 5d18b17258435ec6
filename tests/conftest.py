from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from terminaltask.state import RootState
from terminaltask.task import Task

from fakes import task_with_id


@pytest.fixture()
def now() -> datetime:
    """Fixed, timezone-aware 'current time' for deterministic transitions."""
    return datetime(2025, 6, 15, 14, 30, tzinfo=timezone(timedelta(hours=2)))


@pytest.fixture()
def tasks() -> tuple[Task, ...]:
    return (
        task_with_id("A"),
        task_with_id("B"),
        task_with_id("C", done=True),
    )


@pytest.fixture()
def loaded_state(tasks: tuple[Task, ...]) -> RootState:
    """List view with three tasks loaded and the first one selected."""
    return RootState(tasks=tasks, loaded=True)
