"""
File-backed implementation of TaskStore.

Tasks are stored as a JSON array, one object per task:

    [
     {
      "ID": "1b4e28ba-2fa1-11d2-883f-0016d3cca427",
      "TitleStr": "Write report",
      "DescStr": "Quarterly numbers",
      "DueDate": "2025-03-01T09:00:00+01:00",
      "Done": false
     }
    ]

An unset due date is written as the zero time ``0001-01-01T00:00:00Z``.
Records without an ``ID`` (older files) are given a fresh identifier when
loaded.
"""

from __future__ import annotations

import json
import logging
import os
import re
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Sequence

from jsonschema import ValidationError, validate

from terminaltask.providers import TaskStoreError
from terminaltask.task import Task

logger = logging.getLogger(__name__)

DEFAULT_NAME = "File Store"
ZERO_TIME = "0001-01-01T00:00:00Z"

TASKS_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "array",
    "items": {
        "type": "object",
        "required": ["TitleStr", "DescStr", "DueDate", "Done"],
        "properties": {
            "ID": {"type": "string"},
            "TitleStr": {"type": "string"},
            "DescStr": {"type": "string"},
            "DueDate": {"type": "string"},
            "Done": {"type": "boolean"},
        },
    },
}

# Fractions are normalized to microseconds: nanoseconds are truncated and
# trimmed fractions (".5") are padded, which fromisoformat requires before 3.11.
_FRACTION_RE = re.compile(r"\.(\d+)")


def _microseconds(m: re.Match) -> str:
    return "." + m.group(1)[:6].ljust(6, "0")


def parse_due_date(s: str | None) -> datetime | None:
    """Parse an RFC3339 timestamp. The zero time means "unset"."""
    if not s:
        return None
    s = _FRACTION_RE.sub(_microseconds, s.replace("Z", "+00:00"))
    try:
        dt = datetime.fromisoformat(s)
    except ValueError as e:
        raise TaskStoreError(f"invalid due date {s!r}: {e}") from e
    if dt.year == 1:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def format_due_date(dt: datetime | None) -> str:
    """Format a due date as RFC3339."""
    if dt is None:
        return ZERO_TIME
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt.isoformat()


def task_to_record(task: Task) -> dict[str, Any]:
    """Convert Task to its persisted JSON object."""
    return {
        "ID": str(task.id),
        "TitleStr": task.title,
        "DescStr": task.description,
        "DueDate": format_due_date(task.due_date),
        "Done": task.done,
    }


def task_from_record(data: dict[str, Any]) -> Task:
    """Convert a persisted JSON object to Task."""
    raw_id = data.get("ID")
    if raw_id:
        try:
            task_id = uuid.UUID(raw_id)
        except ValueError as e:
            raise TaskStoreError(f"invalid task id {raw_id!r}") from e
    else:
        task_id = uuid.uuid4()

    return Task(
        id=task_id,
        title=data.get("TitleStr", ""),
        description=data.get("DescStr", ""),
        due_date=parse_due_date(data.get("DueDate")),
        done=data.get("Done", False),
    )


class FileTaskStore:
    """TaskStore implementation that reads and writes a JSON file."""

    def __init__(self, path: Path, name: str = DEFAULT_NAME):
        self._path = Path(path)
        self._name = name
        self._write_lock = threading.Lock()

    def name(self) -> str:
        return self._name

    def load(self) -> list[Task]:
        """Load tasks from disk. A missing file is an empty task list."""
        if not self._path.exists():
            return []

        try:
            text = self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise TaskStoreError(f"read {self._path}: {e}") from e

        if not text.strip():
            return []

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise TaskStoreError(f"decode {self._path}: {e}") from e

        try:
            validate(instance=data, schema=TASKS_SCHEMA)
        except ValidationError as e:
            path = " -> ".join(str(p) for p in e.absolute_path) if e.absolute_path else "root"
            raise TaskStoreError(f"Validation error at '{path}': {e.message}") from e

        tasks: list[Task] = []
        seen: set[uuid.UUID] = set()
        for record in data:
            task = task_from_record(record)
            if task.id in seen:
                logger.warning("Duplicate task id %s in %s, assigning a new one", task.id, self._path)
                task = task.with_id(uuid.uuid4())
            seen.add(task.id)
            tasks.append(task)
        return tasks

    def save(self, tasks: Sequence[Task]) -> None:
        """Write tasks to a temporary file and rename it over the target."""
        payload = json.dumps([task_to_record(t) for t in tasks], indent=1)
        tmp = self._path.with_name(self._path.name + ".tmp")

        with self._write_lock:
            try:
                self._path.parent.mkdir(parents=True, exist_ok=True)
                tmp.write_text(payload, encoding="utf-8")
                os.replace(tmp, self._path)
            except OSError as e:
                raise TaskStoreError(f"write {self._path}: {e}") from e

        logger.debug("Saved %d task(s) to %s", len(tasks), self._path)
