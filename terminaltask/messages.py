"""
Events, messages and effects exchanged with the state machine.

Everything the fold consumes is an Event: raw input from the terminal,
an intent derived from it, or the result of a resolved effect. Everything
it produces besides a new state is at most one Effect.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Union

from terminaltask.task import Task


# =============================================================================
# Input events
# =============================================================================


@dataclass(frozen=True)
class KeyPressed:
    """A key press as reported by the terminal.

    ``key`` is the key name (``"n"``, ``"space"``, ``"ctrl+s"``, ...) and
    ``character`` the printable character it produced, if any.
    """

    key: str
    character: str | None = None


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


# =============================================================================
# Intents
# =============================================================================


@dataclass(frozen=True)
class Quit:
    pass


@dataclass(frozen=True)
class NewTask:
    pass


@dataclass(frozen=True)
class EditSelected:
    pass


@dataclass(frozen=True)
class ToggleDone:
    pass


@dataclass(frozen=True)
class Delete:
    pass


@dataclass(frozen=True)
class MoveUp:
    pass


@dataclass(frozen=True)
class MoveDown:
    pass


@dataclass(frozen=True)
class MoveTop:
    pass


@dataclass(frozen=True)
class MoveBottom:
    pass


@dataclass(frozen=True)
class StartFilter:
    pass


@dataclass(frozen=True)
class Cancel:
    pass


@dataclass(frozen=True)
class SaveTask:
    """Field values submitted from the edit form."""

    task_id: uuid.UUID
    title: str
    description: str
    due_date: datetime
    done: bool
    is_new: bool


# =============================================================================
# Effect results
# =============================================================================


@dataclass(frozen=True)
class Loaded:
    tasks: tuple[Task, ...]


@dataclass(frozen=True)
class LoadFailed:
    error: Exception
    store: str = ""


@dataclass(frozen=True)
class Saved:
    status_text: str


@dataclass(frozen=True)
class SaveFailed:
    error: Exception
    store: str = ""


@dataclass(frozen=True)
class DeleteFailed:
    """A delete-by-id failed; ``task`` goes back to ``index``."""

    error: Exception
    task: Task
    index: int
    store: str = ""


@dataclass(frozen=True)
class StatusExpired:
    token: int


Intent = Union[
    Quit,
    NewTask,
    EditSelected,
    ToggleDone,
    Delete,
    MoveUp,
    MoveDown,
    MoveTop,
    MoveBottom,
    StartFilter,
    Cancel,
    SaveTask,
]

Message = Union[Loaded, LoadFailed, Saved, SaveFailed, DeleteFailed, StatusExpired]

Event = Union[KeyPressed, Resize, Intent, Message]


# =============================================================================
# Effects
# =============================================================================


@dataclass(frozen=True)
class LoadEffect:
    pass


@dataclass(frozen=True)
class SaveEffect:
    """Persist the whole sequence; report ``status_text`` on success."""

    tasks: tuple[Task, ...]
    status_text: str


@dataclass(frozen=True)
class DeleteEffect(SaveEffect):
    """Delete ``task`` through the service by id.

    ``tasks`` is the sequence left in memory after the removal and ``index``
    the position the task is restored to if the delete fails.
    """

    task: Task
    index: int


@dataclass(frozen=True)
class ClearStatusEffect:
    token: int
    delay: float


@dataclass(frozen=True)
class QuitEffect:
    pass


Effect = Union[LoadEffect, SaveEffect, DeleteEffect, ClearStatusEffect, QuitEffect]
