"""
Edit form sub-state-machine.

The form owns the in-progress field values of one task while the user is
in edit mode: which field has focus, how raw keys change the focused field,
and the checks a task must pass before it can be saved. It never persists
anything; a successful submit yields a SaveTask intent for the root state.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timedelta

from terminaltask.keymap import NEXT_FIELD, PREVIOUS_FIELD
from terminaltask.messages import SaveTask
from terminaltask.task import Task

FOCUS_TITLE = 0
FOCUS_DESCRIPTION = 1
FOCUS_DUE_DATE = 2
FIELD_COUNT = 3

DEFAULT_WINDOW_TITLE = "Editing..."

STATUS_DATE_PAST = "Error: Date cannot be in the past"
STATUS_TITLE_EMPTY = "Error: Title cannot be empty"
STATUS_DESC_EMPTY = "Error: Description cannot be empty"

# Keys understood by the date field, in days.
_DATE_STEPS = {
    "left": -1,
    "right": 1,
    "up": -7,
    "down": 7,
}


def start_of_day(now: datetime) -> datetime:
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def validate_fields(
    title: str,
    description: str,
    due_date: datetime,
    now: datetime,
) -> str | None:
    """Return the first validation error, or None if the fields can be saved."""
    if due_date < start_of_day(now):
        return STATUS_DATE_PAST
    if title == "":
        return STATUS_TITLE_EMPTY
    if description == "":
        return STATUS_DESC_EMPTY
    return None


@dataclass(frozen=True)
class EditForm:
    """Editable copy of a task plus focus state."""

    task_id: uuid.UUID
    is_new: bool
    title_input: str
    description_input: str
    due_date_input: datetime
    done: bool = False
    focus_index: int = FOCUS_TITLE

    @classmethod
    def from_task(cls, task: Task, now: datetime, is_new: bool | None = None) -> EditForm:
        """Seed a form from ``task``; an unset due date defaults to ``now``."""
        if is_new is None:
            is_new = task.is_empty()
        return cls(
            task_id=task.id,
            is_new=is_new,
            title_input=task.title,
            description_input=task.description,
            due_date_input=task.due_date or now,
            done=task.done,
        )

    @property
    def window_title(self) -> str:
        return self.title_input or DEFAULT_WINDOW_TITLE

    def next_field(self) -> EditForm:
        return replace(self, focus_index=(self.focus_index + 1) % FIELD_COUNT)

    def previous_field(self) -> EditForm:
        return replace(self, focus_index=(self.focus_index - 1) % FIELD_COUNT)

    def is_focused(self, index: int) -> bool:
        return self.focus_index == index

    def handle_key(self, key: str, character: str | None, now: datetime) -> EditForm:
        """Apply a raw key to the focused field."""
        if NEXT_FIELD.matches(key):
            return self.next_field()
        if PREVIOUS_FIELD.matches(key):
            return self.previous_field()

        if self.focus_index == FOCUS_DUE_DATE:
            return self._handle_date_key(key, character, now)

        value = self._focused_text()
        if key == "backspace":
            value = value[:-1]
        elif character is not None and character.isprintable() and len(character) == 1:
            value += character
        else:
            return self
        return self._with_focused_text(value)

    def to_save_intent(self) -> SaveTask:
        return SaveTask(
            task_id=self.task_id,
            title=self.title_input,
            description=self.description_input,
            due_date=self.due_date_input,
            done=self.done,
            is_new=self.is_new,
        )

    def _handle_date_key(self, key: str, character: str | None, now: datetime) -> EditForm:
        if key in _DATE_STEPS:
            return replace(self, due_date_input=self.due_date_input + timedelta(days=_DATE_STEPS[key]))
        if character == "t":
            return replace(self, due_date_input=now)
        return self

    def _focused_text(self) -> str:
        if self.focus_index == FOCUS_TITLE:
            return self.title_input
        return self.description_input

    def _with_focused_text(self, value: str) -> EditForm:
        if self.focus_index == FOCUS_TITLE:
            return replace(self, title_input=value)
        return replace(self, description_input=value)
