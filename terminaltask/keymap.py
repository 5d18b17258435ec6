"""Key bindings for the list view and the edit form."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from terminaltask.messages import (
    Cancel,
    Delete,
    EditSelected,
    Intent,
    MoveBottom,
    MoveDown,
    MoveTop,
    MoveUp,
    NewTask,
    Quit,
    StartFilter,
    ToggleDone,
)


@dataclass(frozen=True)
class KeyBinding:
    """Keys that trigger one intent, plus the text shown in the help line."""

    keys: tuple[str, ...]
    help_key: str
    help: str
    intent: Callable[[], Intent] | None = None

    def matches(self, key: str) -> bool:
        return key in self.keys


QUIT = KeyBinding(("ctrl+c",), "ctrl+c", "quit", Quit)

LIST_BINDINGS: tuple[KeyBinding, ...] = (
    KeyBinding(("n",), "n", "new item", NewTask),
    KeyBinding(("e",), "e", "edit item", EditSelected),
    KeyBinding(("space",), "space", "toggle done", ToggleDone),
    KeyBinding(("r",), "r", "remove item", Delete),
    KeyBinding(("up", "k"), "↑/k", "up", MoveUp),
    KeyBinding(("down", "j"), "↓/j", "down", MoveDown),
    KeyBinding(("home", "g"), "g", "top", MoveTop),
    KeyBinding(("end", "G"), "G", "bottom", MoveBottom),
    KeyBinding(("slash", "/"), "/", "filter", StartFilter),
)

NEXT_FIELD = KeyBinding(("enter", "tab"), "enter", "next field")
PREVIOUS_FIELD = KeyBinding(("shift+tab",), "shift+tab", "previous field")
CANCEL_EDIT = KeyBinding(("escape",), "esc", "exit edit mode", Cancel)
SAVE_TASK = KeyBinding(("ctrl+s",), "ctrl+s", "save task")

EDIT_BINDINGS: tuple[KeyBinding, ...] = (NEXT_FIELD, CANCEL_EDIT, SAVE_TASK)

APPLY_FILTER = KeyBinding(("enter",), "enter", "apply filter")
CLEAR_FILTER = KeyBinding(("escape",), "esc", "clear filter")

FILTER_BINDINGS: tuple[KeyBinding, ...] = (APPLY_FILTER, CLEAR_FILTER)


def is_quit(key: str) -> bool:
    return QUIT.matches(key)


def list_intent_for_key(key: str) -> Intent | None:
    """Map a key pressed in the list view to an intent, if it is bound."""
    for binding in LIST_BINDINGS:
        if binding.matches(key) and binding.intent is not None:
            return binding.intent()
    return None


def help_line(bindings: tuple[KeyBinding, ...]) -> str:
    parts = [f"{b.help_key} {b.help}" for b in (*bindings, QUIT)]
    return " • ".join(parts)
