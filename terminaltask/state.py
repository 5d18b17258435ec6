"""
Root application state and its transition function.

The whole interactive behaviour is one pure fold:

    update(state, event) -> (new_state, effect_or_None)

Events are key presses, resizes, intents and the results of effects. The
state is immutable; the task sequence is a tuple and every transition that
changes it builds a new one. Effects are descriptions of work (load, save,
delete, timers, quit) that the application runs and feeds back as messages.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum

from terminaltask.form import EditForm, validate_fields
from terminaltask.keymap import (
    APPLY_FILTER,
    CANCEL_EDIT,
    CLEAR_FILTER,
    SAVE_TASK,
    is_quit,
    list_intent_for_key,
)
from terminaltask.messages import (
    Cancel,
    ClearStatusEffect,
    Delete,
    DeleteEffect,
    DeleteFailed,
    EditSelected,
    Effect,
    Event,
    KeyPressed,
    LoadEffect,
    Loaded,
    LoadFailed,
    MoveBottom,
    MoveDown,
    MoveTop,
    MoveUp,
    NewTask,
    Quit,
    QuitEffect,
    Resize,
    Saved,
    SaveEffect,
    SaveFailed,
    SaveTask,
    StartFilter,
    StatusExpired,
    ToggleDone,
)
from terminaltask.task import Task, create

logger = logging.getLogger(__name__)

STATUS_SAVE_ERROR = "Error saving!"
STATUS_DELETE_ERROR = "Error deleting!"
STATUS_LOAD_ERROR = "Error loading tasks!"
STATUS_EDITED = 'Edited: "{}"'
STATUS_DELETED = 'Deleted: "{}"'
STATUS_COMPLETED = 'Completed: "{}"'
STATUS_CREATED = 'Created new task: "{}"'
STATUS_MERGED = "Loaded {} saved task(s)"

# Seconds a status message stays visible.
LIST_STATUS_LIFETIME = 1.0
FORM_STATUS_LIFETIME = 2.0

# Padding around the whole application (vertical, horizontal), per side.
FRAME_PADDING = (1, 2)


class ViewMode(Enum):
    LIST = "list"
    EDIT = "edit"


class StatusKind(Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Status:
    text: str
    kind: StatusKind = StatusKind.SUCCESS


@dataclass(frozen=True)
class RootState:
    """Complete application state snapshot."""

    view_mode: ViewMode = ViewMode.LIST
    tasks: tuple[Task, ...] = ()
    selected_index: int = 0
    edit_form: EditForm | None = None
    status: Status | None = None
    status_token: int = 0
    loaded: bool = False
    revision: int = 0
    filter_text: str = ""
    filtering: bool = False
    width: int = 0
    height: int = 0

    def visible_indices(self) -> list[int]:
        """Indices into ``tasks`` of the tasks matching the filter."""
        if not self.filter_text:
            return list(range(len(self.tasks)))
        needle = self.filter_text.lower()
        return [i for i, t in enumerate(self.tasks) if needle in t.filter_value().lower()]

    def has_selection(self) -> bool:
        return 0 <= self.selected_index < len(self.tasks) and self.selected_index in self.visible_indices()

    def selected_task(self) -> Task | None:
        if not self.has_selection():
            return None
        return self.tasks[self.selected_index]


def initial_state() -> tuple[RootState, Effect]:
    """Empty list view plus the effect that loads the stored tasks."""
    return RootState(), LoadEffect()


def update(
    state: RootState,
    event: Event,
    now: datetime | None = None,
) -> tuple[RootState, Effect | None]:
    """Fold one event into the state."""
    if now is None:
        now = datetime.now().astimezone()

    # Quit pre-empts everything else.
    if isinstance(event, Quit) or (isinstance(event, KeyPressed) and is_quit(event.key)):
        return state, QuitEffect()

    if isinstance(event, Resize):
        v, h = FRAME_PADDING
        return replace(
            state,
            width=max(0, event.width - 2 * h),
            height=max(0, event.height - 2 * v),
        ), None

    if isinstance(event, Loaded):
        return _loaded(state, event)
    if isinstance(event, LoadFailed):
        logger.error("Error loading tasks: %s (store=%s)", event.error, event.store)
        new_state, effect = _set_status(state, STATUS_LOAD_ERROR, StatusKind.ERROR, LIST_STATUS_LIFETIME)
        return replace(new_state, loaded=True), effect
    if isinstance(event, Saved):
        return _set_status(state, event.status_text, StatusKind.SUCCESS, LIST_STATUS_LIFETIME)
    if isinstance(event, SaveFailed):
        logger.error("Error saving tasks: %s (store=%s)", event.error, event.store)
        return _set_status(state, STATUS_SAVE_ERROR, StatusKind.ERROR, LIST_STATUS_LIFETIME)
    if isinstance(event, DeleteFailed):
        return _delete_failed(state, event)
    if isinstance(event, StatusExpired):
        if event.token != state.status_token:
            return state, None
        return replace(state, status=None), None

    if state.view_mode is ViewMode.LIST:
        return _update_list(state, event, now)
    return _update_edit(state, event, now)


# =============================================================================
# List view
# =============================================================================


def _update_list(state: RootState, event: Event, now: datetime) -> tuple[RootState, Effect | None]:
    if isinstance(event, KeyPressed):
        if state.filtering:
            return _update_filter(state, event), None
        if CLEAR_FILTER.matches(event.key) and state.filter_text:
            return _clamp_selection(replace(state, filter_text="")), None
        intent = list_intent_for_key(event.key)
        if intent is None:
            return state, None
        event = intent

    if isinstance(event, NewTask):
        form = EditForm.from_task(create(), now, is_new=True)
        return replace(state, view_mode=ViewMode.EDIT, edit_form=form), None

    if isinstance(event, EditSelected):
        task = state.selected_task()
        if task is None:
            return state, None
        form = EditForm.from_task(task, now, is_new=False)
        return replace(state, view_mode=ViewMode.EDIT, edit_form=form), None

    if isinstance(event, ToggleDone):
        return _toggle_done(state)
    if isinstance(event, Delete):
        return _delete_selected(state)
    if isinstance(event, (MoveUp, MoveDown, MoveTop, MoveBottom)):
        return _move_selection(state, event), None
    if isinstance(event, StartFilter):
        return replace(state, filtering=True), None

    return state, None


def _toggle_done(state: RootState) -> tuple[RootState, Effect | None]:
    task = state.selected_task()
    if task is None:
        return state, None

    index = state.selected_index
    toggled = task.with_done(not task.done)
    tasks = state.tasks[:index] + (toggled,) + state.tasks[index + 1:]

    template = STATUS_COMPLETED if toggled.done else STATUS_EDITED
    new_state = replace(state, tasks=tasks, revision=state.revision + 1)
    return new_state, SaveEffect(tasks=tasks, status_text=template.format(toggled.title))


def _delete_selected(state: RootState) -> tuple[RootState, Effect | None]:
    task = state.selected_task()
    if task is None:
        return state, None

    index = state.selected_index
    tasks = state.tasks[:index] + state.tasks[index + 1:]
    new_state = _clamp_selection(replace(state, tasks=tasks, revision=state.revision + 1))
    return new_state, DeleteEffect(
        tasks=tasks,
        status_text=STATUS_DELETED.format(task.title),
        task=task,
        index=index,
    )


def _delete_failed(state: RootState, event: DeleteFailed) -> tuple[RootState, Effect | None]:
    logger.error("Error deleting task %s: %s (store=%s)", event.task.id, event.error, event.store)
    tasks = state.tasks
    if all(t.id != event.task.id for t in tasks):
        index = min(event.index, len(tasks))
        tasks = tasks[:index] + (event.task,) + tasks[index:]
    new_state = replace(state, tasks=tasks)
    if new_state.view_mode is ViewMode.LIST:
        new_state = _clamp_selection(new_state)
    return _set_status(new_state, STATUS_DELETE_ERROR, StatusKind.ERROR, LIST_STATUS_LIFETIME)


def _move_selection(state: RootState, event: Event) -> RootState:
    visible = state.visible_indices()
    if not visible:
        return state
    pos = visible.index(state.selected_index) if state.selected_index in visible else 0

    if isinstance(event, MoveUp):
        pos = max(0, pos - 1)
    elif isinstance(event, MoveDown):
        pos = min(len(visible) - 1, pos + 1)
    elif isinstance(event, MoveTop):
        pos = 0
    else:
        pos = len(visible) - 1
    return replace(state, selected_index=visible[pos])


def _update_filter(state: RootState, event: KeyPressed) -> RootState:
    if CLEAR_FILTER.matches(event.key):
        return _clamp_selection(replace(state, filtering=False, filter_text=""))
    if APPLY_FILTER.matches(event.key):
        return _clamp_selection(replace(state, filtering=False))
    if event.key == "backspace":
        text = state.filter_text[:-1]
    elif event.character is not None and len(event.character) == 1 and event.character.isprintable():
        text = state.filter_text + event.character
    else:
        return state
    return _clamp_selection(replace(state, filter_text=text))


def _clamp_selection(state: RootState) -> RootState:
    """Keep ``selected_index`` on a visible task when there is one."""
    if not state.tasks:
        return replace(state, selected_index=0)
    visible = state.visible_indices()
    if state.selected_index in visible:
        return state
    if not visible:
        return replace(state, selected_index=min(max(state.selected_index, 0), len(state.tasks) - 1))
    after = [i for i in visible if i >= state.selected_index]
    return replace(state, selected_index=after[0] if after else visible[-1])


# =============================================================================
# Edit view
# =============================================================================


def _update_edit(state: RootState, event: Event, now: datetime) -> tuple[RootState, Effect | None]:
    form = state.edit_form
    if form is None:
        return replace(state, view_mode=ViewMode.LIST), None

    if isinstance(event, KeyPressed):
        if CANCEL_EDIT.matches(event.key):
            event = CANCEL_EDIT.intent()
        elif SAVE_TASK.matches(event.key):
            event = form.to_save_intent()
        else:
            return replace(state, edit_form=form.handle_key(event.key, event.character, now)), None

    if isinstance(event, Cancel):
        return _clamp_selection(replace(state, view_mode=ViewMode.LIST, edit_form=None)), None

    if isinstance(event, SaveTask):
        return _save_task(state, event, now)

    return state, None


def _save_task(state: RootState, intent: SaveTask, now: datetime) -> tuple[RootState, Effect | None]:
    error = validate_fields(intent.title, intent.description, intent.due_date, now)
    if error is not None:
        return _set_status(state, error, StatusKind.ERROR, FORM_STATUS_LIFETIME)

    task = Task(
        id=intent.task_id,
        title=intent.title,
        description=intent.description,
        due_date=intent.due_date,
        done=intent.done,
    )

    if not intent.is_new and state.tasks:
        index = _index_of(state.tasks, intent.task_id)
        if index is None:
            index = min(max(state.selected_index, 0), len(state.tasks) - 1)
        tasks = state.tasks[:index] + (task,) + state.tasks[index + 1:]
        status_text = STATUS_EDITED.format(task.title)
    else:
        task = task.with_id(uuid.uuid4())
        tasks = (task,) + state.tasks
        index = 0
        status_text = STATUS_CREATED.format(task.title)

    new_state = replace(
        state,
        view_mode=ViewMode.LIST,
        edit_form=None,
        tasks=tasks,
        selected_index=index,
        revision=state.revision + 1,
    )
    return _clamp_selection(new_state), SaveEffect(tasks=tasks, status_text=status_text)


def _index_of(tasks: tuple[Task, ...], task_id: uuid.UUID) -> int | None:
    for i, t in enumerate(tasks):
        if t.id == task_id:
            return i
    return None


# =============================================================================
# Effect results
# =============================================================================


def _loaded(state: RootState, event: Loaded) -> tuple[RootState, Effect | None]:
    if state.loaded:
        logger.debug("Ignoring repeated load of %d task(s)", len(event.tasks))
        return state, None

    if state.revision == 0:
        new_state = replace(state, tasks=tuple(event.tasks), loaded=True)
        if new_state.view_mode is ViewMode.LIST:
            new_state = _clamp_selection(new_state)
        return new_state, None

    # The user changed tasks before the stored ones arrived: keep those
    # changes and append the stored tasks we do not already have.
    present = {t.id for t in state.tasks}
    stored = tuple(t for t in event.tasks if t.id not in present)
    tasks = state.tasks + stored
    new_state = replace(state, tasks=tasks, loaded=True)
    if new_state.view_mode is ViewMode.LIST:
        new_state = _clamp_selection(new_state)
    logger.info("Merged %d stored task(s) into %d edited one(s)", len(stored), len(state.tasks))
    return new_state, SaveEffect(tasks=tasks, status_text=STATUS_MERGED.format(len(stored)))


def _set_status(
    state: RootState,
    text: str,
    kind: StatusKind,
    lifetime: float,
) -> tuple[RootState, Effect]:
    """Show a status message and arm the timer that clears it."""
    token = state.status_token + 1
    new_state = replace(state, status=Status(text, kind), status_token=token)
    return new_state, ClearStatusEffect(token=token, delay=lifetime)

