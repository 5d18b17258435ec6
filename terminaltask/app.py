"""
terminaltask TUI application.

Main entry point for the terminal user interface. The app owns the
current RootState; every key press, resize, timer and resolved effect is
folded into it by ``state.update`` one at a time, in arrival order.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.message import Message
from textual.widgets import Static

from terminaltask.effects import PERSISTENCE_EFFECTS, EffectRunner
from terminaltask.messages import (
    ClearStatusEffect,
    Effect,
    Event,
    KeyPressed,
    Quit,
    QuitEffect,
    Resize,
    StatusExpired,
)
from terminaltask.providers import TaskService
from terminaltask.service import FileTaskService
from terminaltask.state import RootState, ViewMode, initial_state, update
from terminaltask.store import FileTaskStore
from terminaltask.views import EditFormView, StatusBar, Styles, TaskListView, default_styles
from terminaltask.views.edit_form import render_edit_help
from terminaltask.views.task_list import render_list_help

logger = logging.getLogger(__name__)


class StateEvent(Message):
    """Carries an event into the fold through the app's message queue."""

    def __init__(self, event: Event) -> None:
        super().__init__()
        self.event = event


class TerminalTaskApp(App):
    """Main terminaltask application."""

    TITLE = "Terminal Task"
    # ctrl+p belongs to the edit form.
    ENABLE_COMMAND_PALETTE = False

    CSS = """
    Screen {
        padding: 1 2;
    }

    #body {
        height: 1fr;
        overflow-y: auto;
    }

    #help {
        height: auto;
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("ctrl+c", "quit_app", "Quit", show=False, priority=True),
    ]

    def __init__(
        self,
        service: TaskService,
        styles: Styles | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._runner = EffectRunner(service)
        self._palette = styles or default_styles()
        self._root_state, self._startup_effect = initial_state()
        self._views_ready = False

    @property
    def runner(self) -> EffectRunner:
        return self._runner

    @property
    def root_state(self) -> RootState:
        return self._root_state

    def compose(self) -> ComposeResult:
        with Vertical(id="body"):
            yield TaskListView(self._palette, id="list-view")
            yield EditFormView(self._palette, id="edit-view")
        yield StatusBar(self._palette, id="status")
        yield Static(id="help")

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self._views_ready = True
        self._render_state()
        self._run_effect(self._startup_effect)

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        self.fold_event(KeyPressed(event.key, event.character))

    def on_resize(self, event: events.Resize) -> None:
        self.fold_event(Resize(event.size.width, event.size.height))

    def on_state_event(self, message: StateEvent) -> None:
        self.fold_event(message.event)

    def action_quit_app(self) -> None:
        self.fold_event(Quit())

    def fold_event(self, event: Event) -> None:
        """Fold ``event`` into the state, redraw, and run the follow-up effect."""
        self._root_state, effect = update(self._root_state, event)
        self._render_state()
        if effect is not None:
            self._run_effect(effect)

    def _run_effect(self, effect: Effect) -> None:
        if isinstance(effect, QuitEffect):
            # Effects already issued run to completion.
            self._runner.shutdown()
            self.exit()
        elif isinstance(effect, ClearStatusEffect):
            expired = StatusExpired(effect.token)
            self.set_timer(effect.delay, lambda: self.post_message(StateEvent(expired)))
        elif isinstance(effect, PERSISTENCE_EFFECTS):
            self.run_worker(self._resolve(effect), group="persistence", exit_on_error=False)
        else:
            logger.warning("Unhandled effect %r", effect)

    async def _resolve(self, effect: Effect) -> None:
        message = await self._runner.run(effect)
        self.post_message(StateEvent(message))

    def _render_state(self) -> None:
        if not self._views_ready:
            return
        editing = self._root_state.view_mode is ViewMode.EDIT
        list_view = self.query_one(TaskListView)
        edit_view = self.query_one(EditFormView)
        list_view.display = not editing
        edit_view.display = editing
        list_view.show_state(self._root_state)
        edit_view.show_state(self._root_state)
        self.query_one(StatusBar).show_state(self._root_state)
        help_text = render_edit_help() if editing else render_list_help(self._root_state)
        self.query_one("#help", Static).update(Text(help_text))


def run(tasks_file: Path) -> None:
    """Run the TUI application against the task file at ``tasks_file``."""
    service = FileTaskService(FileTaskStore(tasks_file))
    logger.info("Starting terminaltask with %s (%s)", tasks_file, service.name())
    app = TerminalTaskApp(service=service)
    try:
        app.run()
    finally:
        app.runner.shutdown()
