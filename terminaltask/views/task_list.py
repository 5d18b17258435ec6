"""List view: the task list with its filter line and status bar."""

from rich.text import Text
from textual.widgets import Static

from terminaltask.keymap import FILTER_BINDINGS, LIST_BINDINGS, help_line
from terminaltask.state import RootState, StatusKind
from terminaltask.task import Task
from terminaltask.views.styles import ItemStyles, Styles

LIST_TITLE = "Terminal Task"
DATE_FORMAT = "%Y-%m-%d"
ELLIPSIS = "…"


def truncate(text: str, width: int) -> str:
    """Cut ``text`` to ``width`` cells, ending in an ellipsis when cut."""
    if width <= 0 or len(text) <= width:
        return text
    if width == 1:
        return ELLIPSIS
    return text[: width - 1] + ELLIPSIS


def format_due(task: Task) -> str:
    if task.due_date is None:
        return "no due date"
    return task.due_date.strftime(DATE_FORMAT)


def _item_styles(state: RootState, index: int, styles: Styles) -> ItemStyles:
    if state.filtering and not state.filter_text:
        return styles.dimmed
    if index == state.selected_index and not state.filtering:
        return styles.selected
    return styles.normal


def _highlight_matches(line: Text, needle: str, style) -> None:
    if not needle:
        return
    start = line.plain.lower().find(needle.lower())
    if start >= 0:
        line.stylize(style, start, start + len(needle))


def render_task(task: Task, item: ItemStyles, border: str, width: int, needle: str, styles: Styles) -> Text:
    """Three lines per task: title, first description line, due date."""
    text_width = width - len(border) if width else 0

    title = Text(truncate(task.title, text_width), style=item.title)
    _highlight_matches(title, needle, styles.filter_match)
    description = task.description.split("\n", 1)[0]
    lines = [
        title,
        Text(truncate(description, text_width), style=item.description),
        Text(format_due(task), style=item.date),
    ]

    out = Text()
    for i, line in enumerate(lines):
        if task.done:
            line.stylize("strike")
        if i > 0:
            out.append("\n")
        out.append(border, style=item.title)
        out.append_text(line)
    return out


def render_task_list(state: RootState, styles: Styles) -> Text:
    out = Text()
    out.append(f" {LIST_TITLE} ", style=styles.list_title)
    out.append("\n\n")

    if state.filtering or state.filter_text:
        cursor = "█" if state.filtering else ""
        out.append(f"Filter: {state.filter_text}{cursor}\n\n")

    visible = state.visible_indices()
    if not visible:
        out.append("No items." if not state.tasks else "Nothing matched.", style=styles.help)
        return out

    needle = state.filter_text if not state.filtering else ""
    for n, index in enumerate(visible):
        if n > 0:
            out.append("\n\n")
        selected = index == state.selected_index and not state.filtering
        border = styles.selected_border if selected else styles.normal_border
        item = _item_styles(state, index, styles)
        out.append_text(render_task(state.tasks[index], item, border, state.width, needle, styles))
    return out


def render_status_bar(state: RootState, styles: Styles) -> Text:
    count = len(state.visible_indices())
    noun = "task" if count == 1 else "tasks"
    out = Text(f"{count} {noun}", style=styles.help)
    if state.filter_text and not state.filtering:
        out.append(f' • filter: "{state.filter_text}"', style=styles.help)
    if state.status is not None:
        style = styles.error if state.status.kind is StatusKind.ERROR else styles.success
        out.append("  ")
        out.append(state.status.text, style=style)
    return out


def render_list_help(state: RootState) -> str:
    return help_line(FILTER_BINDINGS if state.filtering else LIST_BINDINGS)


class TaskListView(Static):
    """Scrollable list of tasks."""

    DEFAULT_CSS = """
    TaskListView {
        height: auto;
        padding: 0;
    }
    """

    def __init__(self, styles: Styles, **kwargs) -> None:
        super().__init__(**kwargs)
        self._palette = styles

    def show_state(self, state: RootState) -> None:
        self.update(render_task_list(state, self._palette))


class StatusBar(Static):
    """Item count and the transient status message."""

    DEFAULT_CSS = """
    StatusBar {
        height: 1;
        margin-top: 1;
    }
    """

    def __init__(self, styles: Styles, **kwargs) -> None:
        super().__init__(**kwargs)
        self._palette = styles

    def show_state(self, state: RootState) -> None:
        self.update(render_status_bar(state, self._palette))
