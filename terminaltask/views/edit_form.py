"""Edit view for creating and changing a single task."""

import calendar

from rich.text import Text
from textual.widgets import Static

from terminaltask.form import FOCUS_DESCRIPTION, FOCUS_DUE_DATE, FOCUS_TITLE, EditForm
from terminaltask.keymap import EDIT_BINDINGS, help_line
from terminaltask.state import RootState, StatusKind
from terminaltask.views.styles import Styles

TITLE_PROMPT = "Title: "
TITLE_PLACEHOLDER = "Title"
DESC_PROMPT = "Description: "
DESC_PLACEHOLDER = "Description"
DATE_PROMPT = "Due: "
DATE_HINT = "←/→ day  ↑/↓ week  t today"
CURSOR = "█"


def _field(
    prompt: str,
    value: str,
    placeholder: str,
    focused: bool,
    styles: Styles,
) -> Text:
    line = Text()
    line.append("│ " if focused else "  ", style=styles.focused)
    line.append(prompt, style=styles.focused if focused else styles.blurred)
    if value:
        line.append(value, style=styles.blurred)
    else:
        line.append(placeholder, style=styles.help)
    if focused:
        line.append(CURSOR, style=styles.focused)
    return line


def render_calendar(form: EditForm, styles: Styles) -> Text:
    """Month grid for the due date with the selected day highlighted."""
    due = form.due_date_input
    focused = form.is_focused(FOCUS_DUE_DATE)
    style = styles.focused if focused else styles.blurred
    margin = "│ " if focused else "  "

    out = Text()
    out.append(margin, style=styles.focused)
    out.append(f"{calendar.month_name[due.month]} {due.year}".center(20), style=style)
    out.append("\n")
    out.append(margin, style=styles.focused)
    out.append("Mo Tu We Th Fr Sa Su", style=styles.help)
    for week in calendar.monthcalendar(due.year, due.month):
        out.append("\n")
        out.append(margin, style=styles.focused)
        for i, day in enumerate(week):
            if i > 0:
                out.append(" ")
            cell = f"{day:2d}" if day else "  "
            if day == due.day:
                out.append(cell, style=style + styles.filter_match if focused else style)
            else:
                out.append(cell, style=styles.blurred)
    return out


def render_edit_form(state: RootState, styles: Styles) -> Text:
    form = state.edit_form
    if form is None:
        return Text()

    out = Text()
    out.append(f" {form.window_title} ", style=styles.form_title)
    out.append("\n\n")
    out.append_text(
        _field(TITLE_PROMPT, form.title_input, TITLE_PLACEHOLDER, form.is_focused(FOCUS_TITLE), styles)
    )
    out.append("\n")
    out.append_text(
        _field(DESC_PROMPT, form.description_input, DESC_PLACEHOLDER, form.is_focused(FOCUS_DESCRIPTION), styles)
    )
    out.append("\n")

    date_focused = form.is_focused(FOCUS_DUE_DATE)
    date_line = Text()
    date_line.append("│ " if date_focused else "  ", style=styles.focused)
    date_line.append(DATE_PROMPT, style=styles.focused if date_focused else styles.blurred)
    date_line.append(form.due_date_input.strftime("%Y-%m-%d"), style=styles.blurred)
    if date_focused:
        date_line.append(f"   {DATE_HINT}", style=styles.help)
    out.append_text(date_line)
    out.append("\n\n")
    out.append_text(render_calendar(form, styles))

    if state.status is not None:
        style = styles.error if state.status.kind is StatusKind.ERROR else styles.success
        out.append("\n\n")
        out.append(state.status.text, style=style)
    return out


def render_edit_help() -> str:
    return help_line(EDIT_BINDINGS)


class EditFormView(Static):
    """Title, description and due date of the task being edited."""

    DEFAULT_CSS = """
    EditFormView {
        height: auto;
        padding: 0;
    }
    """

    def __init__(self, styles: Styles, **kwargs) -> None:
        super().__init__(**kwargs)
        self._palette = styles

    def show_state(self, state: RootState) -> None:
        self.update(render_edit_form(state, self._palette))
