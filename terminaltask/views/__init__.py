"""Textual widgets that render the application state."""

from terminaltask.views.edit_form import EditFormView
from terminaltask.views.styles import Styles, default_styles
from terminaltask.views.task_list import StatusBar, TaskListView

__all__ = ["EditFormView", "StatusBar", "Styles", "TaskListView", "default_styles"]
