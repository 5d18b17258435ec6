"""Styles used to render the task list and the edit form.

The render layer receives a Styles instance; the state machine never
looks at it.
"""

from dataclasses import dataclass

from rich.style import Style


@dataclass(frozen=True)
class ItemStyles:
    title: Style
    description: Style
    date: Style


@dataclass(frozen=True)
class Styles:
    list_title: Style
    normal: ItemStyles
    selected: ItemStyles
    dimmed: ItemStyles
    filter_match: Style
    success: Style
    error: Style
    form_title: Style
    focused: Style
    blurred: Style
    help: Style
    selected_border: str = "│ "
    normal_border: str = "  "


def default_styles() -> Styles:
    muted = Style(color="#777777")
    accent = Style(color="#AD58B4")
    return Styles(
        list_title=Style(color="#FFFDF5", bgcolor="#25A065", bold=True),
        normal=ItemStyles(
            title=Style(color="#dddddd"),
            description=muted,
            date=muted,
        ),
        selected=ItemStyles(
            title=accent,
            description=accent,
            date=accent,
        ),
        dimmed=ItemStyles(
            title=muted,
            description=muted,
            date=muted,
        ),
        filter_match=Style(underline=True),
        success=Style(color="#04B575"),
        error=Style(color="#FF5555"),
        form_title=Style(color="#ffffd7", bgcolor="#5f5fd7"),
        focused=accent,
        blurred=Style(color="#dddddd"),
        help=Style(color="#626262"),
    )
