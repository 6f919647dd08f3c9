"""
Styles used by the picker views.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class PickerTheme:
    """Rich style strings and spacing for the picker.

    Passed into the app so tests and callers can swap styles without
    touching module state.
    """

    title_style: str = "bold"
    item_style: str = ""
    selected_item_style: str = "color(170)"
    item_padding: int = 4
    selected_item_padding: int = 2
    selected_prefix: str = "> "
    pagination_style: str = "dim"
    help_style: str = "dim"
    quit_text_style: str = "bold"
    status_style: str = "green"
    error_style: str = "bold red"


DEFAULT_THEME = PickerTheme()
