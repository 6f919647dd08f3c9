"""
Item renderers for the picker views.

Each display shape has a renderer that knows how tall an entry is, how
much space goes between entries and how a single entry looks.
"""

from abc import ABC, abstractmethod
from typing import Tuple

from rich.text import Text

from exitnode.tui.state import Choice
from exitnode.tui.theme import DEFAULT_THEME, PickerTheme


class ItemRenderer(ABC):
    """Base class for rendering one entry of a view."""

    height: int = 1
    spacing: int = 0

    def __init__(self, theme: PickerTheme = DEFAULT_THEME):
        self.theme = theme

    @property
    def rows_per_item(self) -> int:
        """Screen lines taken by one entry including spacing."""
        return self.height + self.spacing

    @abstractmethod
    def render(self, choice: Choice, index: int, selected: bool) -> Text:
        """
        Render a single entry.

        Args:
            choice: Entry to render
            index: Position in the current view
            selected: Whether the cursor is on this entry
        """
        pass


class ListItemRenderer(ItemRenderer):
    """Numbered single-column list entry, ``> `` marks the cursor."""

    def render(self, choice: Choice, index: int, selected: bool) -> Text:
        label = f"{index + 1}. {choice.label}"
        if selected:
            return Text(
                " " * self.theme.selected_item_padding + self.theme.selected_prefix + label,
                style=self.theme.selected_item_style,
            )
        return Text(" " * self.theme.item_padding + label, style=self.theme.item_style)


class TableRowRenderer:
    """Multi-column exit node row.

    Feeds ``DataTable`` cells directly; the table draws its own cursor.
    """

    COLUMNS: Tuple[str, ...] = ("IP", "Hostname", "Country", "City")

    def cells(self, choice: Choice) -> Tuple[str, ...]:
        """Column values for ``choice``."""
        if choice.node is None:
            return (choice.label,) + ("",) * (len(self.COLUMNS) - 1)
        return choice.node.fields
