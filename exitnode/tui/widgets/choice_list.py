"""
Paginated single-column list of choices.
"""

from typing import List, Optional, Tuple

from rich.console import Group, RenderableType
from rich.text import Text
from textual.reactive import reactive
from textual.widget import Widget

from exitnode.tui.renderers import ItemRenderer, ListItemRenderer
from exitnode.tui.state import Choice
from exitnode.tui.theme import DEFAULT_THEME, PickerTheme

# Title, blank line below it, blank line and pagination line at the bottom
CHROME_LINES = 4


def page_bounds(cursor: int, total: int, per_page: int) -> Tuple[int, int, int, int]:
    """
    Slice of the view that contains the cursor.

    Returns:
        (start, end, page, pages) with ``page`` counted from 1
    """
    per_page = max(1, per_page)
    pages = max(1, -(-total // per_page))
    page = min(cursor // per_page, pages - 1) if total else 0
    start = page * per_page
    return start, min(start + per_page, total), page + 1, pages


class ChoiceList(Widget, can_focus=True):
    """List view driven entirely by the picker state.

    The widget only draws; key handling lives on the screen so the state
    machine sees every cursor movement.
    """

    DEFAULT_CSS = """
    ChoiceList {
        height: 1fr;
        padding: 1 0;
    }
    """

    title = reactive("")

    def __init__(
        self,
        title: str = "",
        renderer: Optional[ItemRenderer] = None,
        theme: PickerTheme = DEFAULT_THEME,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.picker_theme = theme
        self.item_renderer = renderer or ListItemRenderer(theme)
        self.title = title
        self._choices: Tuple[Choice, ...] = ()
        self._cursor = 0

    @property
    def choices(self) -> Tuple[Choice, ...]:
        return self._choices

    @property
    def cursor(self) -> int:
        return self._cursor

    def show(self, choices: Tuple[Choice, ...], cursor: int) -> None:
        """Display ``choices`` with the cursor on ``cursor``."""
        if choices == self._choices and cursor == self._cursor:
            return
        self._choices = choices
        self._cursor = cursor
        self.refresh()

    def items_per_page(self) -> int:
        available = self.content_region.height - CHROME_LINES
        return max(1, available // self.item_renderer.rows_per_item)

    def render_lines(self, per_page: int) -> List[Text]:
        """Lines for the page containing the cursor."""
        lines = [Text("  " + self.title, style=self.picker_theme.title_style), Text("")]

        if not self._choices:
            lines.append(Text(" " * self.picker_theme.item_padding + "No items.", style=self.picker_theme.help_style))
            return lines

        start, end, page, pages = page_bounds(self._cursor, len(self._choices), per_page)
        for index in range(start, end):
            lines.append(self.item_renderer.render(self._choices[index], index, index == self._cursor))
            lines.extend(Text("") for _ in range(self.item_renderer.spacing))

        if pages > 1:
            lines.append(Text(""))
            lines.append(
                Text(" " * self.picker_theme.item_padding + f"{page}/{pages}", style=self.picker_theme.pagination_style)
            )
        return lines

    def render(self) -> RenderableType:
        return Group(*self.render_lines(self.items_per_page()))
