"""
Exit node table widget.
"""

from typing import Optional, Tuple

from textual.widgets import DataTable

from exitnode.tui.renderers import TableRowRenderer
from exitnode.tui.state import Choice


class ExitNodeTable(DataTable):
    """Row-cursor table of exit nodes."""

    DEFAULT_CSS = """
    ExitNodeTable {
        height: 1fr;
        border: solid $primary-background;
    }

    ExitNodeTable:focus {
        border: solid $primary;
    }
    """

    def __init__(self, renderer: Optional[TableRowRenderer] = None, **kwargs):
        super().__init__(cursor_type="row", **kwargs)
        self.row_renderer = renderer or TableRowRenderer()
        self._shown: Tuple[Choice, ...] = ()
        self.add_columns(*self.row_renderer.COLUMNS)

    @property
    def choices(self) -> Tuple[Choice, ...]:
        return self._shown

    def show(self, choices: Tuple[Choice, ...], cursor: int) -> None:
        """Replace the rows when the view changed and place the cursor.

        The cursor already comes from the picker state, so moves made here
        do not post ``RowHighlighted``.
        """
        with self.prevent(DataTable.RowHighlighted):
            if choices != self._shown:
                self.clear()
                for choice in choices:
                    self.add_row(*self.row_renderer.cells(choice))
                self._shown = choices

            if self.row_count and self.cursor_row != cursor:
                self.move_cursor(row=cursor)
