"""
Exit node picker screen.
"""

from typing import Optional, Sequence

from rich.text import Text
from textual import events, on
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Footer, Input, Static

from exitnode.core.config import Settings
from exitnode.core.exceptions import ApplyFailedError
from exitnode.core.models import DisplayShape, ExitNode, ViewState
from exitnode.services.exit_node_setter import ExitNodeSetter
from exitnode.services.exit_node_source import ExitNodeSource
from exitnode.tui.renderers import ListItemRenderer, TableRowRenderer
from exitnode.tui.screens.base import BaseScreen
from exitnode.tui.state import (
    ApplyCompleted,
    ApplyExitNode,
    Back,
    ClearExitNode,
    ClearSelection,
    Confirm,
    Effect,
    Event,
    FilterChanged,
    HighlightRow,
    MoveCursor,
    PickerState,
    Quit,
    QuitApp,
    Resize,
    ToggleFocus,
    handle_event,
)
from exitnode.tui.theme import DEFAULT_THEME, PickerTheme
from exitnode.tui.widgets.choice_list import ChoiceList
from exitnode.tui.widgets.exit_node_table import ExitNodeTable
from exitnode.utils.logger import get_logger

logger = get_logger(__name__)

ERROR_PREFIX = "Error:"

LIST_TITLES = {
    DisplayShape.FLAT: "Select an Exit Node",
    DisplayShape.DRILL_DOWN: "Select a Country",
}


class PickerScreen(BaseScreen):
    """Lets the user pick an exit node and applies it."""

    DEFAULT_CSS = """
    PickerScreen {
        background: $surface;
    }

    PickerScreen .screen-header {
        height: auto;
        margin: 1 1 0 1;
    }

    PickerScreen .screen-title {
        text-style: bold;
        color: $primary;
        width: auto;
        margin-right: 2;
    }

    PickerScreen .screen-subtitle {
        color: $text-muted;
        width: auto;
    }

    PickerScreen #filter-input {
        margin: 1 1 0 1;
    }

    PickerScreen #exit-node-table {
        margin: 0 1;
    }

    PickerScreen #status-line {
        height: 1;
        margin: 0 2;
    }

    PickerScreen #farewell {
        margin: 1 0 2 4;
        display: none;
    }
    """

    AUTO_FOCUS = "#exit-node-table, #choice-list"

    BINDINGS = [
        Binding("q", "quit_picker", "Quit"),
        Binding("enter", "confirm", "Select"),
        Binding("up,k", "move(-1)", "Up", show=False),
        Binding("down,j", "move(1)", "Down", show=False),
        Binding("pageup", "move(-10)", "Page up", show=False),
        Binding("pagedown", "move(10)", "Page down", show=False),
        Binding("tab", "toggle_focus", "Filter", priority=True),
        Binding("shift+tab", "toggle_focus", "Filter", show=False, priority=True),
        Binding("escape", "escape", "Back", priority=True),
        Binding("backspace", "clear_selection", "Clear"),
    ]

    def __init__(
        self,
        rows: Sequence[ExitNode],
        shape: DisplayShape = DisplayShape.TABLE,
        current: str = "",
        source: Optional[ExitNodeSource] = None,
        setter: Optional[ExitNodeSetter] = None,
        settings: Optional[Settings] = None,
        theme: PickerTheme = DEFAULT_THEME,
    ):
        super().__init__(source=source, setter=setter, settings=settings)
        self.picker_theme = theme
        self.state = PickerState.initial(
            shape,
            rows,
            current=current,
            quit_delay=self.config.quit_delay,
        )

    @property
    def shape(self) -> DisplayShape:
        return self.state.shape

    def compose(self) -> ComposeResult:
        """Create picker layout for the configured shape."""
        with Vertical(id="picker-body"):
            if self.shape is DisplayShape.TABLE:
                yield from self.compose_header("Exit Nodes", "tab: filter  backspace: clear exit node")
                yield Input(placeholder="Filter by country or city...", id="filter-input")
                yield ExitNodeTable(TableRowRenderer(), id="exit-node-table")
            else:
                yield ChoiceList(
                    LIST_TITLES[self.shape],
                    renderer=ListItemRenderer(self.picker_theme),
                    theme=self.picker_theme,
                    id="choice-list",
                )
            yield Static("", id="status-line")
        yield Static("", id="farewell")
        yield Footer()

    def on_mount(self) -> None:
        self.render_state()

    # Event plumbing

    def send_event(self, event: Event) -> None:
        """Run ``event`` through the state machine and perform its effects."""
        previous = self.state.view_state
        self.state, effects = handle_event(self.state, event)
        if self.state.view_state is not previous:
            logger.debug(f"{previous.value} -> {self.state.view_state.value} on {type(event).__name__}")
        self.render_state()
        for effect in effects:
            self.perform(effect)

    def perform(self, effect: Effect) -> None:
        if isinstance(effect, ApplyExitNode):
            self._apply(effect.target)
        elif isinstance(effect, ClearExitNode):
            self._apply("")
        elif isinstance(effect, QuitApp):
            if effect.delay > 0:
                self.set_timer(effect.delay, self._finish)
            else:
                self._finish()

    def _apply(self, target: str) -> None:
        try:
            result = self.setter.apply(target)
        except ApplyFailedError as e:
            self.show_error(e.message)
            self.send_event(ApplyCompleted(target=target, success=False, message=e.message))
            return

        current = ""
        if self.shape is DisplayShape.TABLE:
            # The table stays open after applying.
            self.show_success(result.message)
            current = self.source.current_selection()
        self.send_event(
            ApplyCompleted(target=target, success=True, message=result.message, current=current)
        )

    def _finish(self) -> None:
        self.app.exit(self.state.applied)

    # Rendering

    def visible_view(self):
        if self.shape is DisplayShape.TABLE:
            return self.query_one("#exit-node-table", ExitNodeTable)
        return self.query_one("#choice-list", ChoiceList)

    def render_state(self) -> None:
        """Bring the widgets in line with ``self.state``."""
        state = self.state

        if state.view_state.is_terminal:
            self.query_one("#picker-body").display = False
            farewell = self.query_one("#farewell", Static)
            farewell.update(Text(state.farewell, style=self.picker_theme.quit_text_style))
            farewell.display = True
            return

        view = self.visible_view()
        if isinstance(view, ChoiceList):
            view.title = (
                f"Select a City in {state.group}" if state.in_secondary else LIST_TITLES[self.shape]
            )
        view.show(state.view, state.cursor)

        if state.width:
            view.styles.max_width = state.width

        status = self.query_one("#status-line", Static)
        style = self.picker_theme.error_style if state.status.startswith(ERROR_PREFIX) else self.picker_theme.status_style
        status.update(Text(state.status, style=style))

        if self.shape is DisplayShape.TABLE:
            target = view if state.table_focused else self.query_one("#filter-input", Input)
        else:
            target = view
        if self.focused is not target:
            target.focus()

    # Input handlers

    def on_resize(self, event: events.Resize) -> None:
        self.send_event(Resize(event.size.width))

    @on(Input.Changed, "#filter-input")
    def on_filter_changed(self, event: Input.Changed) -> None:
        self.send_event(FilterChanged(event.value))

    @on(ExitNodeTable.RowHighlighted)
    def on_row_highlighted(self, event: ExitNodeTable.RowHighlighted) -> None:
        # Stale once the table has moved on.
        if event.cursor_row != event.data_table.cursor_row:
            return
        self.send_event(HighlightRow(event.cursor_row))

    @on(ExitNodeTable.RowSelected)
    def on_row_selected(self, event: ExitNodeTable.RowSelected) -> None:
        self.send_event(HighlightRow(event.cursor_row))
        self.send_event(Confirm())

    def action_quit_picker(self) -> None:
        self.send_event(Quit())

    def action_confirm(self) -> None:
        self.send_event(Confirm())

    def action_move(self, delta: int) -> None:
        self.send_event(MoveCursor(delta))

    def action_toggle_focus(self) -> None:
        self.send_event(ToggleFocus())

    def action_escape(self) -> None:
        if self.state.view_state is ViewState.BROWSING_SECONDARY:
            self.send_event(Back())
        else:
            self.send_event(ToggleFocus())

    def action_clear_selection(self) -> None:
        self.send_event(ClearSelection())
