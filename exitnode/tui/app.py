"""Main Textual application for the Exit Node Picker TUI.
"""

from typing import Optional, Sequence

from textual.app import App
from textual.binding import Binding

from exitnode.core.config import Settings
from exitnode.core.models import AppliedChoice, DisplayShape, ExitNode
from exitnode.services.exit_node_setter import ExitNodeSetter
from exitnode.services.exit_node_source import ExitNodeSource
from exitnode.tui.screens.picker import PickerScreen
from exitnode.tui.theme import DEFAULT_THEME, PickerTheme


class ExitNodePickerApp(App[Optional[AppliedChoice]]):
    """Exit node picker application.

    ``run()`` returns the applied choice, or None when nothing was applied.
    """

    TITLE = "Exit Node Picker"

    BINDINGS = [
        Binding("ctrl+c", "screen.quit_picker", "Quit", show=False, priority=True),
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
        """Initialize the application.

        Args:
            rows: Exit nodes loaded at startup, may be empty
            shape: Flat list, country/city drill-down or filterable table
            current: Label of the active exit node, if known
            source: Listing service used to refresh the current selection
            setter: Service that applies the choice
            settings: Settings, the global instance by default
            theme: Styles for the views
        """
        super().__init__()
        self.rows = tuple(rows)
        self.shape = shape
        self.current = current
        self.source = source
        self.setter = setter
        self.picker_settings = settings
        self.picker_theme = theme

    def on_mount(self) -> None:
        """Called when app starts."""
        self.push_screen(
            PickerScreen(
                self.rows,
                shape=self.shape,
                current=self.current,
                source=self.source,
                setter=self.setter,
                settings=self.picker_settings,
                theme=self.picker_theme,
            )
        )


def run_tui(
    rows: Sequence[ExitNode],
    shape: DisplayShape = DisplayShape.TABLE,
    current: str = "",
    source: Optional[ExitNodeSource] = None,
    setter: Optional[ExitNodeSetter] = None,
    settings: Optional[Settings] = None,
) -> Optional[AppliedChoice]:
    """Run the TUI application on the alternate screen."""
    app = ExitNodePickerApp(
        rows,
        shape=shape,
        current=current,
        source=source,
        setter=setter,
        settings=settings,
    )
    return app.run()
