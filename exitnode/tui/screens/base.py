"""Base screen class for the Exit Node Picker TUI.
"""

from typing import Optional

from textual.containers import Horizontal
from textual.screen import Screen
from textual.widgets import Static

from exitnode.core.config import Settings, settings as default_settings
from exitnode.services.exit_node_setter import ExitNodeSetter
from exitnode.services.exit_node_source import ExitNodeSource


class BaseScreen(Screen):
    """Base screen with common functionality."""

    def __init__(
        self,
        source: Optional[ExitNodeSource] = None,
        setter: Optional[ExitNodeSetter] = None,
        settings: Optional[Settings] = None,
        name: Optional[str] = None,
    ):
        """Initialize base screen."""
        super().__init__(name=name)
        self.config = settings or default_settings
        self._source = source
        self._setter = setter

    @property
    def source(self) -> ExitNodeSource:
        """Get exit node source instance."""
        if self._source is None:
            self._source = ExitNodeSource(settings=self.config)
        return self._source

    @property
    def setter(self) -> ExitNodeSetter:
        """Get exit node setter instance."""
        if self._setter is None:
            self._setter = ExitNodeSetter(settings=self.config)
        return self._setter

    def compose_header(self, title: str, subtitle: Optional[str] = None):
        """Create a standard header for screens."""
        widgets = [Static(title, classes="screen-title")]
        if subtitle:
            widgets.append(Static(subtitle, classes="screen-subtitle"))

        yield Horizontal(*widgets, classes="screen-header")

    def show_error(self, message: str) -> None:
        """Show error notification."""
        self.app.notify(message, severity="error", timeout=5)

    def show_success(self, message: str) -> None:
        """Show success notification."""
        self.app.notify(message, severity="information", timeout=3)
