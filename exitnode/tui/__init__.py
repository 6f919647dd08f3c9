"""Exit Node Picker Terminal User Interface (TUI).

Built with Textual.
"""

from .app import ExitNodePickerApp

__all__ = ["ExitNodePickerApp"]
