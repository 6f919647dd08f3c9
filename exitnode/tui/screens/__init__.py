"""TUI screens for Exit Node Picker.
"""

from .base import BaseScreen
from .picker import PickerScreen

__all__ = [
    "BaseScreen",
    "PickerScreen",
]
