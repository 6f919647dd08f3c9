"""Custom widgets for Exit Node Picker TUI.
"""

from .choice_list import ChoiceList
from .exit_node_table import ExitNodeTable

__all__ = [
    "ChoiceList",
    "ExitNodeTable",
]
