"""Services wrapping the external tailscale command."""

from .command_runner import CommandResult, CommandRunner
from .exit_node_setter import ExitNodeSetter
from .exit_node_source import ExitNodeSource, parse_exit_node_list, parse_selected_line
from .terminal_launcher import TerminalLauncher

__all__ = [
    "CommandResult",
    "CommandRunner",
    "ExitNodeSetter",
    "ExitNodeSource",
    "TerminalLauncher",
    "parse_exit_node_list",
    "parse_selected_line",
]
