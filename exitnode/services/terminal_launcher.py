"""
Opening an auxiliary terminal window to host the session.
"""

import platform
from typing import Dict, Optional, Tuple

from exitnode.core.config import Settings
from exitnode.core.exceptions import CommandError, EnvironmentUnsupportedError, TerminalSpawnError
from exitnode.services.base import BaseService
from exitnode.services.command_runner import CommandRunner

UNIX_TERMINAL = (
    "x-terminal-emulator",
    "-e",
    "bash -c 'echo Press Enter to continue; read line'",
)

TERMINAL_COMMANDS: Dict[str, Tuple[str, ...]] = {
    "windows": ("cmd", "/k", "pause"),
    "darwin": ("open", "-a", "iTerm"),
    "linux": UNIX_TERMINAL,
    "freebsd": UNIX_TERMINAL,
    "netbsd": UNIX_TERMINAL,
    "openbsd": UNIX_TERMINAL,
}


class TerminalLauncher(BaseService):
    """Spawns a new terminal window for the host platform."""

    def __init__(
        self,
        runner: Optional[CommandRunner] = None,
        settings: Optional[Settings] = None,
        platform_name: Optional[str] = None,
    ):
        # The window stays open until the user dismisses it, so no timeout.
        super().__init__(runner=runner or CommandRunner(timeout=None), settings=settings)
        self.platform_name = (platform_name or platform.system()).lower()

    def command(self) -> Tuple[str, ...]:
        """
        Terminal command for the current platform.

        Raises:
            EnvironmentUnsupportedError: If the platform is unknown
        """
        try:
            return TERMINAL_COMMANDS[self.platform_name]
        except KeyError:
            raise EnvironmentUnsupportedError(self.platform_name)

    def open(self) -> None:
        """
        Open the terminal and wait for it to return.

        Raises:
            EnvironmentUnsupportedError: If the platform is unknown
            TerminalSpawnError: If the terminal program fails
        """
        command = self.command()
        self.logger.info(f"Opening terminal: {' '.join(command)}")

        try:
            result = self.runner.run(command, capture=False)
        except CommandError as e:
            raise TerminalSpawnError(e.message, command=command) from e

        if not result.ok:
            raise TerminalSpawnError(
                f"exit status {result.return_code}",
                command=command,
                return_code=result.return_code,
            )
