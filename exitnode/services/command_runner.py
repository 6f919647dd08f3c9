"""
Synchronous execution of external commands.
"""

import subprocess
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from exitnode.core.exceptions import CommandError
from exitnode.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Captured output of a finished command."""

    command: Tuple[str, ...]
    return_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.return_code == 0


class CommandRunner:
    """Run a command to completion and capture its output.

    Every external program the application touches goes through here so
    tests can swap in a fake. ``subprocess.run`` kills the child when the
    wait is interrupted, so Ctrl+C also stops an in-flight command.
    """

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout

    def run(self, command: Sequence[str], capture: bool = True) -> CommandResult:
        """
        Run a command and wait for it.

        Args:
            command: Program and arguments
            capture: Capture stdout/stderr as text. When False the child
                inherits the parent's streams.

        Returns:
            CommandResult, also for non-zero exits

        Raises:
            CommandError: If the program is missing, cannot be executed,
                times out or writes undecodable output
        """
        command = tuple(command)
        logger.debug(f"Running: {' '.join(command)}")

        try:
            completed = subprocess.run(
                command,
                check=False,
                capture_output=capture,
                text=capture,
                timeout=self.timeout,
            )
        except FileNotFoundError:
            raise CommandError(f"Command not found: {command[0]}", command=command)
        except PermissionError as e:
            raise CommandError(f"Cannot execute {command[0]}: {e}", command=command)
        except subprocess.TimeoutExpired:
            raise CommandError(
                f"{command[0]} timed out after {self.timeout} seconds",
                command=command,
            )
        except UnicodeDecodeError as e:
            raise CommandError(f"Unreadable output from {command[0]}: {e}", command=command)

        result = CommandResult(
            command=command,
            return_code=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
        logger.debug(f"{command[0]} exited with {result.return_code}")
        return result
