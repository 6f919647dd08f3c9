"""
Applying an exit node through ``tailscale set``.
"""

from typing import Optional, Tuple

from exitnode.core.config import EXIT_NODE_FLAG, SET_COMMAND, Settings
from exitnode.core.exceptions import ApplyFailedError, CommandError
from exitnode.core.models import ApplyResult
from exitnode.services.base import BaseService
from exitnode.services.command_runner import CommandRunner


class ExitNodeSetter(BaseService):
    """Sets or clears the tailscale exit node."""

    def __init__(
        self,
        runner: Optional[CommandRunner] = None,
        settings: Optional[Settings] = None,
    ):
        super().__init__(runner=runner, settings=settings)

    @staticmethod
    def build_command(target: str) -> Tuple[str, ...]:
        """Command line for setting ``target``; empty target unsets."""
        return (*SET_COMMAND, f"{EXIT_NODE_FLAG}{target}")

    def apply(self, target: str) -> ApplyResult:
        """
        Set the exit node.

        No retry is attempted; the caller decides whether to try again.

        Args:
            target: Exit node IP or name, empty string to unset

        Returns:
            ApplyResult describing the success

        Raises:
            ApplyFailedError: If the command is missing, times out or
                exits non-zero
        """
        command = self.build_command(target)

        try:
            result = self.runner.run(command)
        except CommandError as e:
            self.logger.error(e.message)
            raise ApplyFailedError(target, e.message, command=command) from e

        if not result.ok:
            reason = result.stderr.strip() or f"exit status {result.return_code}"
            self.logger.error(f"tailscale set failed for '{target}': {reason}")
            raise ApplyFailedError(
                target,
                reason,
                command=command,
                return_code=result.return_code,
                stderr=result.stderr,
            )

        message = f"Exit node set to {target}" if target else "Exit node cleared"
        self.logger.info(message)
        return ApplyResult(
            target=target,
            success=True,
            message=message,
            return_code=result.return_code,
        )

    def clear(self) -> ApplyResult:
        """Unset the exit node."""
        return self.apply("")
