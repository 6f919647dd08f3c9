"""
Custom exceptions for Exit Node Picker.
"""

from typing import Any, Dict, Optional, Sequence


class ExitNodeError(Exception):
    """Base exception for all Exit Node Picker errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


class ConfigurationError(ExitNodeError):
    """Configuration related errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code="CONFIG_ERROR", details=details)


class CommandError(ExitNodeError):
    """An external command could not be run or exited non-zero."""

    def __init__(
        self,
        message: str,
        command: Sequence[str] = (),
        return_code: Optional[int] = None,
        stderr: str = "",
        error_code: Optional[str] = None,
    ):
        super().__init__(
            message,
            error_code=error_code or "COMMAND_ERROR",
            details={
                "command": " ".join(command),
                "return_code": return_code,
                "stderr": stderr.strip(),
            },
        )
        self.command = tuple(command)
        self.return_code = return_code
        self.stderr = stderr


class SourceUnavailableError(CommandError):
    """The exit node listing command is missing, failed or unreadable."""

    def __init__(
        self,
        reason: str,
        command: Sequence[str] = (),
        return_code: Optional[int] = None,
        stderr: str = "",
    ):
        super().__init__(
            f"Exit node list unavailable: {reason}",
            command=command,
            return_code=return_code,
            stderr=stderr,
            error_code="SOURCE_UNAVAILABLE",
        )


class ApplyFailedError(CommandError):
    """The set command did not accept the chosen exit node."""

    def __init__(
        self,
        target: str,
        reason: str,
        command: Sequence[str] = (),
        return_code: Optional[int] = None,
        stderr: str = "",
    ):
        label = target or "<none>"
        super().__init__(
            f"Failed to set exit node '{label}': {reason}",
            command=command,
            return_code=return_code,
            stderr=stderr,
            error_code="APPLY_FAILED",
        )
        self.target = target
        self.reason = reason


class EnvironmentUnsupportedError(ExitNodeError):
    """No known way to spawn an auxiliary terminal on this platform."""

    def __init__(self, platform_name: str):
        super().__init__(
            f"Unsupported platform for opening a terminal: {platform_name}",
            error_code="ENVIRONMENT_UNSUPPORTED",
            details={"platform": platform_name},
        )


class TerminalSpawnError(CommandError):
    """The auxiliary terminal could not be started."""

    def __init__(self, reason: str, command: Sequence[str] = (), return_code: Optional[int] = None):
        super().__init__(
            f"Failed to open new terminal: {reason}",
            command=command,
            return_code=return_code,
            error_code="TERMINAL_SPAWN_FAILED",
        )
