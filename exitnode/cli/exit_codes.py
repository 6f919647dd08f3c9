"""Standardized exit codes for the Exit Node Picker CLI.

Maps the application's exceptions onto process exit codes and prints a
consistent Rich-formatted message with a suggestion before exiting.
"""

from contextlib import contextmanager
from enum import IntEnum
from typing import Any

import typer
from rich.console import Console

console = Console(stderr=True)


class ExitCode(IntEnum):
    """Exit codes for the Exit Node Picker CLI."""

    SUCCESS = 0
    GENERAL_ERROR = 1

    CONFIG_ERROR = 33

    # Command errors
    SOURCE_UNAVAILABLE = 65
    APPLY_FAILED = 66
    COMMAND_ERROR = 67

    # Environment errors
    ENVIRONMENT_UNSUPPORTED = 69
    TERMINAL_SPAWN_FAILED = 70

    # Special exit codes
    KEYBOARD_INTERRUPT = 130


class ExitCodeManager:
    """Manages exit codes and provides utilities for consistent error handling."""

    def __init__(self):
        """Initialize exit code manager."""
        self._exit_code_descriptions = {
            ExitCode.SUCCESS: "Operation completed successfully",
            ExitCode.GENERAL_ERROR: "General error occurred",
            ExitCode.CONFIG_ERROR: "Configuration error",
            ExitCode.SOURCE_UNAVAILABLE: "Exit node list unavailable",
            ExitCode.APPLY_FAILED: "Failed to set exit node",
            ExitCode.COMMAND_ERROR: "External command failed",
            ExitCode.ENVIRONMENT_UNSUPPORTED: "Unsupported platform",
            ExitCode.TERMINAL_SPAWN_FAILED: "Failed to open new terminal",
            ExitCode.KEYBOARD_INTERRUPT: "Operation cancelled by user",
        }

        self._suggestions = {
            ExitCode.SOURCE_UNAVAILABLE: "Ensure tailscale is installed, running and logged in",
            ExitCode.APPLY_FAILED: "Check that the exit node is online and allowed for this device",
            ExitCode.CONFIG_ERROR: "Check the EXITNODE_* environment variables and .env file",
            ExitCode.ENVIRONMENT_UNSUPPORTED: "Run without --new-window on this platform",
            ExitCode.TERMINAL_SPAWN_FAILED: "Ensure a terminal emulator is installed or run without --new-window",
        }

        self._error_mapping = {
            "CONFIG_ERROR": ExitCode.CONFIG_ERROR,
            "SOURCE_UNAVAILABLE": ExitCode.SOURCE_UNAVAILABLE,
            "APPLY_FAILED": ExitCode.APPLY_FAILED,
            "COMMAND_ERROR": ExitCode.COMMAND_ERROR,
            "ENVIRONMENT_UNSUPPORTED": ExitCode.ENVIRONMENT_UNSUPPORTED,
            "TERMINAL_SPAWN_FAILED": ExitCode.TERMINAL_SPAWN_FAILED,
        }

    def get_description(self, code: ExitCode) -> str:
        """Get human-readable description for exit code."""
        return self._exit_code_descriptions.get(code, f"Unknown error (code {code})")

    def get_suggestion(self, code: ExitCode) -> str:
        """Get suggestion for resolving the error."""
        return self._suggestions.get(code, "")

    def exit_with_code(
        self,
        code: ExitCode,
        message: str = "",
        details: dict[str, Any] | None = None,
        suggestion: str = "",
        show_details: bool = False
    ) -> None:
        """Exit the application with the specified code and message."""
        if code == ExitCode.SUCCESS:
            if message:
                console.print(f"[green]✓ {message}[/green]")
        else:
            error_msg = message or self.get_description(code)
            console.print(f"[red]✗ {error_msg}[/red]")

            suggestion = suggestion or self.get_suggestion(code)
            if suggestion:
                console.print(f"[yellow]💡 {suggestion}[/yellow]")

            if show_details and details:
                console.print("[dim]Details:[/dim]")
                for key, value in details.items():
                    console.print(f"  {key}: {value}")

        raise typer.Exit(code.value)

    def handle_exception(self, exception: Exception, context: str = "") -> ExitCode:
        """Map exceptions to appropriate exit codes."""
        from exitnode.core.exceptions import ExitNodeError

        if isinstance(exception, KeyboardInterrupt):
            return ExitCode.KEYBOARD_INTERRUPT

        if isinstance(exception, ExitNodeError):
            return self._error_mapping.get(exception.error_code, ExitCode.GENERAL_ERROR)

        if isinstance(exception, ValueError):
            return ExitCode.CONFIG_ERROR

        return ExitCode.GENERAL_ERROR


# Global exit code manager instance
exit_manager = ExitCodeManager()


@contextmanager
def handle_cli_errors(operation: str = "Operation", show_details: bool = False):
    """Context manager for handling CLI errors with proper exit codes."""
    from exitnode.core.exceptions import ExitNodeError

    try:
        yield
    except typer.Exit:
        raise
    except KeyboardInterrupt:
        exit_manager.exit_with_code(
            ExitCode.KEYBOARD_INTERRUPT,
            f"{operation} cancelled by user"
        )
    except Exception as e:
        code = exit_manager.handle_exception(e, operation)

        details = None
        if isinstance(e, ExitNodeError) and e.details:
            details = dict(e.details)
        elif show_details:
            details = {
                "exception_type": type(e).__name__,
                "exception_message": str(e),
                "operation": operation
            }

        message = e.message if isinstance(e, ExitNodeError) else f"{operation} failed: {e}"
        exit_manager.exit_with_code(
            code,
            message,
            details=details,
            show_details=show_details
        )


def success(message: str = "") -> None:
    """Exit with success code and optional message."""
    exit_manager.exit_with_code(ExitCode.SUCCESS, message)
