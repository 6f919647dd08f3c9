"""
Logging configuration for Exit Node Picker.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from exitnode.core.config import settings


# Console for rich output; stderr keeps stdout clean for formatted results
console = Console(stderr=True)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[Path] = None,
    rich_output: bool = True,
    console_output: bool = True,
) -> None:
    """
    Configure logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file (optional, defaults to settings.log_file)
        rich_output: Use rich formatting for console output
        console_output: Attach a console handler at all. Disabled while the
            TUI owns the terminal.
    """
    level = log_level or settings.log_level
    log_file = log_file or settings.log_file

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if console_output:
        if rich_output:
            console_handler = RichHandler(
                console=console,
                show_time=True,
                show_path=settings.debug,
                markup=False,
                rich_tracebacks=True,
                tracebacks_show_locals=settings.debug,
            )
        else:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(logging.Formatter(LOG_FORMAT))

        console_handler.setLevel(level)
        root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(file_handler)

    if not root_logger.handlers:
        root_logger.addHandler(logging.NullHandler())

    logging.getLogger("asyncio").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)

