"""Base service class.
"""

from typing import Optional

from exitnode.core.config import Settings, settings as default_settings
from exitnode.services.command_runner import CommandRunner
from exitnode.utils.logger import get_logger


class BaseService:
    """Base class for services that shell out to external commands."""

    def __init__(
        self,
        runner: Optional[CommandRunner] = None,
        settings: Optional[Settings] = None,
    ):
        """Initialize service.

        Args:
            runner: Command runner. A default one using the configured
                timeout is created when not provided.
            settings: Settings instance, the global one by default.
        """
        self.settings = settings or default_settings
        self.runner = runner or CommandRunner(timeout=self.settings.command_timeout)
        self.logger = get_logger(self.__class__.__name__)
