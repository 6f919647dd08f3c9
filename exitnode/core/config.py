"""
Configuration management using Pydantic Settings.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# External command names and arguments are fixed.
TAILSCALE_BINARY = "tailscale"
LIST_COMMAND = (TAILSCALE_BINARY, "exit-node", "list")
SET_COMMAND = (TAILSCALE_BINARY, "set")
EXIT_NODE_FLAG = "--exit-node="


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Environment variables are prefixed with EXITNODE_.
    For example: EXITNODE_DEBUG=true, EXITNODE_QUIT_DELAY=0
    """

    # Application settings
    debug: bool = False
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    # External commands
    command_timeout: float = Field(default=30.0, gt=0)

    # Parsing
    min_fields: int = Field(default=4, ge=4)

    # TUI settings
    quit_delay: float = Field(default=1.0, ge=0)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="EXITNODE_",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v = v.upper()
        if v not in valid_levels:
            raise ValueError(f"Invalid log level. Must be one of: {', '.join(valid_levels)}")
        return v

    @field_validator("log_file")
    @classmethod
    def expand_log_file(cls, v: Optional[Path]) -> Optional[Path]:
        """Expand user home in the log file path."""
        if v is None:
            return v
        return v.expanduser()


# Global settings instance
settings = Settings()


class RuntimeConfig(BaseSettings):
    """Runtime configuration that can be modified during execution."""

    quiet: bool = False
    output_format: str = "table"
    no_color: bool = False

    model_config = SettingsConfigDict(
        validate_default=True,
        validate_assignment=True,
    )

    @field_validator("output_format")
    @classmethod
    def validate_output_format(cls, v: str) -> str:
        """Validate output format."""
        valid_formats = ["table", "json", "yaml", "plain"]
        if v not in valid_formats:
            raise ValueError(f"Invalid output format. Must be one of: {', '.join(valid_formats)}")
        return v


runtime_config = RuntimeConfig()
